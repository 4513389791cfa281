"""
fem_cell: topology descriptors for finite element cell shapes.
"""

__version__ = "0.1.0"
