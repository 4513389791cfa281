from .HEXA27 import HEXA27, HEXA27_SHAPE
from .refinement import RefinementEmbedding, embedding_matrix
from .shape import Order, ShapeDescriptor, get_descriptor, register_descriptor

__all__ = [
    "ShapeDescriptor",
    "Order",
    "get_descriptor",
    "register_descriptor",
    "HEXA27",
    "HEXA27_SHAPE",
    "RefinementEmbedding",
    "embedding_matrix",
]
