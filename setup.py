from setuptools import find_packages, setup

setup(
    name="fem-cell",
    version="0.1.0",
    description="Topology descriptors for finite element cells (HEX27)",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pyvista",
        "meshio",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
