"""
Setup script for prim3d.

Usage:
    pip install -e .           # Editable install
    pip install -e ".[dev]"    # With dev dependencies (pytest)

The package lives under src/prim3d. numpy is required at runtime for
normal matrices and the benchmark scene.
"""

from setuptools import setup, find_packages


setup(
    name='prim3d',
    version='0.1.0',
    description='Ray and plane queries against spheres, boxes, triangles and segments',
    python_requires='>=3.9',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=['numpy'],
    extras_require={'dev': ['pytest']},
)
