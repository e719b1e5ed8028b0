"""Setup script for KosmoKorn package."""

from setuptools import setup, find_packages

setup(
    name="kosmokorn",
    version="0.1.0",
    description="A deterministic virtual pet planet that evolves day by day",
    packages=find_packages(include=['src', 'src.*']),
    package_data={
        "": ["*.md", "*.txt"],
    },
    include_package_data=True,
    install_requires=[
        "numpy",
        "matplotlib",
        "opensimplex",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Topic :: Games/Entertainment :: Simulation",
    ],
    python_requires=">=3.8",
)
