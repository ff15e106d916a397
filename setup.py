"""
Genome Analyzer - Parse, normalize and score nucleotide sequence files

Reads FASTA, GenBank and raw sequence text into canonical genome records
with size and GC metrics and a deterministic placeholder trait analysis.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="genome-analyzer",
    version="1.0.0",
    author="Austin P. Morrissey",
    author_email="austin.morrissey@proton.me",
    description="Parse, normalize and score FASTA, GenBank and raw sequence files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "biopython>=1.79",
        "click>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=21.0",
            "mypy>=0.900",
        ],
    },
    entry_points={
        "console_scripts": [
            "genome-analyzer=genome_analyzer.cli:main",
        ],
    },
)
