"""Genome Analyzer.

Parses FASTA, GenBank and raw nucleotide text into canonical genome records,
computes composition metrics and produces a deterministic placeholder trait
analysis for each genome.
"""

__version__ = "1.0.0"
__author__ = "Austin P. Morrissey"

from .exceptions import DecodeError, GenomeAnalyzerError, ValidationError
from .models import AnalysisResult, GenomeFile, GenomeMetadata, GenomeRecord, TraitScore

__all__ = [
    "AnalysisResult",
    "DecodeError",
    "GenomeAnalyzerError",
    "GenomeFile",
    "GenomeMetadata",
    "GenomeRecord",
    "TraitScore",
    "ValidationError",
]
