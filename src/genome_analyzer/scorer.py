"""Deterministic placeholder analysis of genome sequences.

The scores are not biological: they are derived from a 32-bit polynomial
hash of the sequence so that identical sequences always produce identical
results, in any process.
"""

from typing import Sequence, Tuple

from .logging_config import get_logger
from .models import AnalysisResult, GenomeRecord, TraitScore

logger = get_logger('scorer')

UINT32_MASK = 0xFFFFFFFF
HASH_MULTIPLIER = 31
SCORE_MODULUS = 101
BITS_PER_TRAIT = 8

# Each trait reads one byte of the 32-bit hash, so at most 4 traits fit
MAX_TRAITS = 32 // BITS_PER_TRAIT

TRAIT_NAMES = ("Height", "Disease Resistance", "Metabolism", "Longevity")

RECOMMENDATIONS = (
    "Consult a specialist for tailored interpretation",
    "Combine genomic insights with clinical data",
)


def sequence_hash(sequence: str) -> int:
    """Unsigned 32-bit polynomial hash: ``h = h * 31 + ord(c) (mod 2**32)``."""
    h = 0
    for char in sequence:
        h = (h * HASH_MULTIPLIER + ord(char)) & UINT32_MASK
    return h


class DeterministicScorer:
    """Derives trait scores and recommendations from a sequence hash."""

    def __init__(self,
                 trait_names: Sequence[str] = TRAIT_NAMES,
                 recommendations: Sequence[str] = RECOMMENDATIONS):
        if len(trait_names) > MAX_TRAITS:
            raise ValueError(
                f"At most {MAX_TRAITS} traits fit in a 32-bit hash, got {len(trait_names)}"
            )
        self.trait_names: Tuple[str, ...] = tuple(trait_names)
        self.recommendations: Tuple[str, ...] = tuple(recommendations)

    def score_sequence(self, sequence: str) -> AnalysisResult:
        h = sequence_hash(sequence)
        traits = tuple(
            TraitScore(name=name, score=(h >> (i * BITS_PER_TRAIT)) % SCORE_MODULUS)
            for i, name in enumerate(self.trait_names)
        )
        return AnalysisResult(traits=traits, recommendations=self.recommendations)

    def analyze(self, record: GenomeRecord) -> AnalysisResult:
        """Analyze a finished genome record."""
        result = self.score_sequence(record.sequence)
        logger.debug(
            f"Scored {record.name}: " +
            ", ".join(f"{t.name}={t.score}" for t in result.traits)
        )
        return result
