"""Data models for the genome analyzer."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union


class Dialect(Enum):
    """Text dialects a genome file can be written in."""

    FASTA = "fasta"
    GENBANK = "genbank"
    RAW = "raw"


@dataclass(frozen=True)
class GenomeMetadata:
    """Dialect-dependent annotations captured while parsing."""

    organism: Optional[str] = None
    definition: Optional[str] = None

    def to_dict(self) -> dict:
        """Return only the fields that were captured."""
        data = {}
        if self.organism is not None:
            data['organism'] = self.organism
        if self.definition is not None:
            data['definition'] = self.definition
        return data


@dataclass(frozen=True)
class ParsedSequence:
    """Normalized sequence and metadata returned by a dialect parser."""

    sequence: str
    metadata: GenomeMetadata = field(default_factory=GenomeMetadata)


@dataclass(frozen=True)
class GenomeRecord:
    """A validated genome built from one uploaded file."""

    id: str
    name: str
    sequence: str
    size: int
    gc_content: float
    metadata: GenomeMetadata
    uploaded_at: datetime

    @property
    def organism(self) -> Optional[str]:
        return self.metadata.organism

    @property
    def definition(self) -> Optional[str]:
        return self.metadata.definition


@dataclass(frozen=True)
class TraitScore:
    """Placeholder score for a single trait."""

    name: str
    score: int

    def to_dict(self) -> dict:
        return {'name': self.name, 'score': self.score}


@dataclass(frozen=True)
class AnalysisResult:
    """Deterministic analysis derived from a genome sequence."""

    traits: Tuple[TraitScore, ...]
    recommendations: Tuple[str, ...]

    def score_for(self, trait_name: str) -> Optional[int]:
        """Get the score of a trait by name."""
        for trait in self.traits:
            if trait.name == trait_name:
                return trait.score
        return None


@dataclass(frozen=True)
class GenomeFile:
    """An uploaded file: a name plus its raw content."""

    name: str
    data: bytes

    def read_bytes(self) -> bytes:
        return self.data

    @classmethod
    def from_text(cls, name: str, text: str, encoding: str = 'utf-8') -> 'GenomeFile':
        """Create a file from already-decoded text."""
        return cls(name=name, data=text.encode(encoding))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'GenomeFile':
        """Read a file from disk, named by its basename."""
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())


@dataclass(frozen=True)
class PathGenomeFile:
    """A file on disk whose content is read only when processed."""

    path: Path

    @property
    def name(self) -> str:
        return Path(self.path).name

    def read_bytes(self) -> bytes:
        return Path(self.path).read_bytes()
