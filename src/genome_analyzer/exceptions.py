"""Exceptions raised by the genome analysis pipeline."""

from typing import Optional


class GenomeAnalyzerError(Exception):
    """Base exception for the genome analyzer."""

    def __init__(self, message: str, filename: Optional[str] = None):
        self.message = message
        self.filename = filename
        super().__init__(self.message)


class ValidationError(GenomeAnalyzerError):
    """Raised when a parsed sequence is too short to build a genome record."""

    def __init__(self, message: str = "sequence too short or invalid",
                 filename: Optional[str] = None):
        super().__init__(message, filename)


class DecodeError(GenomeAnalyzerError):
    """Raised when a file's bytes cannot be decoded as text."""

    def __init__(self, filename: str, encodings=None):
        self.encodings = list(encodings or [])
        tried = ", ".join(self.encodings) or "no encodings"
        super().__init__(f"Could not decode {filename} as text (tried: {tried})", filename)
