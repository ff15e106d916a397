"""Input parsing for FASTA, GenBank and raw sequence files."""

import re
from typing import Iterable, List, Optional

from Bio.Data.IUPACData import unambiguous_dna_letters

from .exceptions import DecodeError
from .logging_config import get_logger
from .models import Dialect, GenomeFile, GenomeMetadata, ParsedSequence

logger = get_logger('input_parser')

# A, C, G, T plus the unknown-base placeholder N
CANONICAL_ALPHABET = frozenset(unambiguous_dna_letters.upper() + 'N')

_NON_CANONICAL = re.compile('[^' + ''.join(sorted(CANONICAL_ALPHABET)) + ']')
_NON_LETTER = re.compile('[^A-Za-z]')
_LINE_SPLIT = re.compile(r'\r?\n')

DIALECT_EXTENSIONS = {
    'fasta': Dialect.FASTA,
    'fa': Dialect.FASTA,
    'fas': Dialect.FASTA,
    'fna': Dialect.FASTA,
    'gb': Dialect.GENBANK,
    'gbk': Dialect.GENBANK,
}

ACCEPTED_EXTENSIONS = ('txt',) + tuple(DIALECT_EXTENSIONS)


def normalize_alphabet(text: str) -> str:
    """Keep only A, C, G, T and N (case-insensitive), uppercased, in order."""
    return _NON_CANONICAL.sub('', text.upper())


def detect_dialect(filename: str) -> Dialect:
    """Classify a filename by the text after its final dot."""
    extension = filename.lower().rsplit('.', 1)[-1]
    return DIALECT_EXTENSIONS.get(extension, Dialect.RAW)


def split_lines(text: str) -> List[str]:
    return _LINE_SPLIT.split(text)


class FastaParser:
    """Parser for FASTA text.

    Every ``>`` line is a candidate organism name; the last non-empty one
    wins. All other lines are trimmed and joined into the sequence.
    """

    dialect = Dialect.FASTA

    def parse(self, text: str) -> ParsedSequence:
        organism = None
        chunks = []

        for line in split_lines(text):
            if line.startswith('>'):
                header = line[1:].strip()
                if header:
                    organism = header
            else:
                chunks.append(line.strip())

        return ParsedSequence(
            sequence=normalize_alphabet(''.join(chunks)),
            metadata=GenomeMetadata(organism=organism)
        )


class GenBankParser:
    """Line-oriented parser for GenBank flat files.

    Moves through HEADER, ORIGIN and DONE states. DEFINITION and ORGANISM
    are fixed-width fields; the sequence body runs from the line after
    ORIGIN up to the first ``//``, so only the first record of a
    multi-record file is read.
    """

    dialect = Dialect.GENBANK

    HEADER = 'header'
    ORIGIN = 'origin'
    DONE = 'done'

    DEFINITION_OFFSET = 10
    ORGANISM_OFFSET = 8

    def parse(self, text: str) -> ParsedSequence:
        state = self.HEADER
        organism = None
        definition = None
        chunks = []

        for line in split_lines(text):
            if line.startswith('DEFINITION'):
                definition = line[self.DEFINITION_OFFSET:].strip()
            elif line.startswith('ORGANISM'):
                organism = line[self.ORGANISM_OFFSET:].strip()
            elif line.startswith('ORIGIN'):
                state = self.ORIGIN
            elif line.startswith('//'):
                state = self.DONE
                break
            elif state == self.ORIGIN:
                # Strips position numbers and block spacing
                chunks.append(_NON_LETTER.sub('', line).upper())

        logger.debug(f"GenBank parse finished in state {state}")

        return ParsedSequence(
            sequence=normalize_alphabet(''.join(chunks)),
            metadata=GenomeMetadata(organism=organism, definition=definition)
        )


class RawParser:
    """Fallback parser: the whole text is treated as sequence."""

    dialect = Dialect.RAW

    def parse(self, text: str) -> ParsedSequence:
        return ParsedSequence(sequence=normalize_alphabet(text))


PARSERS = {
    Dialect.FASTA: FastaParser(),
    Dialect.GENBANK: GenBankParser(),
    Dialect.RAW: RawParser(),
}

_missing = set(Dialect) - set(PARSERS)
if _missing:
    raise RuntimeError(f"No parser registered for dialects: {sorted(d.value for d in _missing)}")


class InputParser:
    """Decodes uploaded files and dispatches them to the dialect parsers."""

    # Encodings tried in order; strict decoding, so undecodable bytes fail
    ENCODINGS = ['utf-8', 'utf-8-sig']

    def __init__(self, encodings: Optional[Iterable[str]] = None):
        """
        Initialize the parser.

        Args:
            encodings: Encodings to try when decoding file content
        """
        self.encodings = list(encodings) if encodings else list(self.ENCODINGS)

    def decode(self, file: GenomeFile) -> str:
        """
        Decode a file's bytes into text.

        Raises:
            DecodeError: If no configured encoding can decode the content
        """
        data = file.read_bytes()

        encodings = self.encodings
        if data.startswith(b'\xef\xbb\xbf'):  # UTF-8 BOM
            encodings = ['utf-8-sig'] + [e for e in encodings if e != 'utf-8-sig']

        for encoding in encodings:
            try:
                text = data.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue
            logger.debug(f"Decoded {file.name} as {encoding}")
            return text

        raise DecodeError(file.name, encodings)

    def parse_text(self, text: str, filename: str) -> ParsedSequence:
        """Parse already-decoded text using the dialect implied by the filename."""
        dialect = detect_dialect(filename)
        parsed = PARSERS[dialect].parse(text)

        logger.debug(
            f"Parsed {filename} as {dialect.value}: {len(parsed.sequence)} symbols"
        )
        return parsed

    def parse_file(self, file: GenomeFile) -> ParsedSequence:
        """Decode and parse an uploaded file."""
        return self.parse_text(self.decode(file), file.name)
