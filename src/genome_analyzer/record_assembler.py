"""Validation and assembly of genome records from parsed sequences."""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional

from .exceptions import ValidationError
from .identifiers import TimestampIdGenerator
from .input_parser import InputParser
from .logging_config import get_logger
from .models import GenomeFile, GenomeRecord, ParsedSequence

logger = get_logger('record_assembler')

MIN_SEQUENCE_LENGTH = 10

_TWO_PLACES = Decimal('0.01')


def strip_extension(filename: str) -> str:
    """Remove the final ``.ext`` suffix from a filename."""
    stem, dot, extension = filename.rpartition('.')
    if not dot or not extension:
        return filename
    return stem


def gc_content(sequence: str) -> float:
    """Percentage of G and C symbols, rounded half-up to 2 decimals."""
    if not sequence:
        return 0.0
    gc_count = sequence.count('G') + sequence.count('C')
    percent = Decimal(100 * gc_count) / Decimal(len(sequence))
    return float(percent.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class RecordAssembler:
    """Builds immutable genome records from parser output."""

    def __init__(self,
                 id_generator=None,
                 clock: Callable[[], datetime] = datetime.now,
                 input_parser: Optional[InputParser] = None):
        """
        Initialize the assembler.

        Args:
            id_generator: Object with a ``next_id()`` method
            clock: Callable returning the upload timestamp
            input_parser: Parser used by ``read_genome_file``
        """
        self.id_generator = id_generator or TimestampIdGenerator()
        self.clock = clock
        self.input_parser = input_parser or InputParser()

    def assemble(self, parsed: ParsedSequence, filename: str) -> GenomeRecord:
        """
        Validate a parsed sequence and build its genome record.

        Raises:
            ValidationError: If the sequence has fewer than 10 symbols
        """
        sequence = parsed.sequence
        if not sequence or len(sequence) < MIN_SEQUENCE_LENGTH:
            logger.warning(f"Rejected {filename}: {len(sequence)} symbols after normalization")
            raise ValidationError(filename=filename)

        record = GenomeRecord(
            id=self.id_generator.next_id(),
            name=strip_extension(filename),
            sequence=sequence,
            size=len(sequence),
            gc_content=gc_content(sequence),
            metadata=parsed.metadata,
            uploaded_at=self.clock()
        )

        logger.debug(f"Assembled {record.name} ({record.size} bp, GC {record.gc_content}%)")
        return record

    def read_genome_file(self, file: GenomeFile) -> GenomeRecord:
        """Decode, parse and assemble a single uploaded file."""
        parsed = self.input_parser.parse_file(file)
        return self.assemble(parsed, file.name)
