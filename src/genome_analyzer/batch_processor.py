"""Batch processing of uploaded genome files with per-file failure isolation."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .error_handler import ErrorHandler, get_error_handler
from .logging_config import ProgressLogger, get_logger, log_performance
from .models import AnalysisResult, GenomeRecord, ParsedSequence
from .record_assembler import RecordAssembler
from .scorer import DeterministicScorer

logger = get_logger('batch_processor')


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be turned into a genome record."""
    filename: str
    error_type: str
    message: str


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one file."""
    filename: str
    record: Optional[GenomeRecord] = None
    analysis: Optional[AnalysisResult] = None
    failure: Optional[FileFailure] = None

    @property
    def success(self) -> bool:
        return self.failure is None


class BatchProcessor:
    """Turns uploaded files into (record, analysis) pairs.

    Owns an append-only list of records, an id -> analysis mapping and an
    append-only failure log. A record and its analysis are committed
    together under a lock, so readers never see one without the other.
    With ``max_workers > 1`` files are decoded and parsed concurrently;
    assembly, scoring and commits still follow input order.
    """

    def __init__(self,
                 assembler: Optional[RecordAssembler] = None,
                 scorer: Optional[DeterministicScorer] = None,
                 max_workers: int = 1,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize batch processor.

        Args:
            assembler: Record assembler (also decodes and parses files)
            scorer: Scorer producing the analysis for each record
            max_workers: Maximum parallel workers for decoding and parsing
            error_handler: Error handler used to log per-file failures
        """
        self.assembler = assembler or RecordAssembler()
        self.scorer = scorer or DeterministicScorer()
        self.max_workers = max_workers
        self.error_handler = error_handler or get_error_handler()

        self._records: List[GenomeRecord] = []
        self._results: Dict[str, AnalysisResult] = {}
        self._failures: List[FileFailure] = []
        self._lock = threading.Lock()

    @property
    def records(self) -> List[GenomeRecord]:
        with self._lock:
            return list(self._records)

    @property
    def results(self) -> Dict[str, AnalysisResult]:
        with self._lock:
            return dict(self._results)

    @property
    def failures(self) -> List[FileFailure]:
        with self._lock:
            return list(self._failures)

    def pairs(self) -> List[Tuple[GenomeRecord, AnalysisResult]]:
        """Successful (record, analysis) pairs in arrival order."""
        with self._lock:
            return [(record, self._results[record.id]) for record in self._records]

    def process_next(self, file) -> FileOutcome:
        """Process one file and commit its outcome."""
        outcome = self._process_single_file(file)
        self._commit(outcome)
        return outcome

    def process_batch(self,
                      files: Iterable[Any],
                      on_success: Optional[Callable[[GenomeRecord, AnalysisResult], None]] = None,
                      on_error: Optional[Callable[[FileFailure], None]] = None) -> List[FileOutcome]:
        """
        Process files in order, skipping the ones that fail.

        Args:
            files: Objects with a ``name`` and a ``read_bytes()`` method
            on_success: Callback for each committed (record, analysis)
            on_error: Callback for each recorded failure

        Returns:
            One outcome per file, in input order
        """
        files = list(files)
        progress = ProgressLogger(logger, len(files), "Analyzing genomes")
        outcomes = []
        start = time.time()

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(self._read, f) for f in files]
                # Assemble in submission order so ids follow input order
                for f, future in zip(files, futures):
                    outcome = self._build_outcome(f, *future.result())
                    self._finish(outcome, progress, on_success, on_error)
                    outcomes.append(outcome)
        else:
            for f in files:
                outcome = self._process_single_file(f)
                self._finish(outcome, progress, on_success, on_error)
                outcomes.append(outcome)

        progress.complete()
        log_performance("Genome batch", time.time() - start, len(files), progress.base_pairs)

        succeeded = sum(1 for o in outcomes if o.success)
        logger.info(f"Batch complete: {succeeded} successful, {len(outcomes) - succeeded} failed")

        return outcomes

    def summary(self) -> Dict[str, Any]:
        """Totals over everything processed so far."""
        with self._lock:
            return {
                'total_processed': len(self._records) + len(self._failures),
                'successful': len(self._records),
                'failed': len(self._failures),
                'failures': [
                    {'file': f.filename, 'error_type': f.error_type, 'message': f.message}
                    for f in self._failures
                ]
            }

    def _process_single_file(self, file) -> FileOutcome:
        """Decode, parse, assemble and score one file without committing."""
        return self._build_outcome(file, *self._read(file))

    def _read(self, file) -> Tuple[Optional[ParsedSequence], Optional[Exception]]:
        """Read and parse one file, returning the error instead of raising it."""
        try:
            return self.assembler.input_parser.parse_file(file), None
        except Exception as e:
            return None, e

    def _build_outcome(self, file,
                       parsed: Optional[ParsedSequence],
                       error: Optional[Exception]) -> FileOutcome:
        filename = getattr(file, 'name', str(file))

        if error is None:
            try:
                record = self.assembler.assemble(parsed, filename)
                analysis = self.scorer.analyze(record)
            except Exception as e:
                error = e

        if error is not None:
            context = self.error_handler.handle_error(
                error,
                operation="read_genome_file",
                item_id=filename
            )
            return FileOutcome(
                filename=filename,
                failure=FileFailure(
                    filename=filename,
                    error_type=context.error_type.value,
                    message=str(error)
                )
            )

        return FileOutcome(filename=filename, record=record, analysis=analysis)

    def _commit(self, outcome: FileOutcome):
        with self._lock:
            if outcome.success:
                self._records.append(outcome.record)
                self._results[outcome.record.id] = outcome.analysis
            else:
                self._failures.append(outcome.failure)

    def _finish(self, outcome, progress, on_success, on_error):
        self._commit(outcome)
        progress.update(
            success=outcome.success,
            item=outcome.filename,
            size=outcome.record.size if outcome.success else None
        )

        if outcome.success and on_success:
            on_success(outcome.record, outcome.analysis)
        elif not outcome.success and on_error:
            on_error(outcome.failure)
