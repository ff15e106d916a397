"""Export formats for genome records and their analyses."""

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .batch_processor import FileOutcome
from .logging_config import get_logger
from .models import AnalysisResult, GenomeRecord
from .scorer import TRAIT_NAMES

logger = get_logger('output_formatter')

FASTA_LINE_WIDTH = 80


def _number(value: float) -> Union[int, float]:
    """Drop the fractional part of integral floats (50.0 -> 50)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def format_fasta(record: GenomeRecord) -> str:
    """FASTA text: ``>name`` then the sequence with a newline after every 80 symbols."""
    sequence = record.sequence
    body = []
    for start in range(0, len(sequence), FASTA_LINE_WIDTH):
        chunk = sequence[start:start + FASTA_LINE_WIDTH]
        body.append(chunk)
        if len(chunk) == FASTA_LINE_WIDTH:
            body.append('\n')
    return f">{record.name}\n" + ''.join(body)


def build_report(record: GenomeRecord,
                 analysis: AnalysisResult,
                 generated_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Analysis report document, keys in export order."""
    return {
        'genome': record.name,
        'size': record.size,
        'gcContent': _number(record.gc_content),
        'traits': [trait.to_dict() for trait in analysis.traits],
        'recommendations': list(analysis.recommendations),
        'generatedAt': iso_timestamp(generated_at),
    }


def report_json(record: GenomeRecord,
                analysis: AnalysisResult,
                generated_at: Optional[datetime] = None) -> str:
    return json.dumps(build_report(record, analysis, generated_at), indent=2, ensure_ascii=False)


def share_text(record: GenomeRecord) -> str:
    """One-line summary suitable for the clipboard."""
    gc = format(record.gc_content, 'g')
    return f"{record.name} | length {record.size}bp | GC {gc}%"


def write_fasta(record: GenomeRecord, directory: Union[str, Path]) -> Path:
    """Write ``{name}.fasta`` into a directory."""
    path = Path(directory) / f"{record.name}.fasta"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(format_fasta(record))
    logger.debug(f"FASTA written: {path}")
    return path


def write_report(record: GenomeRecord,
                 analysis: AnalysisResult,
                 directory: Union[str, Path]) -> Path:
    """Write ``{name}_analysis.json`` into a directory."""
    path = Path(directory) / f"{record.name}_analysis.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(report_json(record, analysis))
    logger.debug(f"Analysis report written: {path}")
    return path


class OutputFormatter:
    """Writes a batch summary table, one row per processed file."""

    BASE_COLUMNS = [
        "File",
        "Name",
        "ID",
        "Size",
        "GC Content",
        "Organism",
        "Definition",
    ]

    def __init__(self, trait_names: Sequence[str] = TRAIT_NAMES):
        self.columns = self.BASE_COLUMNS + list(trait_names) + ["Error"]
        self.started_at = datetime.now()
        self.rows: List[Dict[str, Any]] = []

    def format_outcome(self, outcome: FileOutcome) -> Dict[str, Any]:
        """Format a single file outcome as a table row."""
        row = {column: '' for column in self.columns}
        row['File'] = outcome.filename

        if outcome.success:
            record = outcome.record
            row.update({
                'Name': record.name,
                'ID': record.id,
                'Size': record.size,
                'GC Content': f"{record.gc_content:.2f}",
                'Organism': record.organism or '',
                'Definition': record.definition or '',
            })
            for trait in outcome.analysis.traits:
                if trait.name in row:
                    row[trait.name] = trait.score
        else:
            row['Error'] = outcome.failure.message

        self.rows.append(row)
        return row

    def format_results(self,
                       outcomes: Sequence[FileOutcome],
                       output_path: Union[str, Path],
                       format: str = 'tsv',
                       excel_compatible: bool = True) -> Path:
        """
        Format outcomes and write them to a file.

        Args:
            outcomes: Outcomes from a batch run, in input order
            output_path: Path to output file
            format: Output format ('tsv', 'csv', 'json')
            excel_compatible: Use UTF-8 BOM for Excel compatibility
        """
        if format not in ('tsv', 'csv', 'json'):
            raise ValueError(f"Unsupported format: {format}")

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rows = [self.format_outcome(outcome) for outcome in outcomes]

        if format == 'json':
            self._write_json(rows, path)
        else:
            delimiter = '\t' if format == 'tsv' else ','
            self._write_delimited(rows, path, delimiter, excel_compatible)

        logger.info(f"Summary written to {path} ({len(rows)} rows)")
        return path

    def _write_delimited(self, rows: List[Dict[str, Any]], path: Path,
                         delimiter: str, excel_compatible: bool) -> None:
        encoding = 'utf-8-sig' if excel_compatible else 'utf-8'

        with open(path, 'w', encoding=encoding, newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.columns, delimiter=delimiter)
            writer.writeheader()
            writer.writerows(rows)

    def _write_json(self, rows: List[Dict[str, Any]], path: Path) -> None:
        output = {
            'metadata': {
                'generated': iso_timestamp(),
                'total_entries': len(rows),
                'columns': self.columns
            },
            'results': rows
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(output, f, indent=2, ensure_ascii=False)

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics over every row formatted so far."""
        total = len(self.rows)
        failed = sum(1 for row in self.rows if row['Error'])

        return {
            'total_processed': total,
            'successful': total - failed,
            'failed': failed,
            'duration': str(datetime.now() - self.started_at)
        }
