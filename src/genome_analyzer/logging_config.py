"""Logging setup and batch progress reporting for the genome analyzer."""

import logging
import logging.handlers
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

LOGGER_NAMESPACE = "genome_analyzer"

# Loggers handed back by setup_logging, besides the package logger
MODULE_LOGGERS = (
    'input_parser',
    'record_assembler',
    'scorer',
    'batch_processor',
    'output_formatter',
    'error',
    'performance',
)

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers share the record
            record.levelname = levelname


class ProgressLogger:
    """Logs one line per genome file and a closing batch summary.

    Counts the files that became genome records, the files that were
    skipped, and the base pairs analyzed across the batch.
    """

    def __init__(self, logger: logging.Logger, total: int, operation: str = "Analyzing genomes"):
        """
        Initialize progress logger.

        Args:
            logger: Logger instance to use
            total: Number of files in the batch
            operation: Prefix for every progress line
        """
        self.logger = logger
        self.total = total
        self.operation = operation
        self.processed = 0
        self.failed = 0
        self.base_pairs = 0
        self.start_time = datetime.now()

    @property
    def analyzed(self) -> int:
        return self.processed - self.failed

    def update(self, success: bool = True, item: Optional[str] = None, size: Optional[int] = None):
        """Record one finished file; ``size`` is the genome length in bp."""
        self.processed += 1
        label = item or f"file {self.processed}"
        position = f"[{self.processed}/{self.total}]"

        if success:
            self.base_pairs += size or 0
            detail = f" ({size:,} bp)" if size is not None else ""
            self.logger.info(f"{self.operation}: ✓ {label}{detail} {position}")
        else:
            self.failed += 1
            self.logger.info(f"{self.operation}: ✗ {label} skipped {position}")

    def complete(self):
        """Log the batch summary."""
        elapsed = (datetime.now() - self.start_time).total_seconds()
        self.logger.info(
            f"{self.operation} complete: {self.analyzed} genome(s), "
            f"{self.base_pairs:,} bp analyzed, {self.failed} file(s) skipped "
            f"in {elapsed:.1f}s"
        )


def _file_handler(log_file: Path, rotate_logs: bool, max_bytes: int, backup_count: int) -> logging.Handler:
    if rotate_logs:
        return logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
    return logging.FileHandler(log_file)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = ".genome_logs",
    console: bool = True,
    colors: bool = True,
    rotate_logs: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    quiet: bool = False
) -> Dict[str, logging.Logger]:
    """
    Route genome analyzer logs to a daily log file and, optionally, stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: File name inside ``log_dir``; defaults to one file per day
        log_dir: Directory for log files
        console: Also log to stderr
        colors: Colour level names on the console
        rotate_logs: Rotate the log file once it reaches ``max_bytes``
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
        quiet: Only errors reach the console

    Returns:
        The package logger under ``'main'`` plus one logger per module
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / (log_file or f"genome_analyzer_{datetime.now().strftime('%Y%m%d')}.log")
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    file_handler = _file_handler(log_file, rotate_logs, max_bytes, backup_count)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR if quiet else level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, use_colors=colors))
        root_logger.addHandler(console_handler)

    loggers = {'main': logging.getLogger(LOGGER_NAMESPACE)}
    loggers.update((name, get_logger(name)) for name in MODULE_LOGGERS)

    loggers['main'].info(f"Logging initialized - Level: {log_level}, File: {log_file}")

    return loggers


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def log_performance(operation: str, duration: float,
                    files: Optional[int] = None,
                    base_pairs: Optional[int] = None):
    """Log the duration of a run, with file count and bp throughput when known."""
    message = f"{operation}: completed in {duration:.2f}s"
    if files:
        message += f", {files} file(s)"
    if base_pairs and duration > 0:
        message += f" ({base_pairs / duration:,.0f} bp/s)"
    get_logger('performance').info(message)


class LogTimer:
    """Context manager that logs how long a step took; ``elapsed`` is kept."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger or get_logger('performance')
        self.start_time = None
        self.elapsed = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.debug(f"{self.operation} completed in {self.elapsed:.2f}s")
        else:
            self.logger.error(f"{self.operation} failed after {self.elapsed:.2f}s")
