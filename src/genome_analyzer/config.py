"""Configuration management for the genome analyzer."""

import json
import os
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List, Optional


@dataclass
class InputConfig:
    """Input decoding settings."""
    encodings: List[str] = field(default_factory=lambda: ["utf-8", "utf-8-sig"])


@dataclass
class BatchConfig:
    """Batch processing settings."""
    max_workers: int = 1
    id_scheme: str = "timestamp"  # "timestamp" or "sequential"


@dataclass
class OutputConfig:
    """Output configuration settings."""
    format: str = "tsv"
    directory: str = "genome_output"
    export_fasta: bool = False
    export_reports: bool = False
    excel_compatible: bool = True


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    directory: str = ".genome_logs"
    colors: bool = True


@dataclass
class Config:
    """Main configuration container."""
    input: InputConfig
    batch: BatchConfig
    output: OutputConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            input=InputConfig(),
            batch=BatchConfig(),
            output=OutputConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()

        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            input=InputConfig(**data.get('input', {})),
            batch=BatchConfig(**data.get('batch', {})),
            output=OutputConfig(**data.get('output', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'input': asdict(self.input),
            'batch': asdict(self.batch),
            'output': asdict(self.output),
            'logging': asdict(self.logging)
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def merge_env_vars(self) -> None:
        """Merge environment variables into configuration."""
        if os.getenv('GENOME_ANALYZER_OUTPUT_DIR'):
            self.output.directory = os.getenv('GENOME_ANALYZER_OUTPUT_DIR')
        if os.getenv('GENOME_ANALYZER_WORKERS'):
            self.batch.max_workers = int(os.getenv('GENOME_ANALYZER_WORKERS'))
        if os.getenv('GENOME_ANALYZER_LOG_LEVEL'):
            self.logging.level = os.getenv('GENOME_ANALYZER_LOG_LEVEL')

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        # Batch settings
        if kwargs.get('workers'):
            self.batch.max_workers = kwargs['workers']
        if kwargs.get('sequential_ids'):
            self.batch.id_scheme = "sequential"

        # Output settings
        if kwargs.get('output_dir'):
            self.output.directory = kwargs['output_dir']
        if kwargs.get('output_format'):
            self.output.format = kwargs['output_format']
        if kwargs.get('export_fasta'):
            self.output.export_fasta = True
        if kwargs.get('export_reports'):
            self.output.export_reports = True

        # Logging settings
        if kwargs.get('verbose'):
            self.logging.level = "DEBUG"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.genome_analyzer' / 'config.json',
        Path.home() / '.config' / 'genome_analyzer' / 'config.json',
        Path('.genome_analyzer.json'),
        Path('genome_analyzer.config.json')
    ]

    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.genome_analyzer' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('genome_analyzer.config.example.json')

    config = Config.default()

    config.batch.max_workers = 4
    config.output.directory = "genome_output"
    config.output.export_fasta = True
    config.output.export_reports = True

    config.to_file(path)
    return path
