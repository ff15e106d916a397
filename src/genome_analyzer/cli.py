"""Command-line interface for the genome analyzer."""

import sys
from pathlib import Path

import click

from . import __version__
from .batch_processor import BatchProcessor
from .cli_utils import echo, echo_genome, secho, set_quiet_mode
from .config import Config, get_default_config_path, create_example_config
from .error_handler import setup_error_handler
from .identifiers import create_id_generator
from .input_parser import InputParser
from .logging_config import LogTimer, get_logger, setup_logging
from .models import PathGenomeFile
from .output_formatter import OutputFormatter, share_text, write_fasta, write_report
from .record_assembler import RecordAssembler
from .scorer import DeterministicScorer

logger = get_logger('cli')


@click.command()
@click.argument('files', nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option('--output-dir', '-o', type=click.Path(file_okay=False), help='Directory for exported files')
@click.option('--output-format', type=click.Choice(['tsv', 'csv', 'json']), help='Summary table format')
@click.option('--summary', is_flag=True, help='Write a summary table of the batch')
@click.option('--export-fasta', is_flag=True, help='Write a FASTA file per genome')
@click.option('--export-reports', is_flag=True, help='Write a JSON analysis report per genome')
@click.option('--share', is_flag=True, help='Print a one-line share text per genome')
@click.option('--workers', type=click.IntRange(min=1), help='Number of parallel workers')
@click.option('--sequential-ids', is_flag=True, help='Use counter-based genome ids')
@click.option('--error-report', type=click.Path(dir_okay=False), help='Write a JSON report of failed files')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--generate-config', is_flag=True, help='Generate example configuration file')
@click.version_option(__version__, prog_name='genome-analyzer')
def main(files, output_dir, output_format, summary, export_fasta, export_reports, share,
         workers, sequential_ids, error_report, verbose, quiet, config, generate_config):
    """Genome Analyzer.

    Parse FASTA (.fasta, .fa, .fas, .fna), GenBank (.gb, .gbk) or raw
    sequence files, compute size and GC content, and score placeholder
    traits.

    Examples:
        genome-analyzer sample.fasta plasmid.gbk
        genome-analyzer *.fa --export-fasta --export-reports -o results
    """
    if quiet and verbose:
        click.echo("Error: Cannot use both --quiet and --verbose", err=True)
        sys.exit(1)

    set_quiet_mode(quiet)

    if generate_config:
        config_path = create_example_config()
        echo(f"Generated example configuration file: {config_path}")
        sys.exit(0)

    config_path = Path(config) if config else get_default_config_path()
    cfg = Config.from_file(config_path)
    cfg.merge_env_vars()
    cfg.merge_cli_args(
        workers=workers,
        sequential_ids=sequential_ids,
        output_dir=output_dir,
        output_format=output_format,
        export_fasta=export_fasta,
        export_reports=export_reports,
        verbose=verbose
    )

    setup_logging(
        log_level=cfg.logging.level,
        log_dir=cfg.logging.directory,
        colors=cfg.logging.colors,
        quiet=quiet,
        console=verbose
    )

    if not files:
        ctx = click.get_current_context()
        echo(ctx.get_help())
        return

    assembler = RecordAssembler(
        id_generator=create_id_generator(cfg.batch.id_scheme),
        input_parser=InputParser(encodings=cfg.input.encodings)
    )
    error_handler = setup_error_handler()
    processor = BatchProcessor(
        assembler=assembler,
        scorer=DeterministicScorer(),
        max_workers=cfg.batch.max_workers,
        error_handler=error_handler
    )

    echo(f"Analyzing {len(files)} file(s)...")
    with LogTimer(f"Analysis of {len(files)} genome file(s)", logger) as timer:
        outcomes = processor.process_batch(PathGenomeFile(Path(f)) for f in files)

    output_path = Path(cfg.output.directory)
    for record, analysis in processor.pairs():
        echo()
        echo_genome(record, analysis, verbose=verbose)
        if share:
            echo(f"  {share_text(record)}")
        if cfg.output.export_fasta:
            path = write_fasta(record, output_path)
            echo(f"  FASTA written to: {path}")
        if cfg.output.export_reports:
            path = write_report(record, analysis, output_path)
            echo(f"  Report written to: {path}")

    for failure in processor.failures:
        secho(f"ERROR: Failed to process {failure.filename}: {failure.message}", err=True, fg='red')

    if summary:
        formatter = OutputFormatter()
        table_path = output_path / f"genome_summary.{cfg.output.format}"
        with LogTimer(f"Summary export to {table_path}", logger):
            formatter.format_results(
                outcomes,
                table_path,
                format=cfg.output.format,
                excel_compatible=cfg.output.excel_compatible
            )
        echo(f"\nSummary written to: {table_path}")

    if error_report and processor.failures:
        error_handler.export_error_report(error_report)
        echo(f"Error report written to: {error_report}")

    stats = processor.summary()
    echo("\n" + "=" * 80)
    echo(f"Processed {stats['total_processed']} files")
    echo(f"Successful: {stats['successful']}")
    echo(f"Failed: {stats['failed']}")
    if verbose:
        echo(f"Elapsed: {timer.elapsed:.2f}s")

    if stats['successful'] == 0:
        sys.exit(1)


if __name__ == '__main__':
    main()
