"""CLI output helpers that respect quiet mode."""

import click

from .models import AnalysisResult, GenomeRecord

# Global flag for quiet mode
_quiet_mode = False


def set_quiet_mode(quiet: bool) -> None:
    """Set the global quiet mode flag."""
    global _quiet_mode
    _quiet_mode = quiet


def echo(message: str = "", err: bool = False, **kwargs) -> None:
    """Echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.echo(message, err=err, **kwargs)


def secho(message: str = "", err: bool = False, **kwargs) -> None:
    """Styled echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.secho(message, err=err, **kwargs)


def echo_genome(record: GenomeRecord, analysis: AnalysisResult, verbose: bool = False) -> None:
    """Print a genome's composition and trait scores."""
    secho(f"{record.name}", bold=True)
    echo(f"  {record.size:,} bp • GC {format(record.gc_content, 'g')}%")
    if verbose:
        echo(f"  ID: {record.id}")
        if record.organism:
            echo(f"  Organism: {record.organism}")
        if record.definition:
            echo(f"  Definition: {record.definition}")
    echo("  Trait Scores:")
    for trait in analysis.traits:
        echo(f"    {trait.name}: {trait.score}%")
    if verbose:
        echo("  Recommendations:")
        for recommendation in analysis.recommendations:
            echo(f"    - {recommendation}")
