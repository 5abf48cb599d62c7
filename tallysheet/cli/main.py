"""CLI entry point for Tallysheet."""

import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from tallysheet import Tallysheet, TallysheetConfig, __version__
from tallysheet.exceptions import TallysheetError

console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_config(
    config_path: Optional[str],
    mode: Optional[str],
    expressions: Optional[bool],
    precision: Optional[int],
    verbose: bool,
) -> TallysheetConfig:
    """Build the configuration from a YAML file and command-line overrides."""
    base = TallysheetConfig.from_yaml(config_path).to_dict() if config_path else {}

    overrides = {}
    if mode is not None:
        overrides["accumulation_mode"] = mode
    if expressions is not None:
        overrides["render_mode"] = "expression" if expressions else "value"
    if precision is not None:
        overrides["precision"] = precision
    if verbose:
        overrides["verbose"] = True

    return TallysheetConfig(**{**base, **overrides})


@click.command()
@click.argument("input_file", type=click.Path(dir_okay=False))
@click.option(
    "-i",
    "--in-place",
    is_flag=True,
    help="Rewrite INPUT_FILE instead of printing the result",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the result to this file",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration YAML file",
)
@click.option(
    "-m",
    "--mode",
    type=click.Choice(["sum", "remainder"]),
    default=None,
    help="Sum each section, or subtract entries from the first one",
)
@click.option(
    "--expressions/--values",
    default=None,
    help="Show entries as written (100 / 12) or as computed values (8.33)",
)
@click.option(
    "-p",
    "--precision",
    type=int,
    default=None,
    help="Fractional digits for numbers that are not whole",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__)
def cli(
    input_file: str,
    in_place: bool,
    output: Optional[str],
    config: Optional[str],
    mode: Optional[str],
    expressions: Optional[bool],
    precision: Optional[int],
    verbose: bool,
) -> None:
    """Tallysheet: compute and align plain-text worksheets.

    INPUT_FILE: Path to the worksheet. The result goes to stdout unless
    --in-place or --output is given.
    """
    setup_logging(verbose)

    if in_place and output:
        raise click.UsageError("--in-place and --output cannot be used together")

    try:
        tallysheet_config = load_config(config, mode, expressions, precision, verbose)
    except TallysheetError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    if verbose:
        console.print(
            Panel.fit(
                f"[bold blue]Tallysheet v{__version__}[/bold blue]\n"
                f"Worksheet Calculator",
                border_style="blue",
            )
        )

    tallysheet = Tallysheet(config=tallysheet_config)

    try:
        result = tallysheet.process(
            input_file=input_file,
            output_path=output,
            in_place=in_place,
            stream=click.get_text_stream("stdout"),
        )
    except TallysheetError as e:
        console.print(f"[red]Processing error:[/red] {e}")
        sys.exit(1)

    if not result.success:
        console.print("[red]✗[/red] Processing failed")
        for error in result.errors:
            console.print(f"  [red]•[/red] {error}")
        sys.exit(1)

    if verbose and result.output_path:
        console.print(f"[green]✓[/green] Output: {result.output_path}")

    # Show metrics if verbose
    if verbose and result.metrics:
        metrics_table = Table(title="Metrics", show_header=True)
        metrics_table.add_column("Metric", style="cyan")
        metrics_table.add_column("Value", style="green")

        for key, value in result.metrics.items():
            if isinstance(value, float):
                metrics_table.add_row(key, f"{value:.4f}")
            else:
                metrics_table.add_row(key, str(value))

        for stage_name, seconds in result.stage_times.items():
            metrics_table.add_row(f"{stage_name} time", f"{seconds:.4f}s")

        console.print(metrics_table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
