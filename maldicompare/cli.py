"""Command-line interface for maldicompare.

Provides two subcommands:

- ``process``: Process one spectrum group per subdirectory and write the
  processed spectra and peak lists as TSV files.
- ``init-config``: Write a configuration file with the default settings.

Examples
--------
.. code-block:: bash

    maldicompare init-config --output config.json
    maldicompare process --input-dir spectra/ --output-dir results/ --config config.json
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ProcessingConfig
from .io.readers import read_group
from .io.writers import write_result
from .processing import ProcessingFailure, process_groups

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="maldicompare",
    help="maldicompare: MALDI-TOF spectra processing for strain comparison.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _load_config(
    config: Optional[Path],
    overrides: dict,
    mz_min: Optional[float] = None,
    mz_max: Optional[float] = None,
) -> ProcessingConfig:
    if config is not None:
        base = ProcessingConfig.from_file(config)
    else:
        base = ProcessingConfig()
    d = base.to_dict()
    d.update({k: v for k, v in overrides.items() if v is not None})
    lo, hi = base.trim_range
    d["trim_range"] = (
        lo if mz_min is None else mz_min,
        hi if mz_max is None else mz_max,
    )
    return ProcessingConfig.from_dict(d)


def _read_input_groups(
    input_dir: Path,
) -> tuple[dict[str, list], dict[str, ProcessingFailure]]:
    """Read one group per subdirectory; unreadable groups become failures."""
    groups: dict[str, list] = {}
    failures: dict[str, ProcessingFailure] = {}
    for group_dir in sorted(p for p in input_dir.iterdir() if p.is_dir()):
        try:
            groups[group_dir.name] = read_group(group_dir)
        except Exception as exc:
            failures[group_dir.name] = ProcessingFailure(
                group=group_dir.name, kind=type(exc).__name__, message=str(exc)
            )
            logger.warning("Failed to read group %s: %s", group_dir.name, exc)
    return groups, failures


@app.command()
def process(
    input_dir: Annotated[
        Path,
        typer.Option(help="Directory with one subfolder of .txt replicates per group."),
    ],
    output_dir: Annotated[
        Path, typer.Option(help="Directory for processed spectra and peak lists.")
    ],
    config: Annotated[
        Optional[Path], typer.Option(help="JSON/YAML processing config.")
    ] = None,
    snr_threshold: Annotated[
        Optional[float], typer.Option(help="Peak signal-to-noise threshold.")
    ] = None,
    half_window: Annotated[
        Optional[int], typer.Option(help="Savitzky-Golay half-window size.")
    ] = None,
    iterations: Annotated[
        Optional[int], typer.Option(help="SNIP baseline iterations.")
    ] = None,
    mz_min: Annotated[Optional[float], typer.Option(help="Lower m/z bound.")] = None,
    mz_max: Annotated[Optional[float], typer.Option(help="Upper m/z bound.")] = None,
    n_jobs: Annotated[int, typer.Option(help="Number of worker threads.")] = 1,
    verbose: Annotated[bool, typer.Option(help="Show per-group log messages.")] = False,
) -> None:
    """Process spectrum groups and write spectra and peak lists."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    overrides = {
        "snr_threshold": snr_threshold,
        "smoothing_half_window": half_window,
        "baseline_iterations": iterations,
    }
    try:
        cfg = _load_config(config, overrides, mz_min, mz_max)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] Invalid configuration: {exc}")
        raise typer.Exit(code=1)

    if not input_dir.is_dir():
        console.print(f"[red]Error:[/red] {input_dir} is not a directory")
        raise typer.Exit(code=1)
    groups, read_failures = _read_input_groups(input_dir)
    if not groups and not read_failures:
        console.print(f"[red]Error:[/red] No group subdirectories found in {input_dir}")
        raise typer.Exit(code=1)
    logger.info("Loaded %d groups from %s", len(groups), input_dir)

    with console.status(f"Processing {len(groups)} groups..."):
        batch = process_groups(groups, cfg, n_jobs=n_jobs)
    batch.failures.update(read_failures)

    for group, result in batch.results.items():
        write_result(result, output_dir, group)

    # Summary
    console.print()
    table = Table(title="Processing Summary", show_lines=False)
    table.add_column("Group", style="bold")
    table.add_column("Status")
    table.add_column("Points", justify="right")
    table.add_column("Peaks / error", justify="right")
    for group in sorted([*batch.results, *batch.failures]):
        if group in batch.results:
            result = batch.results[group]
            table.add_row(
                group,
                "[green]ok[/green]",
                str(len(result.spectrum)),
                str(len(result.peaks)),
            )
        else:
            failure = batch.failures[group]
            table.add_row(group, "[red]failed[/red]", "-", failure.kind)
    console.print(table)
    console.print(f"Output: {output_dir}")

    if not batch.results:
        console.print("[red]Error:[/red] No groups were successfully processed.")
        raise typer.Exit(code=1)


@app.command("init-config")
def init_config(
    output: Annotated[
        Path, typer.Option(help="Config file to write (.json, .yaml or .yml).")
    ],
) -> None:
    """Write the default processing configuration to a file."""
    cfg = ProcessingConfig()
    if output.suffix in (".yaml", ".yml"):
        cfg.to_yaml(output)
    else:
        cfg.to_json(output)
    console.print(f"Default configuration written to {output}")


if __name__ == "__main__":
    app()
