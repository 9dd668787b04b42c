"""Command-line interface for simdbench.

Provides the main CLI entry point with ``run`` and ``inspect`` subcommands.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from simdbench import __version__
from simdbench.bench.errors import BenchError, ModuleLoadError
from simdbench.logging import setup_logging

log = logging.getLogger("simdbench")


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """simdbench: compare baseline and SIMD builds of a decompression module."""


def _report_load_failure(exc: ModuleLoadError) -> None:
    click.echo(f"Failed to load {exc.label} module. Did you build it?", err=True)
    click.echo(f"  {exc}", err=True)
    for i, hint in enumerate(exc.hints):
        prefix = "Run:" if i == 0 else "Then:"
        click.echo(f"{prefix} {hint}", err=True)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command("run")
@click.argument("iterations", required=False)
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML profile with iterations, warmup and variant locations.",
)
@click.option(
    "--pkg-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the variant directories (default: .).",
)
@click.option("--baseline-dir", type=str, default=None, help="Baseline variant directory.")
@click.option("--simd-dir", type=str, default=None, help="SIMD variant directory.")
@click.option(
    "--module-name",
    type=str,
    default=None,
    help="Module file name inside each variant directory (default: wasm_bench).",
)
@click.option("--warmup", type=int, default=None, help="Warmup calls per variant (default: 3).")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "markdown"]),
    default=None,
    help="Report format (default: text).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to this file instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every trial.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None)
def run(  # noqa: PLR0913
    iterations: str | None,
    profile_path: Path | None,
    pkg_root: Path | None,
    baseline_dir: str | None,
    simd_dir: str | None,
    module_name: str | None,
    warmup: int | None,
    fmt: str | None,
    output: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark the baseline and SIMD variants and compare them.

    ITERATIONS is the number of timed calls per variant (default: 10).
    Values that are not a number fall back to the default.

    \b
    Examples:
        simdbench run
        simdbench run 50 --pkg-root wasm-bench
        simdbench run --profile bench.yaml --format markdown -o report.md
    """
    from simdbench.bench.config import (
        config_from_profile,
        load_profile,
        parse_iterations,
    )
    from simdbench.bench.display import format_header, format_report
    from simdbench.bench.export import export_json, export_markdown
    from simdbench.bench.runner import BenchRunner

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    cli_overrides: dict[str, object] = {
        "iterations": parse_iterations(iterations) if iterations is not None else None,
        "warmup": warmup,
        "module_name": module_name,
        "pkg_root": pkg_root,
        "baseline_dir": baseline_dir,
        "simd_dir": simd_dir,
        "output_format": fmt,
        "output": output,
    }

    try:
        profile_data = load_profile(profile_path) if profile_path else {}
        config = config_from_profile(profile_data, cli_overrides=cli_overrides)
        runner = BenchRunner(config)
        runner.validate()
    except (BenchError, ValueError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    if config.output_format == "text" and config.output is None:
        click.echo(format_header())

    try:
        baseline_module, simd_module = runner.load_modules()
    except ModuleLoadError as exc:
        _report_load_failure(exc)
        raise SystemExit(1) from exc

    try:
        report = runner.run(baseline_module, simd_module)
    except KeyboardInterrupt:
        click.echo("\nBenchmark interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904
    except Exception as exc:  # noqa: BLE001
        log.debug("Benchmark failed", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    if config.output_format == "json":
        text = export_json(report)
    elif config.output_format == "markdown":
        text = export_markdown(report)
    else:
        text = format_report(report)

    if config.output:
        config.output.write_text(text if text.endswith("\n") else text + "\n")
        click.echo(f"Report written to {config.output}")
    else:
        click.echo(text.rstrip("\n"))


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


@main.command("inspect")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--module-name",
    type=str,
    default="wasm_bench",
    show_default=True,
    help="Module file name when PATH is a directory.",
)
def inspect_cmd(path: Path, module_name: str) -> None:
    """Show what a single module variant reports about itself.

    PATH is a variant directory or the module file itself.
    """
    from simdbench.bench.module import load_module

    try:
        module = load_module(path, module_name, label=path.name or "variant")
        simd = bool(module.is_simd_enabled())
        compressed = module.get_compressed_size()
        files = module.get_file_count()
    except ModuleLoadError as exc:
        _report_load_failure(exc)
        raise SystemExit(1) from exc
    except Exception as exc:  # noqa: BLE001
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    click.echo(f"Module:            {path}")
    click.echo(f"SIMD Enabled:      {str(simd).lower()}")
    click.echo(f"Compressed Size:   {compressed / 1024:.2f} KB")
    click.echo(f"File Count:        {files}")
