"""Benchmark configuration and profile loading.

Handles:
- The resolved BenchConfig and the two variant definitions.
- Loading benchmark profiles from YAML files.
- Merging CLI options with profile values (CLI > profile > defaults).
- The parse-or-default rule for the positional iteration count.
- Validating the final configuration before execution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


DEFAULT_ITERATIONS = 10
WARMUP_ITERATIONS = 3
DEFAULT_MODULE_NAME = "wasm_bench"
OUTPUT_FORMATS = ("text", "json", "markdown")

_BUILD_TARGET = "target/wasm32-unknown-unknown/release/wasm_bench.wasm"


# ---------------------------------------------------------------------------
# Variant definition
# ---------------------------------------------------------------------------


@dataclass
class VariantDef:
    """Where to find one module variant and how to build it."""

    label: str  # "baseline" or "simd"
    name: str  # display name used in reports
    directory: str  # relative to pkg_root unless absolute
    build_hints: list[str] = field(default_factory=list)

    def resolve_path(self, pkg_root: Path) -> Path:
        """Return the variant directory, resolved against *pkg_root*."""
        path = Path(self.directory).expanduser()
        if path.is_absolute():
            return path
        return pkg_root / path


def default_baseline() -> VariantDef:
    return VariantDef(
        label="baseline",
        name="Non-SIMD Version",
        directory="pkg-no-simd",
        build_hints=[
            "cargo build -p wasm-bench --target wasm32-unknown-unknown --release",
            f"wasm-bindgen {_BUILD_TARGET} --out-dir wasm-bench/pkg-no-simd --target nodejs",
        ],
    )


def default_simd() -> VariantDef:
    return VariantDef(
        label="simd",
        name="SIMD Version",
        directory="pkg-simd",
        build_hints=[
            'RUSTFLAGS="-Ctarget-feature=+simd128" cargo build -p wasm-bench '
            "--target wasm32-unknown-unknown --release --features simd",
            f"wasm-bindgen {_BUILD_TARGET} --out-dir wasm-bench/pkg-simd --target nodejs",
        ],
    )


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark run."""

    iterations: int = DEFAULT_ITERATIONS
    warmup: int = WARMUP_ITERATIONS
    module_name: str = DEFAULT_MODULE_NAME
    pkg_root: Path = field(default_factory=lambda: Path("."))
    baseline: VariantDef = field(default_factory=default_baseline)
    simd: VariantDef = field(default_factory=default_simd)

    # Reporting
    output_format: str = "text"
    output: Path | None = None

    @property
    def variants(self) -> list[VariantDef]:
        """Variants in run order: baseline first."""
        return [self.baseline, self.simd]


# ---------------------------------------------------------------------------
# Iteration argument
# ---------------------------------------------------------------------------


_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_iterations(text: str | None, default: int = DEFAULT_ITERATIONS) -> int:
    """Parse the positional iteration count, falling back to *default*.

    Leading whitespace, an optional sign and the leading run of digits
    are parsed; trailing junk is ignored (``"12x"`` is 12).  Absent,
    unparsable and zero values all yield *default*.  Negative values
    are returned as-is and rejected later by validation.
    """
    if text is None:
        return default
    match = _LEADING_INT.match(text)
    if match is None:
        return default
    value = int(match.group(1))
    return value or default


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if isinstance(config.iterations, bool) or not isinstance(config.iterations, int):
        errors.append(
            ValidationError(
                field="iterations",
                message=f"Iterations must be an integer (got {config.iterations!r}).",
            )
        )
    elif config.iterations < 1:
        errors.append(
            ValidationError(
                field="iterations",
                message=f"Need at least 1 measured iteration (got {config.iterations}).",
            )
        )

    if isinstance(config.warmup, bool) or not isinstance(config.warmup, int):
        errors.append(
            ValidationError(
                field="warmup",
                message=f"Warmup must be an integer (got {config.warmup!r}).",
            )
        )
    elif config.warmup < 0:
        errors.append(
            ValidationError(
                field="warmup",
                message=f"Warmup iterations cannot be negative (got {config.warmup}).",
            )
        )
    elif config.warmup == 0:
        errors.append(
            ValidationError(
                field="warmup",
                message="No warmup: first-call initialization will be timed.",
                severity="warning",
            )
        )

    if not config.module_name or not config.module_name.strip():
        errors.append(
            ValidationError(field="module_name", message="Module name must be non-empty.")
        )

    if config.output_format not in OUTPUT_FORMATS:
        errors.append(
            ValidationError(
                field="output_format",
                message=(
                    f"Unknown output format '{config.output_format}'. "
                    f"Valid formats: {', '.join(OUTPUT_FORMATS)}"
                ),
            )
        )

    for variant in config.variants:
        if not variant.directory:
            errors.append(
                ValidationError(
                    field=f"variants.{variant.label}.directory",
                    message=f"Variant '{variant.label}' has no directory.",
                )
            )

    base_path = config.baseline.resolve_path(config.pkg_root)
    simd_path = config.simd.resolve_path(config.pkg_root)
    if config.baseline.directory and base_path == simd_path:
        errors.append(
            ValidationError(
                field="variants",
                message=f"Both variants load from the same directory: {base_path}",
                severity="warning",
            )
        )

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        iterations: 20
        warmup: 3
        module_name: wasm_bench
        pkg_root: wasm-bench
        format: markdown

        variants:
          baseline:
            name: "Non-SIMD Version"
            directory: pkg-no-simd
          simd:
            name: "SIMD Version"
            directory: pkg-simd
            build_hints:
              - "make simd"

    Returns:
        The parsed YAML as a dict.
    """
    import yaml

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    text = profile_path.read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in profile {profile_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def _merge_variant(base: VariantDef, data: Any) -> VariantDef:
    if data is None:
        return base
    if not isinstance(data, dict):
        raise ValueError(f"Variant '{base.label}' must be a mapping, got {type(data).__name__}")

    unknown = set(data) - {"name", "directory", "build_hints"}
    if unknown:
        raise ValueError(
            f"Unknown keys in variant '{base.label}': {', '.join(sorted(unknown))}. "
            f"Valid keys: name, directory, build_hints"
        )

    hints = data.get("build_hints", base.build_hints)
    if isinstance(hints, str):
        hints = [hints]

    return VariantDef(
        label=base.label,
        name=str(data.get("name", base.name)),
        directory=str(data.get("directory", base.directory)),
        build_hints=list(hints),
    )


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values; a ``None``
    override means "not given on the command line".

    Args:
        profile_data: Parsed YAML profile dict (may be empty).
        cli_overrides: Dict of CLI option values.  Keys match BenchConfig
            field names, plus ``baseline_dir`` and ``simd_dir``.

    Returns:
        BenchConfig with variants and settings populated.
    """
    cli = cli_overrides or {}

    def pick(key: str, profile_key: str, default: Any) -> Any:
        if cli.get(key) is not None:
            return cli[key]
        return profile_data.get(profile_key, default)

    variants_data = profile_data.get("variants") or {}
    if not isinstance(variants_data, dict):
        raise ValueError("Profile 'variants' must be a mapping of label -> definition")
    unknown = set(variants_data) - {"baseline", "simd"}
    if unknown:
        raise ValueError(
            f"Unknown variants in profile: {', '.join(sorted(unknown))}. "
            f"Expected: baseline, simd"
        )

    pkg_root = pick("pkg_root", "pkg_root", ".")
    if pkg_root is None or pkg_root == "":
        raise ValueError("Profile 'pkg_root' must be a directory path")

    config = BenchConfig(
        iterations=pick("iterations", "iterations", DEFAULT_ITERATIONS),
        warmup=pick("warmup", "warmup", WARMUP_ITERATIONS),
        module_name=str(pick("module_name", "module_name", DEFAULT_MODULE_NAME)),
        pkg_root=Path(str(pkg_root)),
        baseline=_merge_variant(default_baseline(), variants_data.get("baseline")),
        simd=_merge_variant(default_simd(), variants_data.get("simd")),
        output_format=str(pick("output_format", "format", "text")),
    )

    if cli.get("baseline_dir"):
        config.baseline.directory = str(cli["baseline_dir"])
    if cli.get("simd_dir"):
        config.simd.directory = str(cli["simd_dir"])
    if cli.get("output"):
        config.output = Path(cli["output"])

    return config
