"""Loading of decompression module variants.

A variant is one build of the decompression engine that exposes four
entry points (see :class:`DecompressModule`).  Variants usually live in
their own directory (``pkg-no-simd/``, ``pkg-simd/``) holding a module
named ``wasm_bench``: a native extension or a Python shim around one.

Every variant is imported under its own qualified name and is never
registered in ``sys.modules``, so two builds with the same module name
can be loaded side by side without sharing state.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import re
from pathlib import Path
from types import ModuleType
from typing import Protocol, runtime_checkable

from simdbench.bench.errors import ModuleLoadError
from simdbench.logging import get_logger

log = get_logger("module")

CONTRACT_FUNCTIONS = (
    "decompress_once",
    "get_compressed_size",
    "get_file_count",
    "is_simd_enabled",
)


@runtime_checkable
class DecompressModule(Protocol):
    """The four-function contract every module variant exposes."""

    def decompress_once(self) -> int:
        """Decompress the built-in corpus once; return bytes produced."""
        ...

    def get_compressed_size(self) -> int:
        """Total compressed size of the built-in corpus in bytes."""
        ...

    def get_file_count(self) -> int:
        """Number of files in the built-in corpus."""
        ...

    def is_simd_enabled(self) -> bool:
        """Whether the module was compiled with SIMD support."""
        ...


# ---------------------------------------------------------------------------
# Contract check
# ---------------------------------------------------------------------------


def missing_entry_points(module: object) -> list[str]:
    """Return the contract functions *module* lacks or cannot call."""
    return [name for name in CONTRACT_FUNCTIONS if not callable(getattr(module, name, None))]


def check_contract(module: object, label: str, hints: list[str] | None = None) -> None:
    """Raise ModuleLoadError if *module* does not expose the full contract."""
    missing = missing_entry_points(module)
    if missing:
        raise ModuleLoadError(
            label,
            f"{label} module is missing entry points: {', '.join(missing)}",
            hints,
        )


# ---------------------------------------------------------------------------
# File resolution and import
# ---------------------------------------------------------------------------


def find_module_file(directory: Path, module_name: str) -> Path | None:
    """Find ``<module_name><suffix>`` in *directory*.

    Tries every suffix the running interpreter can import.  Native
    extension suffixes come before source and bytecode suffixes.
    """
    extension = importlib.machinery.EXTENSION_SUFFIXES
    suffixes = list(extension) + [
        s for s in importlib.machinery.all_suffixes() if s not in extension
    ]
    for suffix in suffixes:
        candidate = directory / f"{module_name}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def _qualified_name(label: str, module_name: str) -> str:
    # The last component must stay equal to the file's module name:
    # extension modules look up their PyInit_<name> symbol from it.
    safe_label = re.sub(r"\W", "_", label) or "variant"
    return f"_simdbench_variants.{safe_label}.{module_name}"


def load_module(
    path: Path,
    module_name: str = "wasm_bench",
    *,
    label: str = "variant",
    hints: list[str] | None = None,
) -> DecompressModule:
    """Load one module variant from *path*.

    Args:
        path: A directory containing ``<module_name><suffix>``, or the
            module file itself.
        module_name: Base name of the module inside the directory.
        label: Variant label used in log and error messages.
        hints: Remediation lines attached to any ModuleLoadError.

    Returns:
        The imported module, verified to satisfy the contract.

    Raises:
        ModuleLoadError: If the file is missing, fails to import, or
            lacks one of the contract functions.
    """
    path = Path(path)
    if path.is_dir():
        module_file = find_module_file(path, module_name)
        if module_file is None:
            raise ModuleLoadError(
                label,
                f"No '{module_name}' module found in {path}",
                hints,
            )
    elif path.is_file():
        module_file = path
        module_name = path.name.split(".", 1)[0]
    else:
        raise ModuleLoadError(label, f"Module path does not exist: {path}", hints)

    log.debug("Loading %s module from %s", label, module_file)

    spec = importlib.util.spec_from_file_location(
        _qualified_name(label, module_name),
        module_file,
    )
    if spec is None or spec.loader is None:
        raise ModuleLoadError(label, f"Cannot import {module_file}", hints)

    try:
        module: ModuleType = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001
        raise ModuleLoadError(
            label,
            f"Failed to load {label} module from {module_file}: {exc}",
            hints,
        ) from exc

    check_contract(module, label, hints)
    return module  # type: ignore[return-value]
