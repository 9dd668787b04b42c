"""Exception types raised by the benchmark subsystem."""

from __future__ import annotations


class BenchError(Exception):
    """Base class for all simdbench benchmark failures."""


class ModuleLoadError(BenchError):
    """A module variant could not be loaded or does not satisfy the contract.

    Attributes:
        label: The variant label ("baseline", "simd", ...).
        hints: Remediation lines shown to the user, typically the
            commands that build the missing variant.
    """

    def __init__(self, label: str, message: str, hints: list[str] | None = None) -> None:
        super().__init__(message)
        self.label = label
        self.hints = list(hints or [])


class InvalidArgumentError(BenchError, ValueError):
    """An iteration count, warmup count or configuration value is invalid."""


class EmptyInputError(BenchError, ValueError):
    """Statistics were requested for an empty sample set."""


class ForeignCallError(BenchError, RuntimeError):
    """The decompression entry point failed or returned a bogus value."""
