"""
Custom exception hierarchy for hybrid-buildfile.

Callers can catch ``HybridBuildFileError`` for everything a user can fix
(bad syntax markers, broken config files, failing delegates during
teardown) and let programming defects through.
``SyntaxRegistryInvariantError`` is deliberately outside that hierarchy.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hybrid_buildfile.syntax import Syntax


class HybridBuildFileError(Exception):
    """Base exception for all hybrid-buildfile errors."""


class BuildFileParseError(HybridBuildFileError):
    """Raised when a build file cannot be parsed.

    Delegate parsers may raise this (or a subclass) for grammar errors.
    The dispatcher never wraps delegate errors, it only raises
    ``UnrecognizedSyntaxError`` itself.
    """


class UnrecognizedSyntaxError(BuildFileParseError):
    """Raised when a build file requests a syntax that is not known.

    The default syntax is never used as a fallback, since a newer syntax
    does not have to be compatible with it.
    """

    def __init__(self, build_file: str | Path, syntax_name: str) -> None:
        self.build_file = build_file
        self.syntax_name = syntax_name
        super().__init__(
            f"Unrecognized syntax [{syntax_name}] requested for build file [{build_file}]"
        )


class LifecycleError(HybridBuildFileError):
    """Raised when one or more delegates fail during ``close``/``report_profile``.

    Every delegate is still visited. ``failures`` holds ``(syntax, exception)``
    pairs in the order the delegates were visited.
    """

    def __init__(
        self,
        operation: str,
        failures: list[tuple[Syntax, Exception]],
    ) -> None:
        self.operation = operation
        self.failures = failures
        details = "; ".join(
            f"{syntax.name}: {type(exc).__name__}: {exc}" for syntax, exc in failures
        )
        super().__init__(
            f"{operation}() failed for {len(failures)} parser(s): {details}"
        )


class ConfigValidationError(HybridBuildFileError):
    """Raised when a parser config file is empty or cannot be satisfied.

    For example, when a syntax is enabled but no parser factory is
    provided for it.
    """


class SyntaxRegistryInvariantError(AssertionError):
    """Raised when a selected syntax has no registered parser.

    Construction guarantees the default syntax is registered, so this only
    happens for a marker naming a known but unregistered syntax, which is a
    configuration defect rather than a per-file error.
    """
