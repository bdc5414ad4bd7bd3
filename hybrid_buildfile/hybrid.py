"""
Hybrid build file parser for hybrid-buildfile.

Routes each build file to the parser registered for its syntax. The
default syntax applies when a file has no syntax marker; a file can ask
for another syntax by starting with::

    # BUILD FILE SYNTAX: <NAME>

An unknown name raises UnrecognizedSyntaxError instead of falling back
to the default.

Design: Strategy Pattern
- The registry (Syntax -> parser) and the default syntax are fixed at
  construction and validated eagerly in ``using()``.
- get_all() / get_all_rules_and_meta_rules() select a parser on every
  call and forward the call unchanged. Results and delegate errors are
  passed through as-is.
- close() / report_profile() fan out to every registered parser in
  registry order, whether or not it was ever used. A failing parser
  does not stop the others; failures are collected into a single
  LifecycleError raised after all parsers were visited.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from hybrid_buildfile.detect import select_syntax
from hybrid_buildfile.exceptions import LifecycleError, SyntaxRegistryInvariantError
from hybrid_buildfile.parsers.base import ProcessedBytes, ProjectBuildFileParser
from hybrid_buildfile.syntax import Syntax

logger = logging.getLogger(__name__)


class HybridProjectBuildFileParser(ProjectBuildFileParser):
    """Build file parser that delegates to one parser per syntax.

    Create instances with ``HybridProjectBuildFileParser.using()``.

    Attributes:
        default_syntax: Syntax used for build files without a marker.
        parsers: Read-only view of the registry.
    """

    def __init__(
        self,
        parsers: Mapping[Syntax, ProjectBuildFileParser],
        default_syntax: Syntax,
    ) -> None:
        self._parsers: Mapping[Syntax, ProjectBuildFileParser] = MappingProxyType(dict(parsers))
        self._default_syntax = default_syntax
        self._closed: set[Syntax] = set()

    @classmethod
    def using(
        cls,
        parsers: Mapping[Syntax, ProjectBuildFileParser],
        default_syntax: Syntax,
    ) -> HybridProjectBuildFileParser:
        """Build a hybrid parser from a syntax -> parser mapping.

        Args:
            parsers: One parser per syntax. Iteration order is the order
                used by close() and report_profile().
            default_syntax: Syntax for build files without a marker.
                Must be a key of *parsers*.

        Raises:
            ValueError: If *parsers* is empty, has a non-Syntax key, or
                does not contain *default_syntax*.
        """
        if not parsers:
            raise ValueError("At least one parser must be registered.")
        for syntax in parsers:
            if not isinstance(syntax, Syntax):
                raise ValueError(f"Registry keys must be Syntax values, got {syntax!r}")
        if default_syntax not in parsers:
            available = ", ".join(s.name for s in parsers)
            raise ValueError(
                f"Default syntax {default_syntax.name} is not mapped to any parser. "
                f"Registered syntaxes: {available}"
            )
        logger.info(
            "Created hybrid parser for %s (default: %s)",
            [s.name for s in parsers],
            default_syntax.name,
        )
        return cls(parsers, default_syntax)

    # -- Properties ---------------------------------------------------------

    @property
    def default_syntax(self) -> Syntax:
        return self._default_syntax

    @property
    def parsers(self) -> Mapping[Syntax, ProjectBuildFileParser]:
        return self._parsers

    @property
    def syntaxes(self) -> list[Syntax]:
        """Registered syntaxes in registry order."""
        return list(self._parsers)

    def __repr__(self) -> str:
        return (
            f"HybridProjectBuildFileParser(syntaxes={[s.name for s in self._parsers]}, "
            f"default_syntax={self._default_syntax.name})"
        )

    # -- Data operations ----------------------------------------------------

    def get_all(
        self,
        build_file: str | Path,
        processed_bytes: ProcessedBytes | None = None,
    ) -> list[dict[str, Any]]:
        return self.get_parser_for_build_file(build_file).get_all(build_file, processed_bytes)

    def get_all_rules_and_meta_rules(
        self,
        build_file: str | Path,
        processed_bytes: ProcessedBytes | None = None,
    ) -> list[dict[str, Any]]:
        return self.get_parser_for_build_file(build_file).get_all_rules_and_meta_rules(
            build_file, processed_bytes
        )

    def get_parser_for_build_file(self, build_file: str | Path) -> ProjectBuildFileParser:
        """Return the parser that should be used for *build_file*.

        Raises:
            UnrecognizedSyntaxError: If the marker names an unknown syntax.
            SyntaxRegistryInvariantError: If the selected syntax has no parser.
            OSError: If the build file cannot be read.
        """
        syntax = select_syntax(build_file, self._default_syntax)
        parser = self._parsers.get(syntax)
        if parser is None:
            raise SyntaxRegistryInvariantError(f"{syntax.name} is not mapped to any parser")
        logger.debug("Selected syntax %s for %s", syntax.name, build_file)
        return parser

    # -- Lifecycle operations -----------------------------------------------

    def report_profile(self) -> None:
        self._fan_out("report_profile", self._parsers.items())

    def close(self) -> None:
        """Close every parser that has not been closed yet.

        A parser counts as closed once its close() returned or raised an
        ordinary exception. If an interrupt stops the loop, the next
        close() resumes with the interrupted parser.
        """
        pending = [(s, p) for s, p in self._parsers.items() if s not in self._closed]
        if not pending:
            logger.debug("close() called on an already closed hybrid parser")
            return
        self._fan_out("close", pending, done=self._closed)

    def _fan_out(
        self,
        operation: str,
        parsers: Iterable[tuple[Syntax, ProjectBuildFileParser]],
        done: set[Syntax] | None = None,
    ) -> None:
        """Call *operation* on each parser, collecting failures."""
        failures: list[tuple[Syntax, Exception]] = []
        for syntax, parser in parsers:
            try:
                getattr(parser, operation)()
            except Exception as e:
                logger.warning("%s() failed for %s parser: %s", operation, syntax.name, e)
                failures.append((syntax, e))
            if done is not None:
                done.add(syntax)
        if failures:
            raise LifecycleError(operation, failures) from failures[0][1]
