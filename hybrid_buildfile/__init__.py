"""
hybrid-buildfile: syntax dispatch for build files written in several syntaxes.

Public API surface:

- ``create_parser(config, factories)`` -- **recommended entry point**.
  Instantiates one parser per enabled syntax and returns a
  ``HybridProjectBuildFileParser`` that routes each build file to the
  right one.

- ``HybridProjectBuildFileParser.using(parsers, default_syntax)`` --
  lower-level constructor for callers that already hold parser instances.

- ``select_syntax(path, default_syntax)`` -- the syntax decision on its
  own, without any parser.

- ``load_config(path)`` / ``save_config(config, path)`` -- YAML config I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from hybrid_buildfile.config import ParserConfig, load_config, save_config
from hybrid_buildfile.detect import select_syntax
from hybrid_buildfile.exceptions import (
    BuildFileParseError,
    ConfigValidationError,
    HybridBuildFileError,
    LifecycleError,
    SyntaxRegistryInvariantError,
    UnrecognizedSyntaxError,
)
from hybrid_buildfile.hybrid import HybridProjectBuildFileParser
from hybrid_buildfile.parsers.base import ProcessedBytes, ProjectBuildFileParser
from hybrid_buildfile.syntax import SYNTAX_MARKER_START, Syntax

__all__ = [
    "create_parser",
    "select_syntax",
    "load_config",
    "save_config",
    "ParserConfig",
    "HybridProjectBuildFileParser",
    "ProjectBuildFileParser",
    "ProcessedBytes",
    "Syntax",
    "SYNTAX_MARKER_START",
    "HybridBuildFileError",
    "BuildFileParseError",
    "UnrecognizedSyntaxError",
    "LifecycleError",
    "ConfigValidationError",
    "SyntaxRegistryInvariantError",
]

logger = logging.getLogger(__name__)

ParserFactory = Callable[[], ProjectBuildFileParser]


def create_parser(
    config: ParserConfig | None = None,
    factories: Mapping[Syntax, ParserFactory] | None = None,
) -> HybridProjectBuildFileParser:
    """Build a hybrid parser for every syntax enabled in *config*.

    Orchestration:
      1. Check that every enabled syntax has a factory (before calling any,
         so a bad config never leaves half-started parsers behind).
      2. Call the factories in ``enabled_syntaxes`` order.
      3. ``HybridProjectBuildFileParser.using()`` with the config's default.

    Args:
        config: Parser configuration. Defaults to ``ParserConfig()``
            (all syntaxes, PYTHON_DSL by default).
        factories: Zero-argument callables, one per syntax, each returning
            a new parser instance. Factories for syntaxes that are not
            enabled are ignored.

    Returns:
        A ``HybridProjectBuildFileParser``.

    Raises:
        ConfigValidationError: If an enabled syntax has no factory.
    """
    if config is None:
        config = ParserConfig()
    factories = factories or {}

    missing = [s.name for s in config.enabled_syntaxes if s not in factories]
    if missing:
        raise ConfigValidationError(
            f"No parser factory for enabled syntax(es) {missing}. "
            f"Factories provided for: {[s.name for s in factories]}"
        )

    parsers: dict[Syntax, ProjectBuildFileParser] = {}
    try:
        for syntax in config.enabled_syntaxes:
            parsers[syntax] = factories[syntax]()
            logger.info("Started %s parser: %r", syntax.name, parsers[syntax])
    except Exception:
        # Don't leak parsers that were already started
        for syntax, parser in parsers.items():
            try:
                parser.close()
            except Exception as e:
                logger.warning("Failed to close %s parser after startup error: %s", syntax.name, e)
        raise

    return HybridProjectBuildFileParser.using(parsers, config.default_build_file_syntax)
