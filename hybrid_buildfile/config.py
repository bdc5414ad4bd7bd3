"""
Configuration models and YAML I/O for hybrid-buildfile.

This module defines the Pydantic model that maps 1:1 to a parser config
YAML file, plus helpers for loading and saving it.

Example file::

    default_build_file_syntax: PYTHON_DSL
    enabled_syntaxes:
      - PYTHON_DSL
      - SKYLARK

Syntaxes are written by name. ``enabled_syntaxes`` is also the order in
which parsers are registered, and therefore the order used by close()
and report_profile().
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from hybrid_buildfile.exceptions import ConfigValidationError
from hybrid_buildfile.syntax import Syntax

logger = logging.getLogger(__name__)


def _to_syntax(value: object) -> object:
    """Accept syntax names from YAML; leave anything else for Pydantic to reject."""
    if isinstance(value, str):
        syntax = Syntax.from_name(value)
        if syntax is None:
            known = ", ".join(s.name for s in Syntax)
            raise ValueError(f"Unknown syntax '{value}'. Known syntaxes: {known}")
        return syntax
    return value


class ParserConfig(BaseModel):
    """Which syntaxes are parsed, and which one applies by default."""

    default_build_file_syntax: Syntax = Field(
        Syntax.PYTHON_DSL,
        description="Syntax for build files without a syntax marker",
    )
    enabled_syntaxes: list[Syntax] = Field(
        default_factory=lambda: list(Syntax),
        description="Syntaxes to register, in registration order",
    )

    @field_validator("default_build_file_syntax", mode="before")
    @classmethod
    def _parse_default(cls, value: object) -> object:
        return _to_syntax(value)

    @field_validator("enabled_syntaxes", mode="before")
    @classmethod
    def _parse_enabled(cls, value: object) -> object:
        if isinstance(value, list):
            return [_to_syntax(v) for v in value]
        return value

    @model_validator(mode="after")
    def _check_default_enabled(self) -> ParserConfig:
        if not self.enabled_syntaxes:
            raise ValueError("enabled_syntaxes must contain at least one syntax.")
        names = [s.name for s in self.enabled_syntaxes]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"enabled_syntaxes lists {duplicates} more than once.")
        if self.default_build_file_syntax not in self.enabled_syntaxes:
            raise ValueError(
                f"default_build_file_syntax {self.default_build_file_syntax.name} "
                f"is not in enabled_syntaxes {names}."
            )
        return self

    @field_serializer("default_build_file_syntax")
    def _dump_default(self, syntax: Syntax) -> str:
        return syntax.name

    @field_serializer("enabled_syntaxes")
    def _dump_enabled(self, syntaxes: list[Syntax]) -> list[str]:
        return [s.name for s in syntaxes]


def load_config(path: str | Path) -> ParserConfig:
    """Read the syntax settings for a hybrid parser from YAML.

    Both keys are optional; a file holding only
    ``default_build_file_syntax: SKYLARK`` keeps every syntax enabled
    and makes SKYLARK the default for unmarked build files.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or its top level is
            not a mapping of setting name -> value.
        pydantic.ValidationError: If a syntax name is unknown or the
            default is not among the enabled syntaxes.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file {path} must contain a mapping of settings, "
            f"got {type(raw).__name__}"
        )
    config = ParserConfig.model_validate(raw)
    logger.info(
        "Loaded config from %s: default %s, enabled %s",
        path,
        config.default_build_file_syntax.name,
        [s.name for s in config.enabled_syntaxes],
    )
    return config


def save_config(config: ParserConfig, path: str | Path) -> None:
    """Write *config* as YAML that load_config() reads back unchanged.

    The header comment lists every known syntax name so the file can be
    edited by hand.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    known = ", ".join(s.name for s in Syntax)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# hybrid-buildfile parser configuration\n")
        f.write(f"# Known syntaxes: {known}\n\n")
        yaml.safe_dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
