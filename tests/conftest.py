"""
Shared test fixtures for hybrid-buildfile tests.

Delegate parsers are replaced by ``FakeParser`` instances that record
every call, so tests can assert which parser a build file was routed
to and which lifecycle operations reached which parser.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from hybrid_buildfile.hybrid import HybridProjectBuildFileParser
from hybrid_buildfile.parsers.base import ProcessedBytes, ProjectBuildFileParser
from hybrid_buildfile.syntax import Syntax


# ---------------------------------------------------------------------------
# Fake delegate parser
# ---------------------------------------------------------------------------

class FakeParser(ProjectBuildFileParser):
    """Delegate parser that records calls and returns canned rules."""

    def __init__(
        self,
        name: str,
        calls: list[tuple[str, str]] | None = None,
        fail_on: dict[str, Exception] | None = None,
    ) -> None:
        self.name = name
        # Shared between fakes so tests can check cross-parser call order
        self.calls = calls if calls is not None else []
        self.fail_on = fail_on or {}
        self.received: list[tuple[str | Path, ProcessedBytes | None]] = []

    def _record(self, operation: str) -> None:
        self.calls.append((self.name, operation))
        if operation in self.fail_on:
            raise self.fail_on[operation]

    def get_all(self, build_file, processed_bytes=None) -> list[dict[str, Any]]:
        self._record("get_all")
        self.received.append((build_file, processed_bytes))
        return [{"name": "rule", "parser": self.name}]

    def get_all_rules_and_meta_rules(self, build_file, processed_bytes=None) -> list[dict[str, Any]]:
        self._record("get_all_rules_and_meta_rules")
        self.received.append((build_file, processed_bytes))
        return [
            {"name": "rule", "parser": self.name},
            {"__includes": [], "parser": self.name},
        ]

    def report_profile(self) -> None:
        self._record("report_profile")

    def close(self) -> None:
        self._record("close")

    def count(self, operation: str) -> int:
        return sum(1 for name, op in self.calls if name == self.name and op == operation)

    def __repr__(self) -> str:
        return f"FakeParser({self.name!r})"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def calls() -> list[tuple[str, str]]:
    """Call log shared by the fake parsers of one test."""
    return []


@pytest.fixture()
def python_dsl_parser(calls) -> FakeParser:
    return FakeParser("P", calls)


@pytest.fixture()
def skylark_parser(calls) -> FakeParser:
    return FakeParser("S", calls)


@pytest.fixture()
def hybrid(python_dsl_parser, skylark_parser) -> HybridProjectBuildFileParser:
    """Registry {PYTHON_DSL: P, SKYLARK: S}, default PYTHON_DSL."""
    return HybridProjectBuildFileParser.using(
        {Syntax.PYTHON_DSL: python_dsl_parser, Syntax.SKYLARK: skylark_parser},
        Syntax.PYTHON_DSL,
    )


@pytest.fixture()
def fake_parser_cls() -> type[FakeParser]:
    return FakeParser


@pytest.fixture()
def write_build_file(tmp_path):
    """Write a build file under tmp_path and return its path."""

    def _write(content: str, name: str = "BUCK") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (config -> factories -> dispatch)",
    )
