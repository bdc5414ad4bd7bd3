"""
Base parser interface for hybrid-buildfile.

Every syntax is backed by a delegate that implements this interface,
and the hybrid parser implements it too so callers cannot tell the
difference. The contract is:
1. get_all() returns the build rules declared by a build file, one
   record map per rule.
2. get_all_rules_and_meta_rules() also includes meta rules (includes,
   config lookups, environment reads) in the same list.
3. report_profile() writes whatever profiling data the parser collected.
4. close() releases the parser's resources (worker processes, caches).

Parsers are context managers: leaving a ``with`` block calls close().
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class ProcessedBytes:
    """Thread-safe counter that parsers bump with the bytes they consume."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def add(self, delta: int) -> int:
        """Add *delta* and return the new total."""
        with self._lock:
            self._value += delta
            return self._value

    def __repr__(self) -> str:
        return f"ProcessedBytes({self.value})"


class ProjectBuildFileParser(ABC):
    """Abstract base class for build file parsers."""

    @abstractmethod
    def get_all(
        self,
        build_file: str | Path,
        processed_bytes: ProcessedBytes | None = None,
    ) -> list[dict[str, Any]]:
        """Parse a build file and return its build rules.

        Args:
            build_file: Path to the build file.
            processed_bytes: Optional counter incremented with the number
                of bytes read while parsing.

        Returns:
            One record map per rule, in declaration order.

        Raises:
            BuildFileParseError: If the build file cannot be parsed.
            OSError: If the build file cannot be read.
        """

    @abstractmethod
    def get_all_rules_and_meta_rules(
        self,
        build_file: str | Path,
        processed_bytes: ProcessedBytes | None = None,
    ) -> list[dict[str, Any]]:
        """Like get_all(), but also returns meta rules."""

    @abstractmethod
    def report_profile(self) -> None:
        """Report profiling information collected so far."""

    @abstractmethod
    def close(self) -> None:
        """Release all resources held by this parser."""

    def __enter__(self) -> ProjectBuildFileParser:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
