"""
Build file syntaxes understood by hybrid-buildfile.

The member *name* is the canonical identifier: it is what a build file
writes after the syntax marker and what the config file stores.
"""

from __future__ import annotations

from enum import Enum

# Parser directive that must open the first line of a build file
SYNTAX_MARKER_START = "# BUILD FILE SYNTAX: "


class Syntax(Enum):
    """Supported build file syntaxes."""

    PYTHON_DSL = "PYTHON_DSL"
    SKYLARK = "SKYLARK"

    @classmethod
    def from_name(cls, syntax_name: str) -> Syntax | None:
        """Convert a syntax name found after the syntax marker.

        Matching is exact and case-sensitive; returns None for anything else.
        """
        for syntax in cls:
            if syntax.name == syntax_name:
                return syntax
        return None
