"""
Syntax detection for build files.

A build file may override the default syntax with a parser directive on
its very first line::

    # BUILD FILE SYNTAX: SKYLARK

Detection algorithm:
1. Read the first line of the file (an empty file has no first line).
2. If it starts with SYNTAX_MARKER_START, the rest of the line is the
   requested syntax name.
3. No marker -> the default syntax.
4. Marker with a known name -> that syntax, even if it differs from the default.
5. Marker with an unknown name -> UnrecognizedSyntaxError. There is no
   fallback to the default.

Nothing is cached: every call re-reads the file, so edits between calls
are picked up.
"""

from __future__ import annotations

import logging
from pathlib import Path

from hybrid_buildfile.exceptions import UnrecognizedSyntaxError
from hybrid_buildfile.syntax import SYNTAX_MARKER_START, Syntax

logger = logging.getLogger(__name__)


def read_first_line(path: str | Path) -> str | None:
    """Read the first line of a file without its line terminator.

    Returns None if the file is empty. Bytes that are not valid UTF-8 are
    replaced with U+FFFD, so content after the first line can never make
    detection fail. I/O errors are not handled here.
    """
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        line = f.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def read_syntax_marker(path: str | Path) -> str | None:
    """Return the syntax name requested by the file's marker line, if any.

    The name is everything after the marker prefix, untrimmed. It may be
    an empty string when the line consists of the prefix alone.
    """
    first_line = read_first_line(path)
    if first_line is None or not first_line.startswith(SYNTAX_MARKER_START):
        return None
    return first_line[len(SYNTAX_MARKER_START):]


def select_syntax(path: str | Path, default_syntax: Syntax) -> Syntax:
    """Decide which syntax a build file should be parsed with.

    Args:
        path: Path to the build file.
        default_syntax: Syntax used when the file has no marker line.

    Returns:
        The selected Syntax.

    Raises:
        UnrecognizedSyntaxError: If the marker names an unknown syntax.
        OSError: If the file cannot be read.
    """
    syntax_name = read_syntax_marker(path)
    if syntax_name is None:
        logger.debug("No syntax marker in %s, using default %s", path, default_syntax.name)
        return default_syntax

    syntax = Syntax.from_name(syntax_name)
    if syntax is None:
        raise UnrecognizedSyntaxError(path, syntax_name)
    logger.debug("Syntax marker in %s requests %s", path, syntax.name)
    return syntax
