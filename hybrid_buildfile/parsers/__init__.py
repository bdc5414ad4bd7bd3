"""
Parsers sub-package for hybrid-buildfile.

- base.py defines the ProjectBuildFileParser ABC shared by every syntax
  backend and by the hybrid parser itself.

Concrete syntax parsers live outside this package; they are plugged in
through ``hybrid_buildfile.create_parser()`` factories.
"""

from hybrid_buildfile.parsers.base import ProcessedBytes, ProjectBuildFileParser

__all__ = ["ProcessedBytes", "ProjectBuildFileParser"]
