"""
Report which syntax each build file would be parsed with.

Usage:
    uv run python scripts/show_syntax.py BUCK path/to/BUCK
    uv run python scripts/show_syntax.py --default SKYLARK BUCK
    uv run python scripts/show_syntax.py --config parser.yaml BUCK

No parser is started: this only runs the syntax marker detection. Exits
with status 1 if any file requests an unknown syntax or cannot be read.
"""

from __future__ import annotations

import argparse
import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("show_syntax")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    from hybrid_buildfile import (
        ParserConfig,
        Syntax,
        UnrecognizedSyntaxError,
        load_config,
        select_syntax,
    )

    arg_parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    arg_parser.add_argument("build_files", nargs="+")
    group = arg_parser.add_mutually_exclusive_group()
    group.add_argument("--default", choices=[s.name for s in Syntax])
    group.add_argument("--config")
    args = arg_parser.parse_args(argv)

    if args.config:
        default_syntax = load_config(args.config).default_build_file_syntax
    elif args.default:
        default_syntax = Syntax[args.default]
    else:
        default_syntax = ParserConfig().default_build_file_syntax

    failed = 0
    for build_file in args.build_files:
        try:
            syntax = select_syntax(build_file, default_syntax)
        except UnrecognizedSyntaxError as e:
            log.error("%s", e)
            failed += 1
            continue
        except OSError as e:
            log.error("Cannot read %s: %s", build_file, e)
            failed += 1
            continue
        log.info("%-10s  %s", syntax.name, build_file)

    if failed:
        log.warning("%d of %d build file(s) failed", failed, len(args.build_files))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
