from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .config import load_config, merge_defines
from .engine import transform_file, transform_tree
from .errors import CondAnnUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="condann",
        description="Resolve #if/#elseif/#else/#endif comment directives in JS/TS sources",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Options shared by all commands
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "-D", "--define",
            action="append",
            metavar="NAME[=VALUE]",
            help="option bound in conditions (repeatable); a bare NAME means true",
        )
        sp.add_argument(
            "--config",
            type=Path,
            help="YAML config with 'defines' and 'exclude' (default: ./condann.yaml if present)",
        )

    sp_render = sub.add_parser("render", help="print the transformed file to stdout")
    sp_render.add_argument("file", type=Path)
    add_common(sp_render)

    sp_build = sub.add_parser("build", help="transform a file or a directory tree into --out")
    sp_build.add_argument("src", type=Path)
    sp_build.add_argument("--out", type=Path, required=True, help="output file or directory")
    add_common(sp_build)

    sp_check = sub.add_parser("check", help="JSON report of diagnostics and statistics")
    sp_check.add_argument("files", type=Path, nargs="+")
    add_common(sp_check)

    return p


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        config = load_config(ns.config)
        options = merge_defines(config, ns.define)

        if ns.cmd == "render":
            result = transform_file(ns.file, options)
            sys.stdout.write(result.text)
            return 0

        if ns.cmd == "build":
            results = transform_tree(ns.src, ns.out, options, exclude=config.exclude)
            for target in results:
                sys.stdout.write(f"{target}\n")
            return 0

        if ns.cmd == "check":
            report: Dict[str, Any] = {}
            has_diagnostics = False
            for path in ns.files:
                result = transform_file(path, options)
                report[str(path)] = result.to_dict()
                has_diagnostics = has_diagnostics or bool(result.diagnostics)
            sys.stdout.write(jdumps({"files": report}) + "\n")
            return 1 if has_diagnostics else 0

    except CondAnnUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
