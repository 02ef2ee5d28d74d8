"""``mtojson-render`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

import yaml
from pydantic import ValidationError

from .config import load_config
from .errors import MtojsonError
from .generator import generate_json, required_size
from .loader import load_tree_file
from .logging_utils import setup_logging

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mtojson-render",
        description="Render a YAML/JSON tree document into a fixed-size JSON buffer",
    )
    parser.add_argument("tree", help="Path to the tree document")
    parser.add_argument("--capacity", type=int, default=None, help="Buffer size in bytes, terminator included")
    parser.add_argument("--config", default=None, help="Path to config YAML")
    parser.add_argument("--measure", action="store_true", help="Print the required capacity and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the renderer; returns the process exit status."""

    def fail(message: str, exit_code: int = 2) -> int:
        print(f"ERROR: {message}", file=sys.stderr)
        return exit_code

    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ValidationError as exc:
        return fail(f"Invalid configuration: {exc}")
    except (OSError, ValueError, yaml.YAMLError) as exc:
        return fail(f"Failed to load configuration: {exc}")

    setup_logging(cfg.logging)

    try:
        tree = load_tree_file(args.tree)
    except OSError as exc:
        return fail(f"Failed to read tree '{args.tree}': {exc}")
    except (MtojsonError, yaml.YAMLError) as exc:
        return fail(f"Invalid tree: {exc}")

    try:
        if args.measure:
            print(required_size(tree, cfg.render))
            return 0
        capacity = args.capacity if args.capacity is not None else cfg.render.default_capacity
        if capacity < 0:
            return fail("capacity must be >= 0")
        out = bytearray(capacity)
        written = generate_json(out, tree, capacity, cfg.render)
    except MtojsonError as exc:
        return fail(str(exc))

    if not written:
        needed = required_size(tree, cfg.render)
        LOG.info("render needs %d bytes, capacity is %d", needed, capacity)
        return fail(f"output does not fit in {capacity} bytes (needs {needed})", exit_code=1)

    LOG.info("rendered %d bytes into a %d byte buffer", written, capacity)
    print(bytes(out[:written]).decode(cfg.render.encoding))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
