"""Command-line interface for Format Hub.

WHY: Users need a quick way to convert files on disk, see which formats
are available, and start the HTTP API — without writing any Python.

HOW: argparse with three subcommands:
  convert  — read files, resolve a handler via the registry, write outputs
  formats  — print every registered format and its read/write flags
  serve    — run the FastAPI app with uvicorn
The async registry and handler calls run under asyncio.run().

RULES:
- Source format defaults to each file's extension; --from overrides it
- --from and --to each accept an extension or an internal id
- Two inputs that would write the same output path abort the run
- Output files go next to the source unless --output-dir is given
- All files in one invocation are converted as one batch per source
  format; any failure aborts with exit code 1 and nothing is written
- Status and error messages go to stderr, never stdout
- Log level comes from FORMAT_HUB_LOG_LEVEL, or DEBUG with --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from format_hub import __version__, config
from format_hub.core.metadata import MetadataError, load_metadata
from format_hub.handlers import HANDLERS, HandlerRegistry
from format_hub.handlers.base import ConversionError, FileData
from format_hub.handlers.subtitles import SubtitleHandler

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _group_by_source(
    registry: HandlerRegistry,
    paths: List[Path],
    source_override: Optional[str],
) -> Dict[str, List[Path]]:
    """Group input paths by source internal id, in first-seen order."""
    groups: Dict[str, List[Path]] = {}
    for path in paths:
        if source_override:
            source = registry.format_for_extension(source_override) or source_override
        else:
            source = registry.format_for_extension(path.suffix)
            if source is None:
                raise ConversionError(
                    "Cannot infer format of {}; pass --from".format(path.name)
                )
        groups.setdefault(source, []).append(path)
    return groups


async def _convert(args: argparse.Namespace) -> List[Tuple[Path, FileData]]:
    """Run every conversion and return (destination, output) pairs."""
    metadata = load_metadata(args.metadata) if args.metadata else None
    registry = await HandlerRegistry.create([
        SubtitleHandler(metadata=metadata) if handler_cls is SubtitleHandler else handler_cls()
        for handler_cls in HANDLERS.values()
    ])

    target = registry.format_for_extension(args.to) or args.to
    paths = [Path(p) for p in args.files]
    results: List[Tuple[Path, FileData]] = []

    for source, group in _group_by_source(registry, paths, args.source).items():
        handler, input_format, output_format = registry.resolve(source, target)
        logger.debug("Resolved %s -> %s to handler %s", source, target, handler.name)
        inputs = [FileData(name=p.name, bytes=p.read_bytes()) for p in group]
        outputs = await handler.do_convert(inputs, input_format, output_format)
        for path, output in zip(group, outputs):
            out_dir = Path(args.output_dir) if args.output_dir else path.parent
            results.append((out_dir / output.name, output))

    return results


def _cmd_convert(args: argparse.Namespace) -> int:
    for name in args.files:
        if not Path(name).is_file():
            _status("Error: File not found: {}".format(name))
            return 1

    try:
        results = asyncio.run(_convert(args))
    except (ConversionError, MetadataError) as exc:
        _status("Error: {}".format(exc))
        return 1

    seen = set()
    for destination, _ in results:
        key = destination.resolve()
        if key in seen:
            _status("Error: More than one input would be written to {}".format(destination))
            return 1
        seen.add(key)

    for destination, output in results:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(output.bytes)
        _status("Wrote {}".format(destination))
    return 0


def _cmd_formats(args: argparse.Namespace) -> int:
    registry = asyncio.run(HandlerRegistry.create())
    for handler, file_format in registry.formats():
        flags = "{}{}".format("r" if file_format.from_ else "-", "w" if file_format.to else "-")
        print("{:<8} {:<4} {:<10} {}  [{}]".format(
            file_format.internal, flags, handler.name, file_format.name, file_format.mime,
        ))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from format_hub.server.app import app

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="format-hub",
        description="Convert files between formats using pluggable handlers.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert one or more files.")
    convert.add_argument("files", nargs="+", help="Input files.")
    convert.add_argument("--to", required=True, help="Target format (extension or internal id).")
    convert.add_argument(
        "--from", dest="source", default=None,
        help="Source format, extension or internal id (default: inferred from each file's extension).",
    )
    convert.add_argument(
        "--metadata", default=None,
        help="JSON file with XCC metadata to write when converting to XCC.",
    )
    convert.add_argument("--output-dir", default=None, help="Directory for output files.")
    convert.set_defaults(func=_cmd_convert)

    formats = sub.add_parser("formats", help="List supported formats.")
    formats.set_defaults(func=_cmd_formats)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments, run the chosen subcommand and exit with its code."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    sys.exit(args.func(args))
