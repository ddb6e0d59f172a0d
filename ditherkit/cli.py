"""Command-line interface for ditherkit.

Plain progress messages on stderr by default, or structured JSON for
scripting with ``--json``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ditherkit.core.methods import DitheringMethod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ditherkit",
        description="Reduce images to a small palette with error-diffusion dithering.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- convert subcommand ---
    convert = subparsers.add_parser(
        "convert",
        help="Dither an image file.",
    )
    convert.add_argument("input", help="Input image file path.")
    convert.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to <input>_<method>.<ext>.",
    )
    convert.add_argument(
        "--method",
        choices=[m.value for m in DitheringMethod],
        default=DitheringMethod.FLOYD_STEINBERG.value,
        help="Error-diffusion method (default: floyd-steinberg).",
    )
    convert.add_argument(
        "--levels",
        type=int,
        default=2,
        help="Output levels per channel when no palette is given (default: 2).",
    )
    convert.add_argument(
        "--palette",
        help="Comma-separated hex colors, e.g. '#000000,#ffffff'.",
    )
    convert.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    convert.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log debug output to stderr.",
    )
    convert.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error (with --json).",
    )

    # --- methods subcommand ---
    subparsers.add_parser(
        "methods",
        help="List available dithering methods.",
    )

    return parser


def _auto_output_path(input_path: Path, method: DitheringMethod) -> Path:
    """Generate default output path from input."""
    return input_path.parent / f"{input_path.stem}_{method.value}{input_path.suffix}"


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(message: str, code: str, is_json: bool) -> None:
    if is_json:
        _json_error(message, code)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run_convert(args: argparse.Namespace) -> None:
    """Run the convert pipeline."""
    from ditherkit.core.processor import Settings, process_image
    from ditherkit.core.quantize import parse_palette
    from ditherkit.core.reader import open_image
    from ditherkit.core.writer import save_image

    is_json = args.json
    input_path = Path(args.input).resolve()

    try:
        palette = parse_palette(args.palette) if args.palette else None
        settings = Settings(
            method=DitheringMethod(args.method),
            levels=args.levels,
            palette=palette,
        )
    except ValueError as e:
        _fail(str(e), "INVALID_SETTINGS", is_json)

    try:
        img, info = open_image(input_path)
    except FileNotFoundError as e:
        _fail(str(e), "FILE_NOT_FOUND", is_json)
    except (ValueError, OSError) as e:
        _fail(str(e), "INVALID_INPUT", is_json)

    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = _auto_output_path(input_path, settings.method)

    if not is_json:
        print(
            f"Dithering {info.width}x{info.height} image with "
            f"{settings.method.long_name}...",
            file=sys.stderr,
        )

    try:
        result = process_image(img, settings)
        save_image(result.image, output_path)
    except Exception as e:
        if is_json:
            if args.debug:
                import traceback
                traceback.print_exc(file=sys.stderr)
            _json_error(str(e), "PROCESSING_ERROR")
        else:
            print(f"Error during processing: {e}", file=sys.stderr)
            sys.exit(1)

    if not is_json:
        print(f"Saved to {output_path}", file=sys.stderr)
    else:
        doc = {
            "status": "success",
            "input": str(input_path),
            "output": str(output_path),
            "settings": {
                "method": settings.method.value,
                "method_name": result.method,
                "levels": settings.levels,
                "hash": settings.hash(),
                "palette": [list(c) for c in settings.palette] if settings.palette else None,
            },
            "metadata": {
                "width": result.width,
                "height": result.height,
                "channels": result.channels,
                "input_format": info.format,
                "output_format": output_path.suffix.lstrip("."),
                "elapsed_ms": round(result.elapsed_ms, 1),
            },
        }
        print(json.dumps(doc, indent=2))


def _run_methods() -> None:
    for method in DitheringMethod:
        print(f"{method.value:<22}{method.long_name}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Routing:
      ditherkit convert <file> [opts]  → dither a file
      ditherkit methods                → list methods
    """
    from ditherkit.utils.log import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "convert":
        _run_convert(args)
    elif args.command == "methods":
        _run_methods()
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
