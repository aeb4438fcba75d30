"""Command-line entry point for rendering templates.

Example:
    ```bash
    python -m renderkit.main templates/report.md --data '{"title": "Q3"}'
    python -m renderkit.main invoice.pdf.j2 --path templates \\
        --engines pdf --data-file invoice.json --output invoice.pdf
    ```
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from renderkit.config import get_config
from renderkit.exceptions.base import BaseRendererError
from renderkit.factory import AVAILABLE_ENGINES, create_renderer

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_data(data: str | None = None, data_file: str | None = None) -> dict[str, Any]:
    """Load template data from a JSON string or a JSON file.

    Args:
        data: JSON object text
        data_file: Path of a file holding a JSON object

    Returns:
        Template data dictionary (empty when neither is given)

    Raises:
        ValueError: If the JSON is invalid, the file is unreadable or the
            document is not an object
    """
    if data_file is not None:
        try:
            data = Path(data_file).read_text(encoding="utf-8")
        except OSError as e:
            raise ValueError(f"Cannot read data file '{data_file}': {e}") from e
    if data is None:
        return {}

    try:
        loaded = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON data: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"Template data must be a JSON object, got {type(loaded).__name__}")
    return loaded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a template with the configured engines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m renderkit.main page.html.j2 --data '{"title": "Hello"}'
  python -m renderkit.main notes.md --engines markdown --path templates
  python -m renderkit.main report --format pdf --engines pdf --output report.pdf
        """,
    )

    parser.add_argument(
        "template",
        type=str,
        help="Template name or path",
    )

    data_group = parser.add_mutually_exclusive_group()
    data_group.add_argument(
        "--data",
        type=str,
        help="Template data as a JSON object",
    )
    data_group.add_argument(
        "--data-file",
        type=str,
        help="Path of a JSON file with the template data",
    )

    parser.add_argument(
        "--engine",
        type=str,
        help="Engine to render with, bypassing extension detection",
    )

    parser.add_argument(
        "--format",
        type=str,
        help="Output format (html, pdf or an engine name)",
    )

    parser.add_argument(
        "--path",
        action="append",
        help="Template search directory (repeatable)",
    )

    parser.add_argument(
        "--engines",
        nargs="+",
        metavar="NAME",
        help=f"Engines to enable ({', '.join(AVAILABLE_ENGINES)})",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the result to a file instead of stdout",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    return parser


def write_output(result: str | bytes, output: str | None = None) -> None:
    """Write a render result to a file or to stdout."""
    if output is None:
        if isinstance(result, bytes):
            sys.stdout.buffer.write(result)
            sys.stdout.buffer.flush()
        else:
            sys.stdout.write(result)
        return

    path = Path(output)
    if isinstance(result, bytes):
        path.write_bytes(result)
    else:
        path.write_text(result, encoding="utf-8")
    logger.info(f"Output written to {path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for command-line usage.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")
    else:
        logging.getLogger().setLevel(config.log_level)

    options: dict[str, Any] = {}
    if args.engine:
        options["engine"] = args.engine
    if args.format:
        options["format"] = args.format

    try:
        data = load_data(args.data, args.data_file)
        renderer = create_renderer(engines=args.engines, paths=args.path, config=config)
        result = renderer.render(args.template, data, options)
        write_output(result, args.output)
        return 0
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except BaseRendererError as e:
        logger.error(f"Rendering failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"Cannot write output: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Rendering interrupted by user")
        print("\nRendering interrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
