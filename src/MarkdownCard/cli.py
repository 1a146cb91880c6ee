from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from . import api
from .errors import CardConversionError
from .options import CardOptions, load_card_options
from .utils import STDIO, configure_logging, read_markdown, resolve_output_path, write_card


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdowncard",
        description="Convert Markdown into an Adaptive Card JSON document.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file, or '-' for stdin")
    parser.add_argument("-o", "--output", type=str, help="Output JSON path, or '-' for stdout")
    parser.add_argument("--config", type=str, help="YAML file with card options")
    parser.add_argument("--compact", action="store_true", help="Write JSON without indentation")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    source = args.input
    if source != STDIO:
        input_path = Path(source).expanduser()
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")
        source = str(input_path)
    output_path = resolve_output_path(source, args.output)

    logging.info("Reading %s", "stdin" if source == STDIO else source)
    markdown_text = read_markdown(source)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Converting markdown...")
    try:
        options = CardOptions()
        if args.config:
            options = load_card_options(args.config, base=options)
        if args.compact:
            options = replace(options, indent=None)
        card_json = api.markdown_to_card_json(markdown_text, options)
    except (CardConversionError, ValueError) as exc:
        logging.error("Conversion failed: %s", exc)
        return 1

    write_card(output_path, card_json)
    logging.info("Done. Saved to %s", output_path or "stdout")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
