from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

STDIO = "-"


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger on stderr, keeping stdout for card JSON."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )


def resolve_output_path(input_path: str, output: Optional[str]) -> Path | None:
    """Where to write the card; ``None`` means standard output."""
    if output:
        if output == STDIO:
            return None
        out_path = Path(output)
        if out_path.is_dir():
            stem = "card" if input_path == STDIO else Path(input_path).stem
            out_path = out_path / f"{stem}.json"
        return out_path
    if input_path == STDIO:
        return None
    return Path(input_path).with_suffix(".json")


def read_markdown(input_path: str) -> str:
    if input_path == STDIO:
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8")


def write_card(output_path: Path | None, card_json: str) -> None:
    if output_path is None:
        sys.stdout.write(card_json + "\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(card_json + "\n", encoding="utf-8")
