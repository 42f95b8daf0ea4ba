"""Command line entry point: look up the words under an offset of some text."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional, Sequence

from hoverdict import logging_manager as log_mgr
from hoverdict.config.settings import LookupSettings, load_settings
from hoverdict.errors import SettingsError
from hoverdict.lookup.lookuper import Lookuper
from hoverdict.lookup.store import JsonDescriptionStore
from hoverdict.text.classifier import CLASSIFIER_NAMES, get_classifier
from hoverdict.text.segmentation import build_resolver
from hoverdict.text.window import extract_window

logger = log_mgr.get_logger().getChild("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hoverdict",
        description="Look up the dictionary entries for the text around a cursor offset.",
    )
    parser.add_argument(
        "--dictionary",
        required=True,
        help="Path to a JSON object file mapping headwords to descriptions.",
    )
    parser.add_argument("--text", required=True, help="Text containing the hovered word.")
    parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Character offset of the cursor inside --text.",
    )
    parser.add_argument(
        "--aimed",
        action="store_true",
        help="Run a pinned lookup that requires at least one hit.",
    )
    parser.add_argument(
        "--classifier",
        choices=CLASSIFIER_NAMES,
        help="Character classifier used to find the window boundaries.",
    )
    parser.add_argument("--settings", default=None, help="Path to a YAML settings file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging output.")
    return parser


def window_texts(text: str, offset: int, settings: LookupSettings) -> List[str]:
    window = extract_window(
        text,
        offset,
        settings.max_words,
        build_resolver(settings.segmenter),
        classifier=get_classifier(settings.classifier),
        fixed_script_limit=settings.fixed_script_limit,
        locale=settings.segmenter_locale,
    )
    return window.texts() if window is not None else []


async def _run(args: argparse.Namespace, settings: LookupSettings) -> int:
    rendered: List[Any] = []

    def on_update(content: Any, hit_count: int) -> None:
        rendered.append((content, hit_count))

    lookuper = Lookuper.from_settings(
        settings,
        store=JsonDescriptionStore(args.dictionary),
        on_update=on_update,
    )
    texts = window_texts(args.text, args.offset, settings)
    if args.aimed:
        updated = await lookuper.aimed_lookup(texts[0] if texts else "")
    else:
        updated = await lookuper.hover_all(texts)

    if not updated:
        print("No entries found.")
        return 1
    content, hit_count = rendered[-1]
    print(content)
    print(f"hits: {hit_count}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not 0 <= args.offset < max(len(args.text), 1):
        parser.error("--offset must point inside --text")

    overrides: Dict[str, Any] = {}
    if args.classifier:
        overrides["classifier"] = args.classifier
    if args.debug:
        overrides.update({"debug": True, "log_level": "DEBUG"})
    try:
        settings = load_settings(args.settings, overrides)
    except SettingsError as exc:
        parser.error(str(exc))

    log_mgr.setup_logging(log_mgr.resolve_level(settings.log_level), settings.log_file)
    log_mgr.configure_logging_level(settings.debug, log_mgr.resolve_level(settings.log_level))

    return asyncio.run(_run(args, settings))


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
