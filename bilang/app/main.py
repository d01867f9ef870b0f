#!/usr/bin/env python3
"""
Command line entry point for bilang.

Usage:
    bilang apply _site/index.html --path / --locale en -o /tmp/index.en.html
    bilang toggle _site/index.html --path /
    bilang render post.en.md
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .dom.document import PageDocument
from .exceptions import BilangError
from .lang.state import LocaleCodes
from .templates.converters import ContentRenderer
from .toggle.controller import ToggleController
from .utils.config import Config, load_config
from .utils.logger import setup_logging


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _write(markup: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(markup, encoding="utf-8")
    else:
        sys.stdout.write(markup)
        if not markup.endswith("\n"):
            sys.stdout.write("\n")


def cmd_apply(args: argparse.Namespace, config: Config) -> int:
    codes = LocaleCodes.from_config(config.locale)
    locale = codes.require(args.locale)

    document = PageDocument(_read(args.page), path=args.path)
    controller = ToggleController.create(document, config)
    try:
        controller.locale = locale
        controller.update_language_display()
        controller.apply_translations(locale)
    finally:
        controller.close()

    _write(document.render(), args.output)
    return 0


def cmd_toggle(args: argparse.Namespace, config: Config) -> int:
    document = PageDocument(_read(args.page), path=args.path)
    controller = ToggleController.create(document, config)
    try:
        controller.initialize()
        for _ in range(args.clicks):
            if document.click(config.page.toggle_id) == 0:
                # No toggle control in the markup, drive the state machine directly
                controller.toggle()
            if document.navigated:
                print(f"redirect: {document.location}")
                return 0
    finally:
        controller.close()

    _write(document.render(), args.output)
    return 0


def cmd_render(args: argparse.Namespace, config: Config) -> int:
    _write(ContentRenderer().render(_read(args.file)), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bilang",
        description="Translate rendered pages between the two site locales",
    )
    parser.add_argument("--config", help="Path to a TOML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log translation steps")
    sub = parser.add_subparsers(dest="command", required=True)

    apply_parser = sub.add_parser("apply", help="Translate a page in place to a locale")
    apply_parser.add_argument("page", help="Rendered HTML file")
    apply_parser.add_argument("--path", default="/", help="URL path of the page")
    apply_parser.add_argument("--locale", required=True, help="Target locale token")
    apply_parser.add_argument("-o", "--output", help="Write HTML here instead of stdout")
    apply_parser.set_defaults(handler=cmd_apply)

    toggle_parser = sub.add_parser("toggle", help="Load a page and click the language toggle")
    toggle_parser.add_argument("page", help="Rendered HTML file")
    toggle_parser.add_argument("--path", default="/", help="URL path of the page")
    toggle_parser.add_argument("--clicks", type=int, default=1, help="Number of clicks")
    toggle_parser.add_argument("-o", "--output", help="Write HTML here instead of stdout")
    toggle_parser.set_defaults(handler=cmd_toggle)

    render_parser = sub.add_parser("render", help="Render translated markdown content")
    render_parser.add_argument("file", help="Markdown file")
    render_parser.add_argument("-o", "--output", help="Write HTML here instead of stdout")
    render_parser.set_defaults(handler=cmd_render)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    logger = setup_logging(log_config=config.logging, level="DEBUG" if args.verbose else None)

    try:
        return args.handler(args, config)
    except BilangError as e:
        logger.error(f"{e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
