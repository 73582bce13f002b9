import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from epubsmith.config import AppConfig
from epubsmith.config_manager import DEFAULT_CONFIG_NAME, write_template
from epubsmith.pipeline import run_build
from epubsmith.utils.errors import EpubsmithError
from epubsmith.utils.logging import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epubsmith",
        description="Package chapters, images and metadata into an EPUB 3 file."
    )
    subparsers = parser.add_subparsers(dest="command")

    build_p = subparsers.add_parser("build", help="Build an EPUB from a JSON book definition.")
    build_p.add_argument("book", help="Book definition file (.json)")
    build_p.add_argument("output_epub", help="Output EPUB file path (.epub)")
    build_p.add_argument("--config", type=str, default=None, help=f"Path to configuration file (default: {DEFAULT_CONFIG_NAME})")
    build_p.add_argument("--nav-title", type=str, default=None, help="Override the table of contents title")
    build_p.add_argument("--status-file", type=str, default=None, help="Write incremental JSONL status to this file")
    build_p.add_argument("--debug", action="store_true", help="Enable debug output")

    init_p = subparsers.add_parser("init-config", help="Write a commented configuration template.")
    init_p.add_argument("path", nargs="?", default=DEFAULT_CONFIG_NAME, help=f"Where to write it (default: {DEFAULT_CONFIG_NAME})")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env once here (single entrypoint)
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    if args.command == "init-config":
        setup_logging()
        try:
            written = write_template(args.path, overwrite=args.force)
        except EpubsmithError:
            logging.getLogger("epubsmith.cli").exception("Could not write configuration template")
            return 1
        logging.getLogger("epubsmith.cli").info(f"Created configuration template at: {written}")
        return 0

    try:
        app_cfg = AppConfig.from_env_and_ini(args.config)
    except EpubsmithError:
        setup_logging()
        logging.getLogger("epubsmith.cli").exception("Invalid configuration")
        return 1

    effective_debug = args.debug or app_cfg.processing.debug
    setup_logging(debug=effective_debug)
    logger = logging.getLogger("epubsmith.cli")

    if Path(args.output_epub).suffix.lower() != ".epub":
        logger.error(f"Output file must have .epub extension, but got {Path(args.output_epub).suffix}")
        return 1

    if args.nav_title:
        app_cfg = replace(app_cfg, package=replace(app_cfg.package, nav_title=args.nav_title))

    # Normalize status file to absolute path so it is not lost due to CWD changes
    status_path = Path(args.status_file).resolve() if args.status_file else None

    try:
        run_build(
            cfg=app_cfg,
            book_file=args.book,
            output_epub=args.output_epub,
            status_file=status_path,
        )
    except EpubsmithError:
        logger.exception("EPUB build failed")
        return 1

    logger.info(f"EPUB build completed: {args.book} -> {args.output_epub}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
