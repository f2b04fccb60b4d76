from __future__ import annotations

import argparse
import sys
from pathlib import Path

from moving_sale.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from moving_sale.csvsource.reader import SourceUnavailableError, parse_records, read_source
from moving_sale.logging.error_log import ErrorLogBuffer
from moving_sale.logging.init import log_summary, set_debug, setup_logging
from moving_sale.models.config_models import CompressSettings
from moving_sale.services.build import BuildError, build_site
from moving_sale.services.compress import CompressionError, compress_directory
from moving_sale.services.summary import render_build_summary, render_compress_summary

"""CLI entrypoint.

Commands:
- build     : render the catalog page from the CSV source (config/site.yml)
- inspect   : print the CSV header and the first rows, then exit
- compress  : resize / recompress the images of a directory for the web

Exit codes: 0 success, 1 fatal (config / directory / output), 2 build rendered
the load-error message instead of the catalog.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ERROR_PAGE = 2

INSPECT_SAMPLE_ROWS = 3

MIN_JPEG_QUALITY = 1
MAX_JPEG_QUALITY = 95


def _parse_args(argv: list[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(prog="moving-sale", description="Moving sale catalog builder")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser(
        "build",
        parents=[common],
        help="Render the catalog page",
        description=(
            "Render the catalog page from the CSV source. The page links the `stylesheet` and `script` "
            "files named in site.yml as external assets; supply them next to the output page "
            "(the gallery arrows and lightbox need the script)."
        ),
    )
    b.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to site.yml")

    i = sub.add_parser("inspect", parents=[common], help="Print CSV header & first rows then exit")
    i.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to site.yml")
    i.add_argument("--rows", type=int, default=INSPECT_SAMPLE_ROWS, help="Number of sample rows")

    c = sub.add_parser("compress", parents=[common], help="Compress images in a directory for the web")
    # 引数なしは argparse のエラー (exit 2) ではなく EXIT_FATAL にするため任意扱い
    c.add_argument("directory", nargs="?", type=Path, help="Image folder, e.g. ~/Pictures/moving-sale")
    c.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to site.yml (compress section)")
    c.add_argument("--max-size", type=int, default=None, help="Max width/height in pixels")
    c.add_argument("--quality", type=int, default=None, help="JPEG quality (70-90 recommended)")
    return p.parse_args(argv)


def _run_build(args: argparse.Namespace, logger) -> int:
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Building catalog from: {cfg.source_csv}")
    errors = ErrorLogBuffer()
    try:
        result = build_site(cfg, errors)
    except BuildError as e:
        logger.error(f"build: {e}")
        return EXIT_FATAL
    finally:
        log_path = errors.flush()
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    summary_line = render_build_summary(result)
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_ERROR_PAGE if result.error_page else EXIT_SUCCESS


def _run_inspect(args: argparse.Namespace, logger) -> int:
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    source = Path(cfg.source_csv)
    try:
        text = read_source(source)
    except SourceUnavailableError as e:
        logger.error(f"inspect: {e}")
        return EXIT_FATAL

    records = parse_records(text)
    if not records:
        print(f"inspect: no records in {source}")
        return EXIT_SUCCESS
    header = [h.strip() for h in records[0]]
    print(f"FILE: {source.name} rows={len(records) - 1}")
    print(f"  columns={header}")
    for n, record in enumerate(records[1 : 1 + args.rows], start=1):
        print(f"  row[{n}]={dict(zip(header, record))}")
    return EXIT_SUCCESS


def _compress_settings(args: argparse.Namespace, logger) -> CompressSettings | None:
    """config/site.yml の compress セクションを基に CLI 引数で上書き (設定ファイルは任意)"""
    base = CompressSettings()
    if args.config.exists():
        try:
            base = load_config(args.config).compress
        except ConfigError as e:
            logger.error(f"config: {e}")
            return None

    max_size = base.max_size if args.max_size is None else args.max_size
    quality = base.jpeg_quality if args.quality is None else args.quality
    if max_size < 1:
        logger.error(f"--max-size must be a positive number of pixels (got {max_size})")
        return None
    if not MIN_JPEG_QUALITY <= quality <= MAX_JPEG_QUALITY:
        logger.error(f"--quality must be between {MIN_JPEG_QUALITY} and {MAX_JPEG_QUALITY} (got {quality})")
        return None
    return CompressSettings(max_size=max_size, jpeg_quality=quality, backup_dir=base.backup_dir)


def _run_compress(args: argparse.Namespace, logger) -> int:
    if args.directory is None:
        print("Usage: moving-sale compress /path/to/image/folder")
        print("Example: moving-sale compress ~/Pictures/moving-sale")
        return EXIT_FATAL

    settings = _compress_settings(args, logger)
    if settings is None:
        return EXIT_FATAL
    directory = args.directory.expanduser()
    errors = ErrorLogBuffer()
    try:
        result = compress_directory(directory, settings, errors)
    except CompressionError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    finally:
        log_path = errors.flush()
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    logger.info(f"Original files backed up to: {result.backup_directory}")
    summary_line = render_compress_summary(result)
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


_COMMANDS = {
    "build": _run_build,
    "inspect": _run_inspect,
    "compress": _run_compress,
}


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] を渡したテストで sys.argv[1:] が混入しないよう None のときのみ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    return _COMMANDS[args.command](args, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
