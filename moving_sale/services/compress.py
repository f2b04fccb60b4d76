from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

from PIL import Image, ImageOps

from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import CompressSettings
from ..models.processing_result import CompressResult, ImageStat
from .progress import ProgressTracker

"""Bulk image compression for the web.

For every JPEG / PNG directly inside the target directory:
- back up the original into ``<dir>/<backup_dir>``
- shrink to fit max_size x max_size (never enlarge), honoring EXIF orientation
- save as progressive JPEG, 4:2:0 subsampling, metadata stripped
- PNG is converted to ``<stem>.jpg`` and the PNG removed
A file that fails is logged and skipped; the run continues.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "CompressionError",
    "JPEG_SUFFIXES",
    "PNG_SUFFIXES",
    "scan_images",
    "compress_image",
    "compress_directory",
]

JPEG_SUFFIXES = {".jpg", ".jpeg"}
PNG_SUFFIXES = {".png"}

_SUBSAMPLING_420 = 2


class CompressionError(Exception):
    """Raised when the target directory is unusable."""


def scan_images(directory: Path) -> list[Path]:
    """JPEG / PNG files directly inside ``directory`` (case-insensitive suffix), sorted by name.

    Raises:
        CompressionError: directory missing or not a directory
    """
    if not directory.exists():
        raise CompressionError(f"Directory '{directory}' not found")
    if not directory.is_dir():
        raise CompressionError(f"Path is not a directory: {directory}")
    wanted = JPEG_SUFFIXES | PNG_SUFFIXES
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in wanted),
        key=lambda p: p.name,
    )


def _to_rgb(img: Image.Image) -> Image.Image:
    # 透過部分は白背景に合成
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _load_for_web(path: Path, max_size: int) -> Image.Image:
    with Image.open(path) as src:
        img = ImageOps.exif_transpose(src)
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
        return _to_rgb(img)


def compress_image(path: Path, settings: CompressSettings) -> ImageStat:
    """Compress one image in place (PNG -> sibling .jpg). Backup is the caller's job."""
    original_bytes = path.stat().st_size
    converted = path.suffix.lower() in PNG_SUFFIXES
    target = path.with_suffix(".jpg") if converted else path

    img = _load_for_web(path, settings.max_size)
    # exif を渡さない = メタデータ除去
    img.save(
        target,
        format="JPEG",
        quality=settings.jpeg_quality,
        optimize=True,
        progressive=True,
        subsampling=_SUBSAMPLING_420,
    )
    if converted:
        path.unlink()

    return ImageStat(
        file_name=target.name,
        source_name=path.name,
        original_bytes=original_bytes,
        new_bytes=target.stat().st_size,
        converted=converted,
    )


def compress_directory(
    directory: Path,
    settings: CompressSettings | None = None,
    errors: ErrorLogBuffer | None = None,
) -> CompressResult:
    """Compress every image in ``directory``.

    Raises:
        CompressionError: directory missing / not a directory, or backup dir not creatable
    """
    settings = settings or CompressSettings()
    start = time.perf_counter()
    files = scan_images(directory)

    backup = directory / settings.backup_dir
    try:
        backup.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CompressionError(f"cannot create backup directory {backup}: {e}") from e

    jpeg_count = sum(1 for f in files if f.suffix.lower() in JPEG_SUFFIXES)
    logger.info(f"Processing images in: {directory}")
    logger.info(f"Backups will be saved to: {backup}")
    logger.info(f"Found {jpeg_count} JPEG files and {len(files) - jpeg_count} PNG files")
    logger.debug(f"max_size={settings.max_size} jpeg_quality={settings.jpeg_quality}")

    stats: list[ImageStat] = []
    failed = 0
    with ProgressTracker(len(files)) as progress:
        for f in files:
            progress.start_file(f)
            try:
                original = backup / f.name
                if original.exists():
                    # 再実行時に元画像を上書きしない
                    logger.debug(f"{f.name}: backup already present, keeping {original}")
                else:
                    shutil.copy2(f, original)
                stat = compress_image(f, settings)
            except (OSError, ValueError) as e:
                failed += 1
                logger.warning(f"{f.name}: {e}")
                if errors is not None:
                    errors.append(ErrorRecord.create(str(f), "compress", "IMAGE_COMPRESS_FAILED", str(e)))
                progress.finish_file(success=False)
                continue
            stats.append(stat)
            arrow = f"{stat.source_name} -> {stat.file_name}" if stat.converted else stat.file_name
            logger.info(
                f"{arrow}: {_mb(stat.original_bytes)}MB -> {_mb(stat.new_bytes)}MB "
                f"({stat.reduction_percent}% reduction)"
            )
            progress.finish_file(success=True)

    return CompressResult(
        directory=str(directory),
        backup_directory=str(backup),
        processed_files=len(stats),
        failed_files=failed,
        converted_files=sum(1 for s in stats if s.converted),
        saved_bytes=sum(s.saved_bytes for s in stats),
        elapsed_seconds=time.perf_counter() - start,
        image_stats=stats,
    )


def _mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}"
