from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the moving-sale catalog builder.

Values are filled by config.loader after schema validation; defaults below
are the ones applied when a key is omitted from config/site.yml.
"""

DEFAULT_IMAGE_PREFIX = "images"
DEFAULT_CURRENCY = "AED"
DEFAULT_SWIPE_THRESHOLD = 50


@dataclass(frozen=True)
class CompressSettings:
    """Image compression settings (web display)."""
    max_size: int = 1200  # 長辺の最大ピクセル (拡大はしない)
    jpeg_quality: int = 82
    backup_dir: str = "originals"  # 対象ディレクトリ配下に作成


@dataclass(frozen=True)
class SiteConfig:
    """Root configuration for building the catalog page."""
    source_csv: str  # CSV source path (relative to cwd)
    output_path: str  # Generated page path
    image_prefix: str = DEFAULT_IMAGE_PREFIX
    currency: str = DEFAULT_CURRENCY
    title: str = "Moving Sale"
    stylesheet: str = "styles.css"
    script: str = "script.js"
    swipe_threshold: int = DEFAULT_SWIPE_THRESHOLD
    compress: CompressSettings = field(default_factory=CompressSettings)
