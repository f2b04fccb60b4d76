from __future__ import annotations

from dataclasses import dataclass

"""Result models for the build and compress runs.

These feed the SUMMARY line rendering in services.summary.
"""


@dataclass(frozen=True)
class BuildResult:
    """Outcome of rendering the catalog page."""
    output_path: str  # 生成したページ
    total_items: int
    sold_items: int
    total_images: int
    error_page: bool  # True: ソース読込失敗でエラーメッセージを描画
    navigable_cards: int  # 複数画像 (矢印ナビ付き) カード数
    elapsed_seconds: float


@dataclass(frozen=True)
class ImageStat:
    """Per-image compression statistics."""
    file_name: str  # 出力ファイル名
    source_name: str  # 元ファイル名 (PNG 変換時は .png)
    original_bytes: int
    new_bytes: int
    converted: bool = False  # PNG -> JPEG

    @property
    def saved_bytes(self) -> int:
        return self.original_bytes - self.new_bytes

    @property
    def reduction_percent(self) -> float:
        if self.original_bytes == 0:
            return 0.0
        return round(self.saved_bytes * 100 / self.original_bytes, 1)


@dataclass(frozen=True)
class CompressResult:
    """Aggregated compression results for one directory."""
    directory: str
    backup_directory: str
    processed_files: int
    failed_files: int
    converted_files: int
    saved_bytes: int
    elapsed_seconds: float
    image_stats: list[ImageStat] | None = None
