from __future__ import annotations

from ..models.processing_result import BuildResult, CompressResult

"""SUMMARY line rendering for the build and compress commands.

Formats:
    SUMMARY items={n} sold={n} images={n} galleries={n} error_page={0|1} output={path} elapsed_sec={s}
    SUMMARY files={n} failed={n} converted={n} saved_mb={mb} elapsed_sec={s}
"""

__all__ = [
    "format_seconds",
    "render_build_summary",
    "render_compress_summary",
]


def format_seconds(value: float) -> str:
    """Compact number formatting (no scientific notation, integral values without decimals)."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_build_summary(result: BuildResult) -> str:
    """Render the SUMMARY line for a build run.

    Examples:
        >>> r = BuildResult(output_path="public/index.html", total_items=3, sold_items=1,
        ...                 total_images=5, error_page=False, navigable_cards=2, elapsed_seconds=0.5)
        >>> render_build_summary(r)
        'SUMMARY items=3 sold=1 images=5 galleries=2 error_page=0 output=public/index.html elapsed_sec=0.5'
    """
    return (
        f"SUMMARY items={result.total_items} "
        f"sold={result.sold_items} "
        f"images={result.total_images} "
        f"galleries={result.navigable_cards} "
        f"error_page={1 if result.error_page else 0} "
        f"output={result.output_path} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )


def render_compress_summary(result: CompressResult) -> str:
    saved_mb = f"{result.saved_bytes / 1024 / 1024:.2f}"
    return (
        f"SUMMARY files={result.processed_files} "
        f"failed={result.failed_files} "
        f"converted={result.converted_files} "
        f"saved_mb={saved_mb} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
