"""Domain models for the moving-sale catalog builder."""

from .catalog_item import UNNAMED_ITEM, CatalogItem
from .config_models import CompressSettings, SiteConfig
from .error_record import ErrorRecord
from .gallery_state import GalleryState, sync_state
from .processing_result import BuildResult, CompressResult, ImageStat

__all__ = [
    # Catalog models
    "CatalogItem",
    "UNNAMED_ITEM",
    "GalleryState",
    "sync_state",
    # Configuration models
    "CompressSettings",
    "SiteConfig",
    # Result models
    "BuildResult",
    "CompressResult",
    "ImageStat",
    "ErrorRecord",
]
