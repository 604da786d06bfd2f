"""Pydantic configuration models for story discovery components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from story_discovery.filters.store import DEFAULT_SLOT_KEY

# ============================================================
# Content Store Config
# ============================================================


class CMSConfig(BaseModel):
    """Configuration for the content store connection."""

    base_url: str | None = None
    collection: str = "articles"
    timeout: float | None = 30.0
    default_image_url: str = "/images/categories/default.jpg"

    model_config = {"frozen": True}


# ============================================================
# Locale Config
# ============================================================


class LocaleConfig(BaseModel):
    """Locales and attribution defaults."""

    default_locale: str = "en"
    fallback_locale: str = "en"
    publisher_name: str = "PARI"
    default_location: str = "India"

    model_config = {"frozen": True}


# ============================================================
# Pagination Config
# ============================================================


class PaginationConfig(BaseModel):
    """Responsive page sizes and navigation steps."""

    mobile_breakpoint: int = 640
    mobile_page_size: int = Field(default=6, gt=0)
    desktop_page_size: int = Field(default=20, gt=0)
    jump_size: int = Field(default=5, gt=0)
    mobile_visible_pages: int = Field(default=4, gt=0)
    desktop_visible_pages: int = Field(default=9, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Filter Store Configs
# ============================================================


class MemoryFilterStoreConfig(BaseModel):
    """Keep the filter slot in process memory."""

    type: Literal["memory"] = "memory"

    model_config = {"frozen": True}


class FileFilterStoreConfig(BaseModel):
    """Keep the filter slot in a JSON file."""

    type: Literal["file"] = "file"
    path: str = ".story_discovery/filters.json"
    slot_key: str = DEFAULT_SLOT_KEY

    model_config = {"frozen": True}


FilterStoreConfig = Annotated[
    MemoryFilterStoreConfig | FileFilterStoreConfig,
    Field(discriminator="type"),
]


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate discovery logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class DiscoveryConfig(BaseModel):
    """Root configuration for story discovery."""

    cms: CMSConfig = Field(default_factory=CMSConfig)
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    filter_store: MemoryFilterStoreConfig | FileFilterStoreConfig = Field(
        default_factory=MemoryFilterStoreConfig, discriminator="type"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
