"""Normalize raw store records into Story objects."""

import logging
from datetime import date, datetime
from typing import Any

from story_discovery.data import Category, ContentType, LocalizationVariant, Story
from story_discovery.normalize.relations import first_related, related_items, unwrap_attributes

logger = logging.getLogger(__name__)

DEFAULT_PUBLISHER_NAME = "PARI"
DEFAULT_IMAGE_URL = "/images/categories/default.jpg"
DEFAULT_LOCATION = "India"
DISPLAY_DATE_FORMAT = "%b %d, %Y"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _first_text(item: dict[str, Any], *keys: str) -> str:
    for key in keys:
        text = _text(item.get(key))
        if text:
            return text
    return ""


def format_date(raw: Any) -> str:
    """Format an ISO date/datetime as ``Mar 05, 2024``; anything unusable becomes ``""``."""
    if not isinstance(raw, str) or not raw.strip():
        return ""
    text = raw.strip()
    try:
        if "T" in text:
            parsed: date = datetime.fromisoformat(text.replace("Z", "+00:00"))
        else:
            parsed = date.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable published date %r", raw)
        return ""
    return parsed.strftime(DISPLAY_DATE_FORMAT)


class StoryNormalizer:
    """Map raw records to Story objects, tolerating any relation encoding.

    The result has no ``available_languages`` yet; the language resolver
    fills them in.

    Args:
        base_url: Store root, prefixed to relative image URLs.
        publisher_name: Attribution used when an author or category has no name.
        default_image_url: Image used when the record has no cover image.
        default_location: Location used when the record has none.
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        publisher_name: str = DEFAULT_PUBLISHER_NAME,
        default_image_url: str = DEFAULT_IMAGE_URL,
        default_location: str = DEFAULT_LOCATION,
    ) -> None:
        self._base_url = base_url
        self._publisher_name = publisher_name
        self._default_image_url = default_image_url
        self._default_location = default_location

    def normalize(self, record: dict[str, Any]) -> Story:
        """Build a Story from one raw record."""
        attrs = unwrap_attributes(record) or {}
        content_type = _text(attrs.get("type")).lower() or ContentType.ARTICLE.value

        return Story(
            id=attrs.get("id", record.get("id")),
            title=_first_text(attrs, "Title", "title"),
            image_url=self._image_url(attrs.get("Cover_image")),
            slug=_text(attrs.get("slug")),
            categories=self._categories(attrs.get("categories")),
            authors=self._authors(attrs.get("Authors")),
            localizations=self._localizations(attrs.get("localizations")),
            location=self._location(attrs),
            date=format_date(attrs.get("Original_published_date")),
            type=content_type,
            is_student_article=attrs.get("is_student_article") is True,
        )

    def normalize_all(self, records: list[dict[str, Any]]) -> list[Story]:
        return [self.normalize(record) for record in records]

    def _image_url(self, relation: Any) -> str:
        url = _text(first_related(relation).get("url"))
        if not url:
            return self._default_image_url
        if url.startswith(("http://", "https://")) or not self._base_url:
            return url
        return f"{self._base_url.rstrip('/')}/{url.lstrip('/')}"

    def _authors(self, relation: Any) -> tuple[str, ...]:
        items = related_items(relation)
        if not items:
            return (self._publisher_name,)
        names: list[str] = []
        for item in items:
            name = _text(first_related(item.get("author_name")).get("Name")) or _text(
                item.get("Name")
            )
            names.append(name or self._publisher_name)
        return tuple(names)

    def _categories(self, relation: Any) -> tuple[Category, ...]:
        return tuple(
            Category(
                title=_first_text(item, "Title", "title") or self._publisher_name,
                slug=_text(item.get("slug")),
            )
            for item in related_items(relation)
        )

    def _localizations(self, relation: Any) -> tuple[LocalizationVariant, ...]:
        variants: list[LocalizationVariant] = []
        for item in related_items(relation):
            locale = _text(item.get("locale"))
            if not locale:
                continue
            variants.append(
                LocalizationVariant(
                    locale=locale,
                    title=_first_text(item, "title", "Title"),
                    strap=_first_text(item, "strap", "Strap"),
                    slug=_text(item.get("slug")),
                )
            )
        return tuple(variants)

    def _location(self, attrs: dict[str, Any]) -> str:
        return (
            _text(first_related(attrs.get("location")).get("name"))
            or _text(attrs.get("location_auto_suggestion"))
            or self._default_location
        )
