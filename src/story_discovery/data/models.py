"""Core data models for story discovery."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ContentType(StrEnum):
    """Content types a reader can filter on."""

    ARTICLE = "article"
    VIDEO = "video"
    AUDIO = "audio"
    STUDENT = "student"


class DatePreset(StrEnum):
    """Relative date windows, resolved against the current instant at build time."""

    PAST_7_DAYS = "7days"
    PAST_14_DAYS = "14days"
    PAST_30_DAYS = "30days"
    PAST_YEAR = "1year"


class NavigationType(StrEnum):
    """How the current page was reached (mirrors ``PerformanceNavigationTiming.type``)."""

    NAVIGATE = "navigate"
    RELOAD = "reload"
    BACK_FORWARD = "back_forward"
    PRERENDER = "prerender"


class RequestShape(StrEnum):
    """Wire shape of a CMS request.

    ``NESTED`` sends the full ``$and`` predicate tree. ``FLAT`` sends each
    predicate as its own bracketed key, which is how the store resolves
    author matching through its dedicated contains-query parameter.
    """

    NESTED = "nested"
    FLAT = "flat"


FILTER_FACETS = ("types", "author", "location", "dates", "content", "languages")


@dataclass(frozen=True)
class FilterState:
    """The canonical set of active facets.

    Multi-valued facets are ordered and de-duplicated tuples so that the URL
    order survives a round trip. Date facets keep the raw ISO strings; the
    query builder decides whether they are usable.
    """

    categories: tuple[str, ...] = ()
    author: str | None = None
    location: tuple[str, ...] = ()
    date_from: str | None = None
    date_to: str | None = None
    date_presets: tuple[str, ...] = ()
    content_types: tuple[ContentType, ...] = ()
    languages: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.categories
            or self.author
            or self.location
            or self.date_from
            or self.date_to
            or self.date_presets
            or self.content_types
            or self.languages
        )

    @property
    def active_facets(self) -> list[str]:
        """URL names of the facets that currently carry a value."""
        active: list[str] = []
        if self.categories:
            active.append("types")
        if self.author:
            active.append("author")
        if self.location:
            active.append("location")
        if self.date_from or self.date_to or self.date_presets:
            active.append("dates")
        if self.content_types:
            active.append("content")
        if self.languages:
            active.append("languages")
        return active


@dataclass(frozen=True)
class Predicate:
    """A single field condition, e.g. ``categories.slug $in [...]``."""

    path: tuple[str, ...]
    operator: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """An OR group of predicates."""

    predicates: tuple[Predicate, ...]


Condition = Predicate | AnyOf


@dataclass(frozen=True)
class QueryDescriptor:
    """Everything needed to issue one CMS request.

    One descriptor is produced per requested language.
    """

    conditions: tuple[Condition, ...]
    populate: dict[str, Any] = field(hash=False, compare=False)
    sort: tuple[str, ...]
    page: int
    page_size: int
    locale: str
    shape: RequestShape = RequestShape.NESTED


@dataclass(frozen=True)
class RawPage:
    """One page of raw records as returned by the store."""

    records: list[dict[str, Any]]
    total: int | None = None
    page_count: int | None = None


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one request, paired with the locale it was issued for.

    A failed request carries no records and a non-null ``error``.
    """

    locale: str
    records: list[dict[str, Any]] = field(default_factory=list)
    total: int | None = None
    page_count: int | None = None
    error: str | None = None

    @property
    def item_count(self) -> int:
        """Total matching items for this locale, falling back to the page length."""
        if self.total is not None:
            return self.total
        return len(self.records)


@dataclass(frozen=True)
class Category:
    """A category reference on a story."""

    title: str
    slug: str = ""


@dataclass(frozen=True)
class LocalizationVariant:
    """One language edition of a story, referenced by its own slug."""

    locale: str
    title: str = ""
    strap: str = ""
    slug: str = ""


@dataclass(frozen=True)
class LanguageVariant:
    """A selectable language for a story card."""

    code: str
    display_name: str
    slug: str


@dataclass(frozen=True)
class Story:
    """A fully normalized story ready for presentation."""

    id: int | str | None
    title: str
    image_url: str
    slug: str
    categories: tuple[Category, ...] = ()
    authors: tuple[str, ...] = ()
    localizations: tuple[LocalizationVariant, ...] = ()
    location: str = ""
    date: str = ""
    type: str = ContentType.ARTICLE.value
    is_student_article: bool = False
    available_languages: tuple[LanguageVariant, ...] = ()


@dataclass(frozen=True)
class PaginationState:
    """Page position and counts for the current result set."""

    current_page: int = 1
    page_size: int = 20
    total_pages: int = 1
    total_items: int = 0


@dataclass(frozen=True)
class DiscoveryRequest:
    """What the presentation layer asks for."""

    filters: FilterState = field(default_factory=FilterState)
    page: int = 1
    search_text: str | None = None


@dataclass(frozen=True)
class DiscoveryResult:
    """What the presentation layer renders."""

    stories: tuple[Story, ...] = ()
    pagination: PaginationState = field(default_factory=PaginationState)
    is_loading: bool = False
    error: str | None = None
