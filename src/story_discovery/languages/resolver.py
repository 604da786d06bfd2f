"""Language availability for story cards."""

import dataclasses
from collections.abc import Iterable

from story_discovery.data import LanguageVariant, LocalizationVariant, Story
from story_discovery.languages.table import display_name


def resolve_languages(
    localizations: Iterable[LocalizationVariant],
    active_locale: str,
    own_slug: str,
) -> list[LanguageVariant]:
    """List the language variants a reader can switch to.

    Each localization keeps its store order. If the active locale is not
    among them, an entry pointing at the story's own slug is prepended so
    the story stays reachable in the language being browsed.

    Args:
        localizations: Sibling editions reported by the store.
        active_locale: Locale the reader is browsing in.
        own_slug: Slug of the story as fetched.

    Returns:
        The selectable variants, never empty.
    """
    variants = [
        LanguageVariant(code=loc.locale, display_name=display_name(loc.locale), slug=loc.slug)
        for loc in localizations
    ]
    if not any(v.code == active_locale for v in variants):
        variants.insert(
            0,
            LanguageVariant(
                code=active_locale,
                display_name=display_name(active_locale),
                slug=own_slug,
            ),
        )
    return variants


def with_available_languages(story: Story, active_locale: str) -> Story:
    """Return ``story`` with its ``available_languages`` filled in."""
    variants = resolve_languages(story.localizations, active_locale, story.slug)
    return dataclasses.replace(story, available_languages=tuple(variants))
