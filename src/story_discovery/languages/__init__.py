from story_discovery.languages.resolver import resolve_languages, with_available_languages
from story_discovery.languages.table import LANGUAGES, Language, display_name, get_language

__all__ = [
    "LANGUAGES",
    "Language",
    "display_name",
    "get_language",
    "resolve_languages",
    "with_available_languages",
]
