"""Locales the publication produces content in."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """A supported locale and how it is shown to readers."""

    code: str
    native_name: str
    english_name: str


LANGUAGES: tuple[Language, ...] = (
    Language("en", "English", "English"),
    Language("hi", "हिंदी", "Hindi"),
    Language("te", "తెలుగు", "Telugu"),
    Language("ta", "தமிழ்", "Tamil"),
    Language("mr", "मराठी", "Marathi"),
    Language("gu", "ગુજરાતી", "Gujarati"),
    Language("or", "ଓଡ଼ିଆ", "Odia"),
    Language("kn", "ಕನ್ನಡ", "Kannada"),
    Language("pa", "ਪੰਜਾਬੀ", "Punjabi"),
    Language("as", "অসমীয়া", "Assamese"),
    Language("ml", "മലയാളം", "Malayalam"),
    Language("ur", "اردو", "Urdu"),
    Language("bn", "বাংলা", "Bengali"),
    Language("bh", "भोजपुरी", "Bhojpuri"),
    Language("hne", "छत्तीसगढ़ी", "Chhattisgarhi"),
)

_BY_CODE: dict[str, Language] = {language.code: language for language in LANGUAGES}


def get_language(code: str) -> Language | None:
    return _BY_CODE.get(code.lower())


def display_name(code: str) -> str:
    """Native-script name for a locale code; unknown codes are shown upper-cased."""
    language = get_language(code)
    return language.native_name if language else code.upper()
