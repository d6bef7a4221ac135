"""Supported languages and their service codes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageConfig:
    """Language codes used by the speech and generation services."""

    code: str
    name: str
    native_name: str
    speech_code: str
    region: str


INDIAN_LANGUAGES: tuple[LanguageConfig, ...] = (
    LanguageConfig("en", "English", "English", "en-US", "India"),
    LanguageConfig("hi", "Hindi", "हिन्दी", "hi-IN", "North India"),
    LanguageConfig("bn", "Bengali", "বাংলা", "bn-IN", "West Bengal"),
    LanguageConfig("te", "Telugu", "తెలుగు", "te-IN", "Telangana"),
    LanguageConfig("mr", "Marathi", "मराठी", "mr-IN", "Maharashtra"),
    LanguageConfig("ta", "Tamil", "தமிழ்", "ta-IN", "Tamil Nadu"),
    LanguageConfig("ur", "Urdu", "اردو", "ur-IN", "North India"),
    LanguageConfig("gu", "Gujarati", "ગુજરાતી", "gu-IN", "Gujarat"),
    LanguageConfig("kn", "Kannada", "ಕನ್ನಡ", "kn-IN", "Karnataka"),
    LanguageConfig("or", "Odia", "ଓଡ଼ିଆ", "or-IN", "Odisha"),
    LanguageConfig("ml", "Malayalam", "മലയാളം", "ml-IN", "Kerala"),
    LanguageConfig("pa", "Punjabi", "ਪੰਜਾਬੀ", "pa-IN", "Punjab"),
)

DEFAULT_LANGUAGE = "en"

_BY_CODE = {language.code: language for language in INDIAN_LANGUAGES}


def get_language_config(code: str | None) -> LanguageConfig:
    """Return the config for a language code, defaulting to English.

    Accepts both short codes ("hi") and locale codes ("hi-IN").
    """
    if code:
        short = code.split("-", maxsplit=1)[0].lower()
        if short in _BY_CODE:
            return _BY_CODE[short]
    return _BY_CODE[DEFAULT_LANGUAGE]


def normalize_language(code: str | None) -> str:
    """Return the short language code for any supported code."""
    return get_language_config(code).code
