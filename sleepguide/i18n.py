"""Internationalization module - provides t("key") for translated strings.

All user-facing text must use t("key") to support multiple languages (EN/RO).
Add new translations to _TRANSLATIONS dict with both "en" and "ro" values.
Placeholders like {time} are filled by the caller with str.replace().
"""
from typing import Dict

from config import DEFAULT_LANGUAGE

_current_language: str = "en"

LANGUAGES: Dict[str, Dict[str, str]] = {
    "en": {"name": "English", "flag": "🇺🇸", "code": "EN"},
    "ro": {"name": "Română", "flag": "🇷🇴", "code": "RO"},
}

_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "app_title": {"en": "Sleep Guide", "ro": "Ghid de somn"},
    "set_sleep_timer": {"en": "Set bedtime", "ro": "Setează ora de culcare"},
    "set_time": {"en": "Set time", "ro": "Setează ora"},
    "cancel": {"en": "Cancel", "ro": "Anulează"},
    "hours": {"en": "HH", "ro": "HH"},
    "minutes": {"en": "MM", "ro": "MM"},
    "seconds": {"en": "SS", "ro": "SS"},
    "no_bedtime_set": {"en": "No bedtime set yet", "ro": "Nicio oră de culcare setată"},
    "set_valid_bedtime": {"en": "Please set a valid bedtime", "ro": "Te rog setează o oră de culcare validă"},
    "bedtime_at": {"en": "Your bedtime is at {time} 🌙", "ro": "Ora ta de culcare este {time} 🌙"},
    "bedtime_in": {"en": "Bedtime in {countdown}", "ro": "Culcarea în {countdown}"},
    "day_progress": {"en": "{percent} of the day has passed", "ro": "A trecut {percent} din zi"},
    "bedtime_reached_title": {"en": "Time for bed!", "ro": "E timpul de culcare!"},
    "bedtime_reached_body": {
        "en": "It's {time}. Put the screens away and get some rest.",
        "ro": "Este {time}. Lasă ecranele deoparte și odihnește-te.",
    },
    "scheduling_failed": {
        "en": "Could not schedule the reminder, retrying shortly",
        "ro": "Memento-ul nu a putut fi programat, se reîncearcă în curând",
    },
}


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def set_language(lang: str) -> None:
    """Set the current language. Unknown codes are ignored."""
    global _current_language
    if lang in LANGUAGES:
        _current_language = lang


def t(key: str) -> str:
    """Get translated string for the given key.

    Falls back to English, then to the key itself.
    """
    translations = _TRANSLATIONS.get(key)
    if translations is None:
        return key
    return translations.get(_current_language) or translations.get("en") or key


set_language(DEFAULT_LANGUAGE)
