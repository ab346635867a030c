# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for the Timesheet Exporter.

This module provides translation functions and language management.
Supports English and German with automatic system locale detection.
"""

import locale
from PySide6.QtCore import QLocale

from timesheet_exporter.i18n.translations import TRANSLATIONS

# Supported languages
SUPPORTED_LANGUAGES = ["en", "de"]

# Current language (default to English)
_current_language = "en"


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'de' if German is detected, 'en' otherwise.
    """
    try:
        system_locale = locale.getlocale()[0]
    except ValueError:
        system_locale = None
    if system_locale and system_locale.startswith('de'):
        return 'de'
    return 'en'


def set_language(lang: str) -> None:
    """
    Set the current UI language.

    Args:
        lang: Language code ('en', 'de' or 'auto')
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        lang = 'en'
    _current_language = lang

    # Update Qt Locale for dates and standard widgets
    if lang == 'de':
        QLocale.setDefault(QLocale(QLocale.German))
    else:
        QLocale.setDefault(QLocale(QLocale.English))


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'form.resource')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS.get('en', {}))
    text = translations.get(key, key)

    # Apply format arguments if provided
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text
