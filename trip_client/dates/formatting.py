"""
Locale tables for date display.

Month names and the numeric date pattern are kept here instead of going
through the process locale, so rendering does not depend on the host.
"""

from datetime import date
from typing import Dict, List


MONTH_ABBREVIATIONS: Dict[str, List[str]] = {
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    "pt": ["jan", "fev", "mar", "abr", "mai", "jun",
           "jul", "ago", "set", "out", "nov", "dez"],
}

MONTH_NAMES: Dict[str, List[str]] = {
    "en": ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"],
    "pt": ["janeiro", "fevereiro", "março", "abril", "maio", "junho", "julho",
           "agosto", "setembro", "outubro", "novembro", "dezembro"],
}

NUMERIC_DATE_FORMATS: Dict[str, str] = {
    "en": "%m/%d/%Y",
    "pt": "%d/%m/%Y",
}

DEFAULT_LOCALE = "en"


def _resolve(locale: str) -> str:
    return locale if locale in NUMERIC_DATE_FORMATS else DEFAULT_LOCALE


def month_abbreviation(day: date, locale: str = DEFAULT_LOCALE) -> str:
    """Short month name of a day, e.g. "Jul"."""
    return MONTH_ABBREVIATIONS[_resolve(locale)][day.month - 1]


def month_name(day: date, locale: str = DEFAULT_LOCALE) -> str:
    """Full month name of a day, e.g. "July"."""
    return MONTH_NAMES[_resolve(locale)][day.month - 1]


def format_numeric(day: date, locale: str = DEFAULT_LOCALE) -> str:
    """Numeric date in the locale's order, e.g. "07/10/2024" for en."""
    return day.strftime(NUMERIC_DATE_FORMATS[_resolve(locale)])
