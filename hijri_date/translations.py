# hijri_date/translations.py
"""
Built-in names for the supported locales.

``lookup(locale, key)`` is the default translator; a project can point
``HIJRI["translator"]`` at its own callable with the same signature.
Weekday lists follow ``date.weekday()`` (Monday is 0).
"""
from __future__ import annotations

from typing import Any

CATALOG: dict[str, dict[str, Any]] = {
    "ar": {
        "formatting": {
            "months": [
                "محرم", "صفر", "ربيع الأول", "ربيع الآخر", "جمادى الأولى", "جمادى الآخرة",
                "رجب", "شعبان", "رمضان", "شوال", "ذو القعدة", "ذو الحجة",
            ],
            "months_short": [
                "محرم", "صفر", "ربيع ١", "ربيع ٢", "جمادى ١", "جمادى ٢",
                "رجب", "شعبان", "رمضان", "شوال", "القعدة", "الحجة",
            ],
            "weekdays": ["الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"],
            "weekdays_short": ["إثن", "ثلا", "أرب", "خمي", "جمع", "سبت", "أحد"],
            "digits": "٠١٢٣٤٥٦٧٨٩",
        },
    },
    "bn": {
        "formatting": {
            "months": [
                "মহররম", "সফর", "রবিউল আউয়াল", "রবিউস সানি", "জমাদিউল আউয়াল", "জমাদিউস সানি",
                "রজব", "শাবান", "রমজান", "শাওয়াল", "জিলকদ", "জিলহজ",
            ],
            "months_short": [
                "মহ", "সফ", "রবি ১", "রবি ২", "জমা ১", "জমা ২",
                "রজ", "শাবা", "রম", "শাও", "জিলক", "জিলহ",
            ],
            "weekdays": ["সোমবার", "মঙ্গলবার", "বুধবার", "বৃহস্পতিবার", "শুক্রবার", "শনিবার", "রবিবার"],
            "weekdays_short": ["সোম", "মঙ্গল", "বুধ", "বৃহঃ", "শুক্র", "শনি", "রবি"],
            "digits": "০১২৩৪৫৬৭৮৯",
        },
    },
    "dv": {
        "formatting": {
            "months": [
                "މުޙައްރަމް", "ޞަފަރު", "ރަބީޢުލް އައްވަލް", "ރަބީޢުލް އާޚިރު", "ޖުމާދަލް އޫލާ", "ޖުމާދަލް އާޚިރާ",
                "ރަޖަބު", "ޝަޢުބާން", "ރަމަޟާން", "ޝައްވާލް", "ޛުލްޤަޢިދާ", "ޛުލްޙިއްޖާ",
            ],
            "months_short": [
                "މުޙައްރަމް", "ޞަފަރު", "ރަބީޢުލް 1", "ރަބީޢުލް 2", "ޖުމާދަލް 1", "ޖުމާދަލް 2",
                "ރަޖަބު", "ޝަޢުބާން", "ރަމަޟާން", "ޝައްވާލް", "ޛުލްޤަޢިދާ", "ޛުލްޙިއްޖާ",
            ],
            "weekdays": ["ހޯމަ", "އަންގާރަ", "ބުދަ", "ބުރާސްފަތި", "ހުކުރު", "ހޮނިހިރު", "އާދިއްތަ"],
            "weekdays_short": ["ހޯމަ", "އަންގާރަ", "ބުދަ", "ބުރާސް", "ހުކުރު", "ހޮނިހިރު", "އާދިއްތަ"],
            "digits": "0123456789",
        },
    },
    "en": {
        "formatting": {
            "months": [
                "Muharram", "Safar", "Rabi al-Awwal", "Rabi al-Akhir", "Jumada al-Ula", "Jumada al-Akhira",
                "Rajab", "Sha'ban", "Ramadan", "Shawwal", "Dhul-Qa'da", "Dhul-Hijja",
            ],
            "months_short": [
                "Muh", "Saf", "Rab I", "Rab II", "Jum I", "Jum II",
                "Raj", "Sha", "Ram", "Shw", "DhQ", "DhH",
            ],
            "weekdays": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
            "weekdays_short": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
            "digits": "0123456789",
        },
    },
}


def lookup(locale: str, key: str) -> str:
    """
    Resolve a dotted key such as ``formatting.months.9`` for ``locale``.

    Month keys are 1-based like the month numbers, weekday keys are
    ``date.weekday()`` values. Raises ``LookupError`` for anything missing.
    """
    node: Any = CATALOG.get(locale)
    if node is None:
        raise LookupError(f"No translations for locale {locale!r}.")

    parts = key.split(".")
    for i, part in enumerate(parts):
        if isinstance(node, dict):
            if part not in node:
                raise LookupError(f"Missing translation {locale}:{key}")
            node = node[part]
        elif isinstance(node, (list, str)) and part.isdigit():
            idx = int(part) - 1 if parts[i - 1] in ("months", "months_short") else int(part)
            if not 0 <= idx < len(node):
                raise LookupError(f"Missing translation {locale}:{key}")
            node = node[idx]
        else:
            raise LookupError(f"Missing translation {locale}:{key}")

    if not isinstance(node, str):
        raise LookupError(f"Translation {locale}:{key} is not a string.")
    return node
