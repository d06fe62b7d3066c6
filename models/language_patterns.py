"""Lexical resources used by the language detector and the enrichment analyzers.

All word lists are lower case. Phrases are matched on word boundaries by
``StringUtils.count_phrase_hits``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__: list[str] = [
    "CULTURAL_MARKERS",
    "DETECTION_LANGUAGES",
    "DOMAIN_KEYWORDS",
    "EMOJI_SENTIMENT",
    "FORMAL_PATTERNS",
    "NEGATIVE_WORDS",
    "POSITIVE_WORDS",
    "SLANG_PATTERNS",
]

# Priority order of the lexical detection stage.
DETECTION_LANGUAGES: Final[tuple[str, ...]] = ("en", "es", "fr", "de", "it")

SLANG_PATTERNS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "en": ("gonna", "wanna", "gotta", "ain't", "y'all", "sup", "bro", "dude"),
        "es": ("tío", "guay", "flipar", "currar", "mogollón", "chaval", "pijo"),
        "fr": ("mec", "nana", "bouquin", "fringues", "bosser", "kiffer"),
        "de": ("krass", "geil", "chillen", "checken", "abfeiern", "bock"),
        "it": ("figo", "ganzo", "figata", "sbronza", "casino", "roba"),
    }
)

FORMAL_PATTERNS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "en": ("furthermore", "nevertheless", "consequently", "therefore"),
        "es": ("sin embargo", "no obstante", "por consiguiente", "por tanto"),
        "fr": ("néanmoins", "cependant", "par conséquent", "toutefois"),
        "de": ("dennoch", "allerdings", "folglich", "demzufolge"),
        "it": ("tuttavia", "nondimeno", "pertanto", "quindi"),
    }
)

POSITIVE_WORDS: Final[tuple[str, ...]] = ("good", "great", "excellent", "amazing", "wonderful", "fantastic")
NEGATIVE_WORDS: Final[tuple[str, ...]] = ("bad", "terrible", "awful", "horrible", "disappointing")

# Checked in order; the first domain with a matching keyword wins.
DOMAIN_KEYWORDS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "business": ("meeting", "project", "deadline", "client", "revenue"),
        "technical": ("api", "database", "algorithm", "software", "programming"),
        "casual": ("hang out", "chill", "party", "fun", "friend"),
    }
)

# tag -> (flag emoji, keywords)
CULTURAL_MARKERS: Final[Mapping[str, tuple[str, tuple[str, ...]]]] = MappingProxyType(
    {
        "us_culture": ("\U0001f1fa\U0001f1f8", ("america", "american")),
        "uk_culture": ("\U0001f1ec\U0001f1e7", ("britain", "british")),
        "spanish_culture": ("\U0001f1ea\U0001f1f8", ("spain", "spanish")),
    }
)

# Keys carry no variation selector (U+FE0F); lookups strip it as well.
EMOJI_SENTIMENT: Final[Mapping[str, float]] = MappingProxyType(
    {
        "😀": 0.8,
        "😃": 0.9,
        "😄": 0.9,
        "😁": 0.8,
        "😆": 0.7,
        "😅": 0.6,
        "😂": 0.9,
        "🤣": 0.9,
        "😊": 0.8,
        "😇": 0.7,
        "😍": 0.9,
        "🥰": 0.9,
        "😘": 0.8,
        "😗": 0.6,
        "😙": 0.6,
        "😚": 0.6,
        "😋": 0.7,
        "😛": 0.6,
        "😝": 0.6,
        "😜": 0.6,
        "🤪": 0.6,
        "🤨": 0.0,
        "🧐": 0.0,
        "🤓": 0.5,
        "😎": 0.7,
        "🤩": 0.9,
        "🥳": 0.9,
        "😏": 0.3,
        "😒": -0.3,
        "😞": -0.5,
        "😔": -0.5,
        "😟": -0.4,
        "😕": -0.3,
        "🙁": -0.4,
        "☹": -0.5,
        "😣": -0.4,
        "😖": -0.4,
        "😫": -0.5,
        "😩": -0.4,
        "🥺": -0.2,
        "😢": -0.6,
        "😭": -0.7,
        "😤": -0.3,
        "😠": -0.6,
        "😡": -0.8,
        "🤬": -0.9,
        "🤯": -0.2,
        "😳": 0.0,
        "🥵": -0.2,
        "🥶": -0.2,
        "😱": -0.4,
        "😨": -0.5,
        "😰": -0.4,
        "😥": -0.3,
        "😓": -0.2,
        "🤗": 0.8,
        "🤔": 0.0,
        "🤭": 0.3,
        "🤫": 0.0,
        "🤥": -0.2,
        "😶": 0.0,
        "😐": 0.0,
        "😑": -0.1,
        "😬": -0.2,
        "🙄": -0.3,
        "😯": 0.0,
        "😦": -0.2,
        "😧": -0.3,
        "😮": 0.1,
        "😲": 0.2,
        "🥱": -0.1,
        "😴": 0.0,
        "🤤": 0.0,
        "😪": -0.1,
        "😵": -0.3,
        "🤐": 0.0,
        "🥴": -0.2,
        "🤢": -0.4,
        "🤮": -0.6,
        "🤧": -0.2,
        "😷": -0.1,
        "🤒": -0.3,
        "🤕": -0.3,
        "🤑": 0.3,
        "🤠": 0.6,
    }
)
