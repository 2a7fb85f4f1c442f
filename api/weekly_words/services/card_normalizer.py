"""
Card normalizer - maps raw word source responses onto Card records.

Two response shapes are supported:

* WordsAPI (primary): ``{"word": str, "results": [{"partOfSpeech", "definition", "examples"}]}``
* Merriam-Webster (secondary): ``[{"fl": str, "shortdef": [str], "meta": {...}}, ...]``

Both normalizers return ``None`` when the response carries no usable data.
"""
from typing import Any, Optional
import logging

from weekly_words.models.card import Card

logger = logging.getLogger(__name__)

DEFINITION_SEPARATOR = ", "


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def join_short_definitions(shortdef: Any) -> str:
    """Join a dictionary ``shortdef`` list into one definition string.

    ``["quick", "speedy"]`` becomes ``"quick, speedy"``. Empty items are skipped,
    so the result never ends with a dangling separator.
    """
    if isinstance(shortdef, str):
        return shortdef
    if not isinstance(shortdef, list):
        return ""
    return DEFINITION_SEPARATOR.join(_text(item) for item in shortdef if _text(item))


def card_from_primary(response: Any) -> Optional[Card]:
    """Build a Card from a WordsAPI response, or None if it has no result."""
    if not isinstance(response, dict):
        return None

    results = response.get("results")
    if not isinstance(results, list) or not results:
        return None

    first = results[0]
    word = _text(response.get("word"))
    if not isinstance(first, dict) or not word.strip():
        logger.warning(f"Primary response has no usable result: {str(response)[:200]}")
        return None

    usage = ""
    examples = first.get("examples")
    if isinstance(examples, list) and examples:
        usage = _text(examples[0])

    return Card(
        word=word,
        part_of_speech=_text(first.get("partOfSpeech")),
        definition=_text(first.get("definition")),
        usage=usage,
    )


def card_from_secondary(word: str, response: Any) -> Optional[Card]:
    """Build a Card for ``word`` from a Merriam-Webster response.

    Only the first entry is considered, and only when it carries ``meta``;
    otherwise the dictionary returned spelling suggestions instead of an entry.
    """
    if not isinstance(response, list) or not response or not word.strip():
        return None

    entry = response[0]
    if not isinstance(entry, dict) or "meta" not in entry:
        return None

    return Card(
        word=word,
        part_of_speech=_text(entry.get("fl")),
        definition=join_short_definitions(entry.get("shortdef")),
    )
