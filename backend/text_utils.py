"""Low-level text helpers used by the compliance engine and prompt builders.

No dependency on schemas or any other project module.
"""

from typing import Iterable, Optional


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def first_matching_phrase(text: str, phrases: Iterable[str]) -> Optional[str]:
    """Return the first phrase found in *text* (case-insensitive substring)."""
    lowered = (text or "").lower()
    for phrase in phrases:
        if phrase.lower() in lowered:
            return phrase
    return None


def matching_phrases(text: str, phrases: Iterable[str]) -> list[str]:
    """Distinct phrases from *phrases* present in *text*, in list order."""
    lowered = (text or "").lower()
    found: list[str] = []
    for phrase in phrases:
        if phrase.lower() in lowered and phrase not in found:
            found.append(phrase)
    return found

