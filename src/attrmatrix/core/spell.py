"""Phonetic spell key derived from a row name.

``derive_spell`` turns the Han characters of a name into capitalised,
toneless pinyin syllables (``"汉字" -> "HanZi"``) and leaves every other
character as it is (``"β-汉" -> "β-Han"``).  Simplified and traditional
characters are both covered by pypinyin's dictionaries.

The key is a display/sort aid only.  A failing transliteration is logged
and degrades to ``""``; it never fails the row write that triggered it.
"""

from __future__ import annotations

import re

from pypinyin import Style, lazy_pinyin

from attrmatrix.core.logging import get_logger

logger = get_logger(__name__)

# CJK Unified Ideographs, Extension A, and Compatibility Ideographs
_HAN_RUN = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]+")


def _transliterate(name: str) -> str:
    parts: list[str] = []
    pos = 0
    for match in _HAN_RUN.finditer(name):
        parts.append(name[pos:match.start()])
        # whole run at once so pypinyin can use phrase context for polyphones
        syllables = lazy_pinyin(match.group(), style=Style.NORMAL, strict=False)
        parts.extend(s.capitalize() for s in syllables)
        pos = match.end()
    parts.append(name[pos:])
    return "".join(parts)


def derive_spell(name: str) -> str:
    """Return the spell key for *name*, or ``""`` if it cannot be derived."""
    try:
        return _transliterate(name)
    except Exception as exc:  # noqa: BLE001
        logger.warning("spell_derivation_failed", name=name, error=repr(exc))
        return ""


__all__ = ["derive_spell"]
