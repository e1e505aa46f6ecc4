"""
Fuzzy header -> canonical field mapping.

Headers and catalog aliases are normalized the same way (lowercase, no
punctuation, single spaces) and compared with ``match_score``. Each field
takes the best header scoring above ``MATCH_THRESHOLD``; runners-up are kept
as alternates so a UI can offer a one-click correction.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from rapidfuzz.distance import Levenshtein

from listing_doctor.catalog import FIELD_PATTERNS
from listing_doctor.models import FieldMapping, FieldPattern
from listing_doctor.settings import MATCH_THRESHOLD, MAX_ALTERNATES, SUGGESTION_THRESHOLD

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(value: str) -> str:
    text = _PUNCTUATION_RE.sub("", str(value).lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def match_score(a: str, b: str) -> float:
    """1.0 equal, 0.9 containment, else normalized Levenshtein similarity."""
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.9
    longest = max(len(a), len(b))
    return 1.0 - Levenshtein.distance(a, b) / longest


def _normalized_aliases(pattern: FieldPattern) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for alias in pattern.aliases:
        normalized = normalize_header(alias)
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)


_CATALOG: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (pattern.name, _normalized_aliases(pattern)) for pattern in FIELD_PATTERNS
)


def _usable_headers(headers: Sequence[str]) -> list[tuple[int, str, str]]:
    """(index, original, normalized) for headers that still say something."""
    usable = []
    for index, header in enumerate(headers):
        normalized = normalize_header(header)
        if normalized:
            usable.append((index, header, normalized))
    return usable


def _ranked_candidates(
    aliases: Sequence[str],
    usable: Sequence[tuple[int, str, str]],
) -> list[tuple[float, int, str]]:
    """Best score per header above the match threshold, highest first."""
    candidates: list[tuple[float, int, str]] = []
    for index, header, normalized in usable:
        best = max((match_score(normalized, alias) for alias in aliases), default=0.0)
        if best > MATCH_THRESHOLD:
            candidates.append((best, index, header))
    # Stable on ties: earlier headers stay ahead.
    candidates.sort(key=lambda item: item[0], reverse=True)
    return candidates


def closest_matches(
    field_name: str,
    headers: Sequence[str],
    threshold: float = SUGGESTION_THRESHOLD,
    limit: int = MAX_ALTERNATES,
) -> list[str]:
    """Non-binding suggestions: headers resembling the field name itself."""
    target = field_name.lower()
    scored: list[tuple[float, str]] = []
    seen: set[str] = set()
    for _, header, normalized in _usable_headers(headers):
        if header in seen:
            continue
        score = match_score(target, normalized)
        if score > threshold:
            scored.append((score, header))
            seen.add(header)
    scored.sort(key=lambda item: item[0], reverse=True)
    return [header for _, header in scored[:limit]]


def map_columns(headers: Sequence[str]) -> FieldMapping:
    """
    Map every catalog field to at most one header.

    A header may serve several fields (e.g. a single ``Cena`` column for both
    total and final price). Unmapped fields get an error line and closest-match
    suggestions; whether that is fatal is decided by the caller.
    """
    mapping = FieldMapping()
    usable = _usable_headers(headers)

    for field_name, aliases in _CATALOG:
        candidates = _ranked_candidates(aliases, usable)
        if candidates:
            score, index, header = candidates[0]
            mapping.columns[field_name] = header
            mapping.indices[field_name] = index
            mapping.scores[field_name] = score

            alternates: list[str] = []
            for _, _, other in candidates[1:]:
                if other != header and other not in alternates:
                    alternates.append(other)
                if len(alternates) == MAX_ALTERNATES:
                    break
            if alternates:
                mapping.alternates[field_name] = alternates
        else:
            mapping.unmapped.append(field_name)
            mapping.errors.append(f"Nie znaleziono kolumny dla: {field_name}")
            closest = closest_matches(field_name, headers)
            if closest:
                mapping.suggestions[field_name] = closest

    logger.info(
        "Mapped %d/%d catalog fields (confidence %.2f)",
        mapping.mapped_count,
        len(_CATALOG),
        mapping.confidence,
    )
    for field_name, header in mapping.columns.items():
        logger.debug("  %s <- %r (%.2f)", field_name, header, mapping.scores[field_name])
    return mapping


def suggest_columns(headers: Sequence[str]) -> dict[str, dict[str, Any]]:
    """
    Per catalog field: the header currently mapped (if any) and the headers
    closest to the field name, for a manual re-mapping screen.
    """
    mapping = map_columns(headers)
    return {
        field_name: {
            "current": mapping.header_for(field_name),
            "suggestions": closest_matches(field_name, headers),
        }
        for field_name, _ in _CATALOG
    }
