"""Subsequence fuzzy matching and ranking for stash items.

A query matches a name when its characters appear in order within the name.
Scores reward contiguous runs, word-boundary hits, and early starts; a small
recency term nudges ties toward recently modified items.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .items import StashItem

BASE_MATCH = 16
CONSECUTIVE_MATCH_BONUS = 12
GAP_PENALTY = 2
WORD_BOUNDARY_BONUS = 10
START_POSITION_MAX_BONUS = 10
EXACT_MATCH_BONUS = 1_000
RECENCY_BONUS = 10
RECENCY_WINDOW_SECONDS = 7 * 24 * 60 * 60

WORD_SEPARATORS = frozenset("-_./ ")


@dataclass(frozen=True)
class FuzzyMatch:
    matched_indices: tuple[int, ...]
    score: int


def fold_case(text: str) -> str:
    """Lower-case ``text`` one character at a time, keeping indices aligned.

    Characters whose lower-case form is longer than one code point are left
    unchanged so match indices still address the original string.
    """
    out: list[str] = []
    for ch in text:
        lowered = ch.lower()
        out.append(lowered if len(lowered) == 1 else ch)
    return "".join(out)


def is_word_boundary(name: str, index: int) -> bool:
    """Return whether ``name[index]`` starts a word for scoring purposes."""
    if index <= 0:
        return True
    prev = name[index - 1]
    current = name[index]
    if prev in WORD_SEPARATORS:
        return True
    if prev.islower() and current.isupper():
        return True
    if prev.isalpha() and current.isdigit():
        return True
    if prev.isdigit() and current.isalpha():
        return True
    return False


def find_fuzzy_match(query: str, name: str, original_name: str | None = None) -> FuzzyMatch | None:
    """Match ``query`` as an ordered subsequence of ``name``.

    Both strings are expected to be case-folded already. Word boundaries are
    judged on ``original_name`` (defaults to ``name``) so camelCase survives
    folding. Returns ``None`` when the query cannot be fully consumed.
    """
    boundary_source = name if original_name is None else original_name
    matched: list[int] = []
    score = 0
    query_pointer = 0
    prev_idx = -1

    for name_pointer, name_char in enumerate(name):
        if query_pointer >= len(query):
            break
        if name_char != query[query_pointer]:
            continue
        score += BASE_MATCH
        if matched:
            if name_pointer == prev_idx + 1:
                score += CONSECUTIVE_MATCH_BONUS
            else:
                score -= GAP_PENALTY * (name_pointer - prev_idx - 1)
        if is_word_boundary(boundary_source, name_pointer):
            score += WORD_BOUNDARY_BONUS
        matched.append(name_pointer)
        prev_idx = name_pointer
        query_pointer += 1

    if query_pointer != len(query):
        return None
    if matched:
        score += max(0, START_POSITION_MAX_BONUS - matched[0])
    return FuzzyMatch(matched_indices=tuple(matched), score=score)


def recency_score(mtime: float, now: float) -> int:
    """Linear decay from ``RECENCY_BONUS`` to 0 over the recency window."""
    age = now - mtime
    if age <= 0:
        return RECENCY_BONUS
    if age >= RECENCY_WINDOW_SECONDS:
        return 0
    return round(RECENCY_BONUS * (1 - age / RECENCY_WINDOW_SECONDS))


def fuzzy_match(query: str, item: StashItem, now: float) -> StashItem | None:
    """Return a scored copy of ``item`` for ``query``, or ``None`` when excluded."""
    recency = recency_score(item.mtime, now)
    if not query.strip():
        return replace(item, score=recency, matched_indices=())

    query_folded = fold_case(query)
    name_folded = fold_case(item.name)
    if query_folded == name_folded:
        return replace(
            item,
            score=EXACT_MATCH_BONUS + len(query) + recency,
            matched_indices=tuple(range(len(item.name))),
        )

    result = find_fuzzy_match(query_folded, name_folded, item.name)
    if result is None:
        return None
    return replace(item, score=result.score + recency, matched_indices=result.matched_indices)


def is_exact_match(query: str, name: str) -> bool:
    return bool(query) and fold_case(query) == fold_case(name)


def rank_key(query: str, item: StashItem) -> tuple[bool, int, float, int, str, str, str]:
    """Sort key giving a total order over scored items for ``query``."""
    return (
        not is_exact_match(query, item.name),
        -item.score,
        -item.mtime,
        len(item.name),
        item.name.casefold(),
        item.name,
        str(item.path),
    )


def fuzzy(query: str, items: Iterable[StashItem], now: float | None = None) -> list[StashItem]:
    """Filter and rank ``items`` against ``query``.

    A blank query keeps every item, ordered by recency then name.
    """
    if now is None:
        now = time.time()
    matched: list[StashItem] = []
    for item in items:
        scored = fuzzy_match(query, item, now)
        if scored is not None:
            matched.append(scored)
    matched.sort(key=lambda item: rank_key(query, item))
    return matched


def highlight_matched_indices(
    name: str,
    matched_indices: Iterable[int] | None,
    start: str = "\033[36m",
    end: str = "\033[0m",
) -> str:
    """Wrap each matched character of ``name`` in ``start``/``end`` markers."""
    if not matched_indices:
        return name
    wanted = set(matched_indices)
    if not wanted:
        return name
    out: list[str] = []
    for idx, ch in enumerate(name):
        if idx in wanted:
            out.append(f"{start}{ch}{end}")
        else:
            out.append(ch)
    return "".join(out)
