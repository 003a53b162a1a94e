from __future__ import annotations

from collections.abc import Sequence

from ..catalog.entries import Entry

_WORD_BOUNDARY_CHARS = "/_- ."


def _fold_for_query(query: str, candidate: str) -> tuple[str, str]:
    # smart case: an uppercase letter in the query makes matching case-sensitive
    if any(ch.isupper() for ch in query):
        return query, candidate
    return query.casefold(), candidate.casefold()


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as an in-order subsequence of ``candidate``.

    Returns ``None`` when some query character cannot be matched. Contiguous
    runs and word-boundary hits score higher; gaps and long candidates cost.
    """
    if not query:
        return 0
    query_folded, candidate_folded = _fold_for_query(query, candidate)

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in _WORD_BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def refilter(entries: Sequence[Entry], query: str) -> list[Entry]:
    """Return entries matching ``query`` against their raw ``name``.

    An empty query returns a copy of ``entries`` in the same order. Otherwise
    non-matching entries are dropped, each match gets its ``score`` updated,
    and results are ordered by score descending with ties in prior order.
    """
    if not query:
        for entry in entries:
            entry.score = 0
        return list(entries)

    matched: list[Entry] = []
    for entry in entries:
        score = fuzzy_score(query, entry.name)
        if score is None:
            continue
        entry.score = score
        matched.append(entry)
    matched.sort(key=lambda entry: -entry.score)
    return matched
