"""
Adaptive top-N clause selection.
"""

from typing import List, Sequence

from .config import DEFAULT_SETTINGS, BulletizerSettings
from .types import ScoredClause

SHORT_TRANSCRIPT_WORDS = 100
MIN_LONG_TARGET = 3


def adaptive_bullet_count(word_count: int, settings: BulletizerSettings = DEFAULT_SETTINGS) -> int:
    """
    Bullet target by transcript length.

    Under 100 words a note gets one or two bullets; longer transcripts get one
    bullet per 25 words, at least 3 and at most ``max_bullets``.
    """
    if word_count < SHORT_TRANSCRIPT_WORDS:
        return max(1, min(2, word_count // 50))
    return min(settings.max_bullets, max(MIN_LONG_TARGET, word_count // 25))


def _by_score(scored: Sequence[ScoredClause]) -> List[ScoredClause]:
    # Stable sort: equal scores keep source order
    return sorted(scored, key=lambda c: c.score, reverse=True)


def select_top_clauses(
    scored: Sequence[ScoredClause],
    target: int,
    settings: BulletizerSettings = DEFAULT_SETTINGS,
) -> List[ScoredClause]:
    """
    Choose the ``target`` best clauses and return them in source order.

    Clauses scoring below ``min_clause_score`` are not candidates. When a long
    transcript leaves fewer than 3 candidates, the best ``max(3, target)``
    clauses are taken regardless of score so the note never comes back
    nearly empty.

    Args:
        scored: Scored clauses in source order
        target: Desired bullet count
        settings: Pipeline constants

    Returns:
        Selected clauses sorted by ``original_index``
    """
    candidates = _by_score([c for c in scored if c.score >= settings.min_clause_score])

    if len(candidates) >= target:
        chosen = candidates[:target]
    elif target >= MIN_LONG_TARGET and len(candidates) < MIN_LONG_TARGET:
        chosen = _by_score(scored)[: max(MIN_LONG_TARGET, target)]
    else:
        chosen = candidates[:target]

    return sorted(chosen, key=lambda c: c.original_index)
