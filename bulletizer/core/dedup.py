"""
Semantic deduplication of bullets.

Two passes over stopword-filtered word fingerprints: near-duplicates are
dropped, then remaining near-duplicates are merged by keeping the longer (more
specific) phrasing. Both passes preserve first-occurrence order.
"""

from typing import List, Sequence, Set

from .linguistics import tokenize_words
from .rules import DEFAULT_RULES, RuleTables

DUPLICATE_JACCARD = 0.60
DUPLICATE_CONTAINMENT = 0.80
MERGE_JACCARD = 0.70
MERGE_BIGRAM_OVERLAP = 0.65


def content_fingerprint(text: str, rules: RuleTables = DEFAULT_RULES) -> List[str]:
    """Stopword-filtered lowercase words of ``text``, in order."""
    return [word for word in tokenize_words(text) if word not in rules.stopwords]


def content_bigrams(text: str, rules: RuleTables = DEFAULT_RULES) -> Set[str]:
    """Adjacent content-word pairs; catches "send proposal" vs "send client proposal"."""
    words = content_fingerprint(text, rules)
    return {f"{a} {b}" for a, b in zip(words, words[1:])}


def jaccard(a: Set[str], b: Set[str]) -> float:
    return len(a & b) / max(len(a | b), 1)


def is_near_duplicate(fingerprint: Set[str], existing: Set[str]) -> bool:
    """
    Whether two fingerprints describe the same bullet.

    True for Jaccard similarity ≥ 0.60, or when either set is at least 80%
    contained in the other. Two empty fingerprints count as duplicates.
    """
    if not fingerprint or not existing:
        return fingerprint == existing
    shared = len(fingerprint & existing)
    if jaccard(fingerprint, existing) >= DUPLICATE_JACCARD:
        return True
    return shared / len(fingerprint) >= DUPLICATE_CONTAINMENT or shared / len(existing) >= DUPLICATE_CONTAINMENT


def deduplicate(bullets: Sequence[str], rules: RuleTables = DEFAULT_RULES) -> List[str]:
    """Drop bullets that are near-duplicates of an earlier kept bullet."""
    kept: List[str] = []
    fingerprints: List[Set[str]] = []

    for bullet in bullets:
        fingerprint = set(content_fingerprint(bullet, rules))
        if any(is_near_duplicate(fingerprint, existing) for existing in fingerprints):
            continue
        kept.append(bullet)
        fingerprints.append(fingerprint)

    return kept


def should_merge(bullet: str, existing: str, rules: RuleTables = DEFAULT_RULES) -> bool:
    """Unigram Jaccard ≥ 0.70 or bigram overlap ≥ 0.65 (Jaccard again when neither has bigrams)."""
    unigram = jaccard(set(content_fingerprint(bullet, rules)), set(content_fingerprint(existing, rules)))
    bigrams = content_bigrams(bullet, rules)
    existing_bigrams = content_bigrams(existing, rules)
    if not bigrams and not existing_bigrams:
        bigram_overlap = unigram
    else:
        bigram_overlap = jaccard(bigrams, existing_bigrams)
    return unigram >= MERGE_JACCARD or bigram_overlap >= MERGE_BIGRAM_OVERLAP


def merge_near_duplicates(bullets: Sequence[str], rules: RuleTables = DEFAULT_RULES) -> List[str]:
    """Merge near-duplicates in place, keeping whichever phrasing has more characters."""
    kept: List[str] = []
    for bullet in bullets:
        for idx, existing in enumerate(kept):
            if should_merge(bullet, existing, rules):
                kept[idx] = bullet if len(bullet) > len(existing) else existing
                break
        else:
            kept.append(bullet)
    return kept


def deduplicate_bullets(bullets: Sequence[str], rules: RuleTables = DEFAULT_RULES) -> List[str]:
    """
    Run both deduplication passes until the bullet list stops changing.

    A round that removes nothing leaves the list untouched, and every other
    round shortens it, so the loop terminates and the result is idempotent.
    """
    current = list(bullets)
    while True:
        reduced = merge_near_duplicates(deduplicate(current, rules), rules)
        if reduced == current:
            return reduced
        current = reduced
