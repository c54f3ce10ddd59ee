"""
Phrase condensation: turns a selected clause into a crisp bullet.

Steps, in order: drop trailing subordinate clauses, drop trailing weak
punctuation, strip leading subject/modal phrases until stable, strip a leading
article, capitalize, and cap the bullet length.
"""

from typing import Sequence

from .config import DEFAULT_SETTINGS, BulletizerSettings
from .linguistics import word_count
from .rules import DEFAULT_RULES, RuleTables

MIN_WORDS_AFTER_SUBORDINATE = 3
MIN_WORDS_AFTER_STRIP = 2
MIN_WORDS_AFTER_TRUNCATION = 4


def drop_trailing_subordinates(text: str, rules: RuleTables = DEFAULT_RULES) -> str:
    """Cut ", which …", ", because …" and similar tails, each at its first match."""
    for pattern in rules.subordinate_patterns:
        match = pattern.search(text)
        if match is None:
            continue
        text = text[: match.start()].strip()
        if word_count(text) < MIN_WORDS_AFTER_SUBORDINATE:
            break
    return text


def strip_trailing_punctuation(text: str, rules: RuleTables = DEFAULT_RULES) -> str:
    while text and text[-1] in rules.weak_trailing_punctuation:
        text = text[:-1].strip()
    return text


def strip_leading_phrases(text: str, phrases: Sequence[str], min_words: int = MIN_WORDS_AFTER_STRIP) -> str:
    """
    Repeatedly remove the first matching leading phrase.

    ``phrases`` are tried in order (longest first) and matched case-insensitively.
    A phrase is only removed if ``min_words`` words remain afterwards; the loop
    stops once no phrase can be removed.
    """
    changed = True
    while changed:
        changed = False
        lower = text.lower()
        for phrase in phrases:
            if not lower.startswith(phrase):
                continue
            candidate = text[len(phrase) :].strip()
            if word_count(candidate) >= min_words:
                text = candidate
                changed = True
                break
    return text


def strip_leading_article(text: str, rules: RuleTables = DEFAULT_RULES) -> str:
    lower = text.lower()
    for article in rules.article_prefixes:
        if lower.startswith(article):
            candidate = text[len(article) :].strip()
            if word_count(candidate) >= MIN_WORDS_AFTER_STRIP:
                return candidate
            break
    return text


def capitalize_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def cap_length(text: str, rules: RuleTables = DEFAULT_RULES, settings: BulletizerSettings = DEFAULT_SETTINGS) -> str:
    """
    Cap ``text`` at ``max_bullet_words`` words.

    Truncated text loses trailing conjunctions, prepositions and articles (while
    more than 4 words remain) and ends with the ellipsis marker.
    """
    words = text.split()
    if len(words) <= settings.max_bullet_words:
        return " ".join(words)

    words = words[: settings.max_bullet_words]
    while len(words) > MIN_WORDS_AFTER_TRUNCATION and words[-1].lower() in rules.weak_trailing_words:
        words.pop()
    return " ".join(words) + settings.ellipsis


def condense_to_bullet(
    clause: str,
    rules: RuleTables = DEFAULT_RULES,
    settings: BulletizerSettings = DEFAULT_SETTINGS,
) -> str:
    """
    Condense a clause into a bullet.

    Args:
        clause: Clause text
        rules: Rule tables
        settings: Pipeline constants

    Returns:
        The bullet, or an empty string when fewer than 2 words survive
    """
    text = clause.strip()
    text = drop_trailing_subordinates(text, rules)
    text = strip_trailing_punctuation(text, rules)
    text = strip_leading_phrases(text, rules.subject_phrases)
    text = strip_leading_article(text, rules)
    text = capitalize_first(text)
    text = cap_length(text, rules, settings)
    return text if word_count(text) >= MIN_WORDS_AFTER_STRIP else ""
