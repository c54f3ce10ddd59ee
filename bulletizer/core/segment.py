"""
Sentence segmentation and explicit list-item extraction.

Sentence boundaries come from the injected language capabilities, with a plain
terminator split as the fallback. List items ("1. …", "2) …", "• …") are pulled
out separately because they are already pre-segmented, high-signal units.
"""

import logging
from typing import List

from .config import DEFAULT_SETTINGS, BulletizerSettings
from .linguistics import LanguageCapabilities, split_on_terminators, word_count
from .rules import DEFAULT_RULES, RuleTables

logger = logging.getLogger(__name__)


def cap_words(text: str, max_words: int) -> str:
    """Keep at most ``max_words`` words of ``text``; shorter text is returned unchanged."""
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words])


def tokenize_sentences(
    text: str,
    capabilities: LanguageCapabilities,
    settings: BulletizerSettings = DEFAULT_SETTINGS,
) -> List[str]:
    """
    Split cleaned text into sentences that carry at least ``min_clause_words`` words.

    Args:
        text: Cleaned transcript text
        capabilities: Provider of sentence boundaries
        settings: Pipeline constants

    Returns:
        Sentences in source order
    """
    capped = cap_words(text, settings.max_sentence_words)
    min_words = settings.min_clause_words

    sentences = [s.strip() for s in capabilities.split_sentences(capped)]
    sentences = [s for s in sentences if word_count(s) >= min_words]

    if not sentences:
        logger.debug("Sentence capability yielded nothing usable, splitting on terminators")
        sentences = [s for s in split_on_terminators(capped) if word_count(s) >= min_words]

    return sentences


def extract_list_items(
    text: str,
    rules: RuleTables = DEFAULT_RULES,
    settings: BulletizerSettings = DEFAULT_SETTINGS,
) -> List[str]:
    """
    Pull numbered or bulleted list items out of the cleaned text.

    Numbered markers win when at least two are present: the text between
    consecutive markers becomes an item. Otherwise bullet characters at line
    start are captured line by line.

    Args:
        text: Cleaned transcript text
        rules: Rule tables providing the list marker patterns
        settings: Pipeline constants

    Returns:
        List items with at least ``min_clause_words`` words, in source order
    """
    min_words = settings.min_clause_words
    items: List[str] = []

    if rules.numbered_marker is not None:
        markers = list(rules.numbered_marker.finditer(text))
        if len(markers) >= 2:
            for i, marker in enumerate(markers):
                end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
                segment = text[marker.end() : end].strip()
                if word_count(segment) >= min_words:
                    items.append(segment)
            return items

    if rules.bullet_line is not None:
        for match in rules.bullet_line.finditer(text):
            segment = match.group(1).strip()
            if word_count(segment) >= min_words:
                items.append(segment)

    return items
