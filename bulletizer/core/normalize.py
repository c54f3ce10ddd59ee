"""
Transcript cleaning: typographic normalization, filler removal and whitespace collapse.
"""

import re

from .rules import DEFAULT_RULES, RuleTables

# A line break (CRLF or CR included) plus any blank lines around it
LINE_BREAK_PATTERN = re.compile(r"[^\S\r\n]*(?:\r\n?|\n)\s*")
SPACE_RUN_PATTERN = re.compile(r"[^\S\n]{2,}")


def _clean_once(text: str, rules: RuleTables) -> str:
    cleaned = text.strip()
    if rules.glued_dash is not None:
        cleaned = rules.glued_dash.sub(" ", cleaned)
    for source, target in rules.typographic_replacements:
        cleaned = cleaned.replace(source, target)

    # Filler phrases come first, longest first, then single filler words
    for pattern in rules.filler_patterns:
        cleaned = pattern.sub(" ", cleaned)

    # Line breaks survive as single newlines so line-anchored list items can still be found
    cleaned = LINE_BREAK_PATTERN.sub("\n", cleaned)
    return SPACE_RUN_PATTERN.sub(" ", cleaned).strip()


def deep_clean(raw: str, rules: RuleTables = DEFAULT_RULES) -> str:
    """
    Remove filler words and phrases and normalize punctuation and whitespace.

    Removing one filler can bring the words around it together into another
    filler ("you um know"), so the pass repeats until the text stops changing.
    Every pass only shortens the text, which bounds the loop and guarantees
    the output is never longer than the input.

    Args:
        raw: Raw transcript text
        rules: Rule tables providing fillers and typographic replacements

    Returns:
        Cleaned text; running it through ``deep_clean`` again is a no-op
    """
    cleaned = _clean_once(raw, rules)
    while True:
        again = _clean_once(cleaned, rules)
        if again == cleaned:
            return cleaned
        cleaned = again
