"""
Transcript bulletizing pipeline for the Transcript Bulletizer.

This module orchestrates the extraction of concise, classified bullet points
from a raw speech-to-text transcript. No network, no model download: pure
lexical heuristics over rule-based language capabilities.

Pipeline:
  1. Deep clean: fillers, hedges, typographic normalization
  2. Sentence tokenization, plus explicit list-item extraction
  3. Compound-clause splitting
  4. TF-IDF + position + urgency + action + entity scoring per clause
  5. Adaptive top-N selection scaled to transcript length
  6. Phrase condensation
  7. Semantic deduplication and near-duplicate merging
  8. Classification into Actions / Ideas / Key Points / Notes
"""

import asyncio
import logging
from typing import List, Optional

from .classify import classify
from .clauses import split_into_clauses
from .condense import cap_length, condense_to_bullet
from .config import DEFAULT_SETTINGS, BulletizerSettings
from .dedup import deduplicate_bullets
from .linguistics import DEFAULT_CAPABILITIES, LanguageCapabilities
from .normalize import deep_clean
from .rules import DEFAULT_RULES, RuleTables
from .scoring import score_clauses
from .segment import extract_list_items, tokenize_sentences
from .selection import adaptive_bullet_count, select_top_clauses
from .timing import timed_stage, timer
from .types import BulletGroup, BulletizedResult, Clause, GroupedBullets

logger = logging.getLogger(__name__)


class TranscriptBulletizer:
    """
    Turns transcripts into grouped bullet points.

    Instances hold only read-only configuration, so one instance can serve any
    number of threads or tasks concurrently.
    """

    def __init__(
        self,
        settings: BulletizerSettings = DEFAULT_SETTINGS,
        rules: RuleTables = DEFAULT_RULES,
        capabilities: Optional[LanguageCapabilities] = None,
    ):
        """
        Initialize the bulletizer.

        Args:
            settings: Pipeline constants
            rules: Lexical rule tables
            capabilities: Sentence, entity and verb primitives (rule based by default)
        """
        self.settings = settings
        self.rules = rules
        self.capabilities = capabilities or DEFAULT_CAPABILITIES

    @timer
    def bulletize_structured(self, text: str) -> BulletizedResult:
        """
        Extract grouped bullets from a transcript.

        Args:
            text: Raw transcript text

        Returns:
            Grouped bullets plus their plain-text rendering. Never raises for
            string input; degenerate input yields a single bullet or an empty result.
        """
        cleaned = deep_clean(text, self.rules)
        if len(cleaned) < self.settings.min_cleaned_chars:
            logger.debug("Cleaned text has %d chars, using single-bullet fallback", len(cleaned))
            return self.single_bullet_result(cleaned or text)

        with timed_stage("tokenize_sentences"):
            sentences = tokenize_sentences(cleaned, self.capabilities, self.settings)
        if not sentences:
            return self.single_bullet_result(cleaned)

        clauses = self._build_clauses(cleaned, sentences)
        if not clauses:
            return self.single_bullet_result(cleaned)

        with timed_stage("score_clauses"):
            scored = score_clauses(clauses, self.capabilities, self.rules)

        target = adaptive_bullet_count(len(cleaned.split()), self.settings)
        selected = select_top_clauses(scored, target, self.settings)
        logger.debug("Selected %d of %d clauses (target %d)", len(selected), len(clauses), target)

        bullets = [condense_to_bullet(c.text, self.rules, self.settings) for c in selected]
        bullets = [b for b in bullets if b]
        if not bullets:
            return self.single_bullet_result(cleaned)

        with timed_stage("deduplicate_and_classify"):
            bullets = deduplicate_bullets(bullets, self.rules)
            groups = classify(bullets, self.capabilities, self.rules)
        return BulletizedResult.from_groups(groups)

    def bulletize(self, text: str) -> str:
        """Extract bullets and return only the plain-text rendering."""
        return self.bulletize_structured(text).plain_text

    def _build_clauses(self, cleaned: str, sentences: List[str]) -> List[Clause]:
        """List items first, then the atomic clauses of every sentence, indexed in stream order."""
        texts = extract_list_items(cleaned, self.rules, self.settings)
        for sentence in sentences:
            texts.extend(split_into_clauses(sentence, self.rules, self.settings))
        logger.debug("Built %d clauses from %d sentences", len(texts), len(sentences))
        return [Clause(text=t, original_index=i) for i, t in enumerate(texts)]

    def single_bullet_result(self, text: str) -> BulletizedResult:
        """
        Fallback result: one Notes bullet condensed from ``text``.

        When condensation empties the text, the trimmed literal text is used
        instead (capped like any bullet). Blank text yields an empty result.
        """
        literal = text.strip()
        if not literal:
            return BulletizedResult.empty()

        bullet = condense_to_bullet(literal, self.rules, self.settings) or cap_length(literal, self.rules, self.settings)
        return BulletizedResult.from_groups([GroupedBullets(group=BulletGroup.NOTES, bullets=[bullet])])


# Shared default instance
_default_bulletizer = TranscriptBulletizer()


def bulletize_structured(text: str) -> BulletizedResult:
    """
    Convenience function to bulletize a transcript with the default configuration.

    Args:
        text: Raw transcript text

    Returns:
        BulletizedResult with grouped bullets and plain text
    """
    return _default_bulletizer.bulletize_structured(text)


def bulletize(text: str) -> str:
    """
    Convenience function returning '• ' prefixed bullets joined by newlines.

    Args:
        text: Raw transcript text

    Returns:
        Plain-text bullets
    """
    return _default_bulletizer.bulletize(text)


async def bulletize_structured_async(text: str) -> BulletizedResult:
    """Run ``bulletize_structured`` on a worker thread."""
    return await asyncio.to_thread(bulletize_structured, text)


async def bulletize_async(text: str) -> str:
    """Run ``bulletize`` on a worker thread."""
    return await asyncio.to_thread(bulletize, text)
