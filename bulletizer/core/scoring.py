"""
Clause relevance scoring.

Every clause gets an additive salience score built from independent signals:
TF-IDF over content words, position in the transcript, urgency and deadline
terms, action verbs, named entities, length shaping, question handling,
explicit task markers, summary and meta lead-ins, and a stopword-ratio penalty.
"""

import math
from collections import Counter
from typing import Dict, List, Sequence

from .linguistics import LanguageCapabilities, tokenize_words
from .rules import DEFAULT_RULES, RuleTables
from .types import Clause, ScoredClause

# Score weights
TFIDF_WEIGHT = 0.45
URGENCY_WEIGHT = 4.0
DEADLINE_BONUS = 5.0
ACTION_VERB_WEIGHT = 2.5
ENTITY_WEIGHT = 2.0
TASK_MARKER_BONUS = 3.5
SUMMARY_LEAD_BONUS = 6.0
META_LEAD_PENALTY = -4.0
STOPWORD_RATIO_LIMIT = 0.80
STOPWORD_RATIO_PENALTY = -3.0

# (upper bound on relative position, bonus); the closing bonus applies past CLOSING_POSITION
POSITION_BANDS = ((0.20, 4.0), (0.40, 2.0), (0.60, 0.5))
CLOSING_POSITION = 0.85
CLOSING_BONUS = 1.5

SWEET_SPOT_WORDS = (6, 22)
SWEET_SPOT_BONUS = 2.0
SHORT_CLAUSE_WORDS = 4
SHORT_CLAUSE_PENALTY = -2.5
LONG_CLAUSE_WORDS = 40
LONG_CLAUSE_PENALTY = -1.0

QUESTION_PENALTY = -2.0
QUESTION_WITH_SIGNAL_BONUS = 0.5


def compute_idf(clauses: Sequence[str]) -> Dict[str, float]:
    """
    Compute smoothed inverse document frequency over the clause set.

    ``idf(w) = ln((N + 1) / (df(w) + 1)) + 1`` where N is the clause count.

    Args:
        clauses: Clause texts

    Returns:
        Mapping of lowercase word to IDF weight
    """
    n = len(clauses)
    if n == 0:
        return {}

    df: Counter = Counter()
    for clause in clauses:
        df.update(set(tokenize_words(clause)))

    return {word: math.log((n + 1.0) / (count + 1.0)) + 1.0 for word, count in df.items()}


def position_bonus(index: int, total: int) -> float:
    """Openings and closings of a transcript matter more than the middle."""
    pos = index / max(total - 1, 1)
    for upper, bonus in POSITION_BANDS:
        if pos < upper:
            return bonus
    if pos > CLOSING_POSITION:
        return CLOSING_BONUS
    return 0.0


def length_bonus(words: int) -> float:
    low, high = SWEET_SPOT_WORDS
    if low <= words <= high:
        return SWEET_SPOT_BONUS
    if words < SHORT_CLAUSE_WORDS:
        return SHORT_CLAUSE_PENALTY
    if words > LONG_CLAUSE_WORDS:
        return LONG_CLAUSE_PENALTY
    return 0.0


def score_clause(
    clause: Clause,
    total: int,
    idf: Dict[str, float],
    capabilities: LanguageCapabilities,
    rules: RuleTables = DEFAULT_RULES,
) -> ScoredClause:
    """
    Score one clause.

    Args:
        clause: Clause to score
        total: Number of clauses in the transcript
        idf: Shared IDF table from ``compute_idf``
        capabilities: Provider of named-entity counts
        rules: Rule tables

    Returns:
        The clause with its score
    """
    text = clause.text
    lower = text.lower()
    words = tokenize_words(text)
    word_set = set(words)
    content_words = [w for w in words if w not in rules.stopwords]

    score = sum(idf.get(w, 1.0) for w in content_words) * TFIDF_WEIGHT
    score += position_bonus(clause.original_index, total)

    score += len(word_set & rules.urgency_terms) * URGENCY_WEIGHT
    if rules.deadline_pattern is not None and rules.deadline_pattern.search(lower):
        score += DEADLINE_BONUS

    action_hits = len(word_set & rules.action_verbs)
    score += action_hits * ACTION_VERB_WEIGHT
    score += capabilities.count_named_entities(text) * ENTITY_WEIGHT
    score += length_bonus(len(words))

    # Questions only count when they carry an action or idea
    if text.endswith("?"):
        if action_hits + len(word_set & rules.idea_signals) == 0:
            score += QUESTION_PENALTY
        else:
            score += QUESTION_WITH_SIGNAL_BONUS

    if any(marker in lower for marker in rules.task_markers):
        score += TASK_MARKER_BONUS

    if any(lead in lower for lead in rules.summary_leads):
        score += SUMMARY_LEAD_BONUS

    if any(lower.startswith(lead) or f" {lead}" in lower for lead in rules.meta_leads):
        score += META_LEAD_PENALTY

    stop_ratio = (len(words) - len(content_words)) / max(len(words), 1)
    if stop_ratio > STOPWORD_RATIO_LIMIT:
        score += STOPWORD_RATIO_PENALTY

    return ScoredClause(text=text, original_index=clause.original_index, score=score)


def score_clauses(
    clauses: Sequence[Clause],
    capabilities: LanguageCapabilities,
    rules: RuleTables = DEFAULT_RULES,
) -> List[ScoredClause]:
    """Build the IDF table over all clauses and score each one, preserving clause order."""
    idf = compute_idf([c.text for c in clauses])
    total = len(clauses)
    return [score_clause(clause, total, idf, capabilities, rules) for clause in clauses]
