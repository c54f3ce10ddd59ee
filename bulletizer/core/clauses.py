"""
Compound-clause splitting.

Voice transcripts are full of run-on sentences such as "we need to update the
onboarding and also add a dark mode toggle and remind me to send the proposal".
Splitting at conjunction and discourse boundaries recovers one atomic clause
per idea.
"""

from typing import Iterable, List, Sequence

from .config import DEFAULT_SETTINGS, BulletizerSettings
from .linguistics import word_count
from .rules import DEFAULT_RULES, BoundaryRule, RuleTables


def apply_boundary_rule(clauses: Iterable[str], rule: BoundaryRule, min_words: int) -> List[str]:
    """
    Split every clause at the first match of ``rule``.

    Each half survives only if it still has ``min_words`` words; clauses the
    rule does not match pass through untouched.
    """
    result: List[str] = []
    for clause in clauses:
        halves = rule.split(clause)
        if halves is None:
            result.append(clause)
            continue
        result.extend(half for half in halves if word_count(half) >= min_words)
    return result


def apply_boundary_rules(clauses: Sequence[str], rules: Sequence[BoundaryRule], min_words: int) -> List[str]:
    """Run each boundary rule across the whole clause list before moving to the next rule."""
    current = list(clauses)
    for rule in rules:
        current = apply_boundary_rule(current, rule, min_words)
    return [clause for clause in current if word_count(clause) >= min_words]


def split_into_clauses(
    sentence: str,
    rules: RuleTables = DEFAULT_RULES,
    settings: BulletizerSettings = DEFAULT_SETTINGS,
) -> List[str]:
    """
    Split a sentence into atomic clauses.

    Args:
        sentence: A single sentence
        rules: Rule tables providing the ordered boundary rules
        settings: Pipeline constants

    Returns:
        Clauses in source order, each with at least ``min_clause_words`` words
    """
    return apply_boundary_rules([sentence], rules.boundary_rules, settings.min_clause_words)
