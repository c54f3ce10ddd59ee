"""
Semantic classification of bullets into Actions, Ideas, Key Points and Notes.
"""

from typing import Dict, List, Sequence

from .linguistics import LanguageCapabilities, tokenize_words
from .rules import DEFAULT_RULES, RuleTables
from .types import GROUP_ORDER, BulletGroup, GroupedBullets

SIGNAL_WEIGHT = 2.0
SUMMARY_PHRASE_BONUS = 5.0
VERB_FIRST_BONUS = 3.0
URGENCY_WEIGHT = 2.0
# Extra Ideas term on top of the signal tables: a bullet opening with a
# speculative lead ("what if", "maybe") counts as an idea even next to an action verb
SPECULATIVE_LEAD_BONUS = 3.0

# Tie-break order for the scored groups
SCORED_GROUPS = (BulletGroup.ACTIONS, BulletGroup.IDEAS, BulletGroup.KEY_POINTS)


def is_first_word_action_verb(bullet: str, capabilities: LanguageCapabilities, rules: RuleTables = DEFAULT_RULES) -> bool:
    words = bullet.split()
    if not words:
        return False
    first = words[0]
    return first.lower() in rules.action_verbs or capabilities.is_verb(first)


def group_scores(bullet: str, capabilities: LanguageCapabilities, rules: RuleTables = DEFAULT_RULES) -> Dict[BulletGroup, float]:
    """
    Score a bullet against each scored group.

    Args:
        bullet: Condensed bullet text
        capabilities: Provider of verb tagging
        rules: Rule tables providing the signal words

    Returns:
        Mapping of Actions, Ideas and Key Points to their scores
    """
    lower = bullet.lower()
    words = set(tokenize_words(lower))

    action = len(words & rules.action_signals) * SIGNAL_WEIGHT
    idea = (len(words & rules.idea_signals) + sum(1 for p in rules.idea_phrases if p in lower)) * SIGNAL_WEIGHT
    key = (len(words & rules.key_point_signals) + sum(1 for p in rules.key_point_phrases if p in lower)) * SIGNAL_WEIGHT

    if any(phrase in lower for phrase in rules.summary_phrases):
        key += SUMMARY_PHRASE_BONUS

    if is_first_word_action_verb(bullet, capabilities, rules):
        action += VERB_FIRST_BONUS

    action += len(words & rules.urgency_terms) * URGENCY_WEIGHT

    if any(lower.startswith(lead) for lead in rules.speculative_leads):
        idea += SPECULATIVE_LEAD_BONUS

    return {BulletGroup.ACTIONS: action, BulletGroup.IDEAS: idea, BulletGroup.KEY_POINTS: key}


def choose_group(scores: Dict[BulletGroup, float]) -> BulletGroup:
    """Highest positive score wins, ties go to the earlier group; nothing positive means Notes."""
    best = BulletGroup.NOTES
    best_score = 0.0
    for group in SCORED_GROUPS:
        if scores[group] > best_score:
            best, best_score = group, scores[group]
    return best


def classify(
    bullets: Sequence[str],
    capabilities: LanguageCapabilities,
    rules: RuleTables = DEFAULT_RULES,
) -> List[GroupedBullets]:
    """
    File each bullet under its best group.

    Args:
        bullets: Deduplicated bullets in source order
        capabilities: Provider of verb tagging
        rules: Rule tables

    Returns:
        Non-empty groups in the fixed output order. A result made only of
        Notes is relabelled Key Points.
    """
    grouped: Dict[BulletGroup, List[str]] = {group: [] for group in GROUP_ORDER}
    for bullet in bullets:
        grouped[choose_group(group_scores(bullet, capabilities, rules))].append(bullet)

    result = [GroupedBullets(group=group, bullets=grouped[group]) for group in GROUP_ORDER if grouped[group]]

    if len(result) == 1 and result[0].group == BulletGroup.NOTES:
        result = [GroupedBullets(group=BulletGroup.KEY_POINTS, bullets=result[0].bullets)]
    return result
