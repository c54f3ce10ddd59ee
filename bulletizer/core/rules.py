"""
Rule tables for transcript bulletizing.

This module provides the fixed lexical tables (fillers, stopwords, signal words,
lead-in phrases) and the compiled pattern rules used by the pipeline stages.
Tables are built once at import time into an immutable ``RuleTables`` instance
and passed explicitly into each stage, so they are safe for concurrent reads.
"""

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Pattern, Tuple

logger = logging.getLogger(__name__)

# --- Cleaning -----------------------------------------------------------------

FILLER_WORDS = (
    "um", "uh", "er", "hmm", "ah", "oh", "eh",
    "like", "basically", "literally", "honestly", "actually",
    "obviously", "clearly", "definitely", "totally", "absolutely",
    "certainly", "really", "seriously", "genuinely", "essentially",
    "generally", "supposedly", "apparently",
)

FILLER_PHRASES = (
    "you know what i mean", "you know what", "i mean like",
    "sort of kind of", "kind of sort of", "you know", "i mean",
    "i guess", "i think like", "sort of", "kind of", "in a way",
    "in a sense", "at the end of the day", "the thing is",
    "long story short", "to be honest", "to be fair", "to be clear",
    "to tell you the truth", "truth be told", "believe it or not",
    "needless to say", "as i was saying", "anyway so",
    "okay so", "alright so", "right so", "so anyway", "so yeah",
    "yeah so", "so like", "like so", "okay yeah", "alright yeah",
    "right yeah", "okay okay", "alright alright",
)

# Typographic characters and their ASCII replacements (same length, one for one)
TYPOGRAPHIC_REPLACEMENTS = (
    ("‘", "'"),
    ("’", "'"),
    ("“", '"'),
    ("”", '"'),
    ("–", "-"),
    ("—", "-"),
)

# An em dash glued between two words becomes a space
GLUED_DASH_PATTERN = r"(?<=\w)—(?=\w)"

# --- Scoring --------------------------------------------------------------------

STOPWORDS = (
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "as", "by", "from", "that", "this", "these", "those",
    "it", "its", "i", "we", "you", "they", "he", "she", "what", "which",
    "who", "is", "are", "was", "were", "be", "been", "being", "have",
    "has", "had", "do", "does", "did", "will", "would", "shall", "should",
    "may", "might", "must", "can", "could", "not", "no", "nor", "so",
    "yet", "both", "either", "neither", "my", "our", "your", "their",
    "his", "her", "there", "here", "then", "than", "when", "where",
    "just", "also", "about", "after", "before", "over", "under", "up",
    "down", "out", "if", "how", "get", "got", "let", "make", "go", "going",
    "come", "know", "want", "need", "very", "some", "any", "all", "each",
    "every", "more", "most", "much", "many", "few", "less", "only", "even",
    "still", "already", "back", "away",
)

URGENCY_TERMS = (
    "today", "tomorrow", "asap", "urgent", "immediately", "tonight",
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "deadline", "eod", "week", "morning", "afternoon", "evening",
    "january", "february", "march", "april", "june", "july",
    "august", "september", "october", "november", "december",
)

ACTION_VERBS = (
    "update", "add", "remove", "delete", "fix", "create", "build", "launch", "ship",
    "send", "call", "email", "contact", "schedule", "book", "arrange", "prepare",
    "write", "review", "check", "verify", "test", "deploy", "design", "redesign",
    "refactor", "organize", "research", "find", "hire", "interview", "onboard",
    "train", "present", "share", "upload", "sync", "backup", "migrate", "integrate",
    "publish", "post", "announce", "confirm", "approve", "complete", "finish",
    "start", "begin", "cancel", "close", "follow", "remind", "notify", "setup",
    "configure", "install", "buy", "purchase", "order", "reply", "respond", "ping",
    "reach", "move", "change", "improve", "enhance", "simplify", "streamline",
)

DEADLINE_PATTERN = r"\bby\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday|tomorrow|eod|end)\b"

TASK_MARKERS = ("remind me", "don't forget", "make sure")

SUMMARY_LEADS = (
    "bottom line", "the main point", "main point is", "key takeaway", "in summary",
    "to summarize", "tl;dr", "in short", "the point is", "what matters is", "most importantly",
)

META_LEADS = ("as i said", "as i mentioned", "like i said", "i was just saying", "going back to", "anyway")

# --- Classification ---------------------------------------------------------------

ACTION_SIGNALS = (
    "update", "add", "remove", "delete", "fix", "create", "build", "launch", "ship",
    "send", "call", "email", "contact", "schedule", "book", "arrange", "prepare",
    "write", "review", "check", "verify", "test", "deploy", "design", "redesign",
    "follow", "confirm", "approve", "complete", "finish", "start", "cancel",
    "close", "publish", "post", "upload", "remind", "notify", "setup", "configure",
    "buy", "purchase", "order", "reply", "respond", "ping", "reach", "move", "change",
    "hire", "fire", "promote", "present", "announce", "invite", "decline", "accept",
)

IDEA_SIGNALS = (
    "idea", "concept", "think", "thought", "imagine", "vision", "could", "might",
    "what if", "maybe", "perhaps", "feature", "experiment", "prototype", "try",
    "explore", "investigate", "consider", "potential", "opportunity",
    "redesign", "rethink", "reframe", "new", "different", "better", "improve",
    "enhance", "streamline", "automate", "suggest", "proposal",
)

KEY_POINT_SIGNALS = (
    "important", "critical", "key", "main", "core", "essential", "priority", "must",
    "crucial", "significant", "fundamental", "primary", "major", "biggest", "top",
    "focus", "goal", "target", "objective", "requirement", "rule", "principle",
    "insight", "lesson", "learning", "takeaway", "summary", "note", "remember",
    "bottom", "point", "matters", "tl;dr", "recap", "overall",
)

SUMMARY_PHRASES = (
    "bottom line", "main point", "key takeaway", "in summary", "to summarize",
    "in short", "the point is", "what matters", "most importantly", "above all",
)

SPECULATIVE_LEADS = ("what if", "maybe", "how about", "imagine", "perhaps")

# --- Clause splitting -----------------------------------------------------------------

# (name, pattern) in application order
BOUNDARY_PATTERNS = (
    ("and_also", r"(?i)\s+and\s+also\s+"),
    ("and_then", r"(?i)\s+and\s+then\s+(we\s+|i\s+|you\s+|they\s+)?"),
    ("and_subject_modal", r"(?i)\s+and\s+(we|i|you|they)\s+(need\s+to|should|want\s+to|will|have\s+to|going\s+to|plan\s+to)\s+"),
    ("but_subject_modal", r"(?i)\s+but\s+(we|i|you|they)\s+(need\s+to|should|want\s+to|have\s+to)\s+"),
    ("plus_subject", r"(?i)\s+plus\s+(we|i|you|they)\s+"),
    ("also_subject_modal", r"(?i),?\s+also\s+(we|i|you|they)\s+(should|need\s+to|want\s+to|can)\s+"),
    ("semicolon", r";\s*"),
    ("comma_and", r"(?i),\s+and\s+(also\s+)?"),
    ("ordinal", r"(?i)\s+(second(?:ly)?|third(?:ly)?|fourth(?:ly)?|finally|last(?:ly)?)\s+"),
    ("first", r"(?i)\s+first(?:ly)?\s+"),
    ("one_more_thing", r"(?i)\s+(one\s+more\s+thing|another\s+thing|one\s+thing\s+more)\s*[,:]?\s+"),
    ("also_important", r"(?i)\s+also\s+important\s*[,:]?\s+"),
    ("dash", r"\s+[-–—]\s+"),
    ("colon_clause", r"(?i)\s*:\s+(?:we|i|you|they|to)\s+"),
)

# --- Condensation ---------------------------------------------------------------------

SUBORDINATE_PATTERNS = (
    r",\s+which\s+.+$",
    r",\s+and\s+that\s+.+$",
    r",\s+so\s+that\s+.+$",
    r",\s+because\s+.+$",
    r",\s+although\s+.+$",
    r",\s+if\s+.+$",
)

SUBJECT_PHRASES = (
    # We + modal
    "we are going to ", "we're going to ", "we need to ", "we should ",
    "we have to ", "we want to ", "we could ", "we can ", "we will ",
    "we'll ", "we must ", "we plan to ", "we're planning to ",
    "we're trying to ", "we'd like to ",
    # I + modal
    "i am going to ", "i'm going to ", "i need to ", "i should ",
    "i have to ", "i want to ", "i could ", "i can ", "i will ",
    "i'll ", "i must ", "i plan to ", "i'm planning to ",
    "i'm trying to ", "i'd like to ",
    # You
    "you need to ", "you should ", "you have to ", "you want to ", "you can ",
    # Impersonal
    "it's important to ", "it is important to ",
    "it would be good to ", "it would be great to ",
    "it would help to ", "it might be good to ",
    "there is a need to ", "there's a need to ",
    "one thing we need to ", "one thing i need to ",
    # Directive imperatives
    "let's make sure to ", "let's make sure we ", "let's make sure ",
    "make sure to ", "make sure we ", "make sure ",
    "remember to ", "remind me to ", "don't forget to ", "don't forget ",
    "be sure to ", "be sure we ",
    # Bare modals
    "need to ", "have to ", "should ", "must ", "want to ", "going to ",
    "planning to ", "trying to ", "hoping to ", "would like to ",
    # Discourse connectors and hedges
    "so ", "and ", "but ", "then ", "also ", "now ", "well ",
    "the thing is ", "so basically ", "basically ", "i think ",
)

ARTICLE_PREFIXES = ("the ", "a ", "an ")

WEAK_TRAILING_WORDS = ("and", "or", "but", "the", "a", "an", "to", "in", "on", "at", "with", "for", "of", "by")

WEAK_TRAILING_PUNCTUATION = ".,:;-–—"

# --- List items ---------------------------------------------------------------------------

NUMBERED_MARKER_PATTERN = r"(?m)(?:^|(?<=\s))\d{1,2}[.)]\s+"
BULLET_LINE_PATTERN = r"(?m)^[ \t]*[•\-*][ \t]+(.+?)[ \t]*$"


@dataclass(frozen=True)
class BoundaryRule:
    """A named clause boundary; the first match of ``pattern`` is the split point."""

    name: str
    pattern: Pattern[str]

    def split(self, text: str) -> Optional[Tuple[str, str]]:
        """Split ``text`` around the first match, or return None when the rule does not fire."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return text[: match.start()].strip(), text[match.end() :].strip()


@dataclass(frozen=True)
class RuleTables:
    """Immutable lexical tables and compiled patterns shared by all stages."""

    filler_patterns: Tuple[Pattern[str], ...]
    typographic_replacements: Tuple[Tuple[str, str], ...]
    glued_dash: Optional[Pattern[str]]
    stopwords: FrozenSet[str]
    urgency_terms: FrozenSet[str]
    action_verbs: FrozenSet[str]
    deadline_pattern: Optional[Pattern[str]]
    task_markers: Tuple[str, ...]
    summary_leads: Tuple[str, ...]
    meta_leads: Tuple[str, ...]
    action_signals: FrozenSet[str]
    idea_signals: FrozenSet[str]
    idea_phrases: Tuple[str, ...]
    key_point_signals: FrozenSet[str]
    key_point_phrases: Tuple[str, ...]
    summary_phrases: Tuple[str, ...]
    speculative_leads: Tuple[str, ...]
    boundary_rules: Tuple[BoundaryRule, ...]
    subordinate_patterns: Tuple[Pattern[str], ...]
    subject_phrases: Tuple[str, ...]
    article_prefixes: Tuple[str, ...]
    weak_trailing_words: FrozenSet[str]
    weak_trailing_punctuation: str
    numbered_marker: Optional[Pattern[str]]
    bullet_line: Optional[Pattern[str]]


def compile_rule(pattern: str, flags: int = 0) -> Optional[Pattern[str]]:
    """
    Compile a rule pattern, treating a pattern that fails to build as inert.

    Args:
        pattern: Regular expression source
        flags: Extra ``re`` flags

    Returns:
        Compiled pattern, or None if the pattern is invalid
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        logger.warning("Skipping inert rule %r: %s", pattern, e)
        return None


def compile_rules(patterns: Iterable[str], flags: int = 0) -> Tuple[Pattern[str], ...]:
    """Compile several patterns, dropping the ones that fail to build."""
    compiled = (compile_rule(pattern, flags) for pattern in patterns)
    return tuple(p for p in compiled if p is not None)


def filler_pattern_sources(phrases: Iterable[str], words: Iterable[str]) -> List[str]:
    """Word-boundary patterns for filler phrases (longest first) followed by single filler words."""
    ordered_phrases = sorted(phrases, key=len, reverse=True)
    return [rf"\b{re.escape(item)}\b" for item in [*ordered_phrases, *sorted(words)]]


def _split_signals(signals: Iterable[str]) -> Tuple[FrozenSet[str], Tuple[str, ...]]:
    """Separate single-word signals from multi-word or punctuated phrases."""
    words = []
    phrases = []
    for signal in signals:
        if re.fullmatch(r"\w+", signal):
            words.append(signal)
        else:
            phrases.append(signal)
    return frozenset(words), tuple(phrases)


def build_boundary_rules(patterns: Iterable[Tuple[str, str]]) -> Tuple[BoundaryRule, ...]:
    """Compile (name, pattern) pairs into boundary rules, skipping inert ones."""
    rules = []
    for name, source in patterns:
        compiled = compile_rule(source)
        if compiled is not None:
            rules.append(BoundaryRule(name=name, pattern=compiled))
    return tuple(rules)


def build_rules() -> RuleTables:
    """Build the default rule tables."""
    idea_words, idea_phrases = _split_signals(IDEA_SIGNALS)
    key_words, key_phrases = _split_signals(KEY_POINT_SIGNALS)

    return RuleTables(
        filler_patterns=compile_rules(filler_pattern_sources(FILLER_PHRASES, FILLER_WORDS), re.IGNORECASE),
        typographic_replacements=TYPOGRAPHIC_REPLACEMENTS,
        glued_dash=compile_rule(GLUED_DASH_PATTERN),
        stopwords=frozenset(STOPWORDS),
        urgency_terms=frozenset(URGENCY_TERMS),
        action_verbs=frozenset(ACTION_VERBS),
        deadline_pattern=compile_rule(DEADLINE_PATTERN),
        task_markers=TASK_MARKERS,
        summary_leads=SUMMARY_LEADS,
        meta_leads=META_LEADS,
        action_signals=frozenset(ACTION_SIGNALS),
        idea_signals=idea_words,
        idea_phrases=idea_phrases,
        key_point_signals=key_words,
        key_point_phrases=key_phrases,
        summary_phrases=SUMMARY_PHRASES,
        speculative_leads=SPECULATIVE_LEADS,
        boundary_rules=build_boundary_rules(BOUNDARY_PATTERNS),
        subordinate_patterns=compile_rules(SUBORDINATE_PATTERNS, re.IGNORECASE),
        subject_phrases=tuple(sorted(SUBJECT_PHRASES, key=len, reverse=True)),
        article_prefixes=ARTICLE_PREFIXES,
        weak_trailing_words=frozenset(WEAK_TRAILING_WORDS),
        weak_trailing_punctuation=WEAK_TRAILING_PUNCTUATION,
        numbered_marker=compile_rule(NUMBERED_MARKER_PATTERN),
        bullet_line=compile_rule(BULLET_LINE_PATTERN),
    )


# Global rule tables, built once
DEFAULT_RULES = build_rules()
