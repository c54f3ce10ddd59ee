"""
Linguistic primitives for the Transcript Bulletizer.

This module provides word tokenization plus the three language capabilities the
pipeline consumes: sentence segmentation, named-entity counting and verb
tagging. The default implementation is rule based (pysbd for sentence
boundaries, snowballstemmer for verb lookups) and needs no model download.
"""

import re
import threading
import warnings
from typing import FrozenSet, Iterable, List, Protocol

from pysbd import Segmenter
from snowballstemmer import stemmer as snowball_stemmer

from .rules import ACTION_VERBS, STOPWORDS, URGENCY_TERMS

# Word tokens: runs of letters/digits; punctuation and underscores separate words
WORD_SPLIT_PATTERN = re.compile(r"[\W_]+")
SENTENCE_END_PATTERN = re.compile(r"[.!?]+$")
FALLBACK_SENTENCE_PATTERN = re.compile(r"[.!?]")
EDGE_PUNCTUATION = "\"'()[]{}<>,.;:!?…-–—*•"

# Verbs commonly opening a dictated note that are not in the action verb table
COMMON_VERBS = frozenset(
    {
        "ask", "bring", "clean", "draft", "drop", "fill", "finalize", "give", "keep", "look",
        "make", "pay", "pick", "plan", "put", "run", "set", "sign", "submit", "take",
        "talk", "tell", "try", "use", "work", "go", "get", "let", "think", "see",
        "pull", "push", "print", "pack", "renew", "return", "file", "track", "log", "record",
    }
)

# Capitalized words that are not names on their own
NON_ENTITY_WORDS = frozenset(
    {"i", "i'm", "i'll", "i've", "i'd", "ok", "okay", "yes", "yeah", "hey", "hi", "please", "thanks"}
) | frozenset(STOPWORDS) | frozenset(URGENCY_TERMS) | frozenset({"may"})

VERB_SUFFIXES = ("ize", "ify")


def tokenize_words(text: str) -> List[str]:
    """
    Lowercase text and split it into word tokens on whitespace and punctuation.

    Args:
        text: Input text

    Returns:
        List of non-empty lowercase tokens
    """
    if not text:
        return []
    return [token for token in WORD_SPLIT_PATTERN.split(text.lower()) if token]


def word_count(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def split_on_terminators(text: str) -> List[str]:
    """Split text on '.', '!' and '?' without keeping the terminators."""
    return [piece.strip() for piece in FALLBACK_SENTENCE_PATTERN.split(text) if piece.strip()]


class LanguageCapabilities(Protocol):
    """
    Language capabilities consumed by the pipeline.

    Implementations must be deterministic and side-effect free.
    """

    def split_sentences(self, text: str) -> List[str]:
        """Return ordered, non-overlapping sentence substrings of ``text``."""
        ...

    def count_named_entities(self, text: str) -> int:
        """Return the number of person, place or organization names in ``text``."""
        ...

    def is_verb(self, word: str) -> bool:
        """Return True if ``word`` reads as a verb."""
        ...


def _build_segmenter(language: str) -> Segmenter:
    # pysbd emits SyntaxWarnings on Python 3.12+ due to unescaped sequences
    # in its regex patterns.
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=SyntaxWarning)
        return Segmenter(language=language, clean=False)


class RuleBasedCapabilities:
    """
    Rule-based capabilities that work without any trained model.

    - Sentences: pysbd rule-based segmentation.
    - Named entities: runs of capitalized words that are not sentence-initial,
      function words, pronouns or dates; adjacent names join into one entity.
    - Verbs: lexicon lookup, then a snowball-stem lookup for inflected forms,
      then verb-forming suffixes.

    The pysbd segmenter and the snowball stemmer keep per-call state on the
    instance, so calls into them are serialized with a lock.
    """

    def __init__(self, language: str = "en", extra_verbs: Iterable[str] = ()):
        self.language = language
        self._lock = threading.Lock()
        self._segmenter = _build_segmenter(language)
        self._stemmer = snowball_stemmer("english")
        self._verbs: FrozenSet[str] = frozenset(ACTION_VERBS) | COMMON_VERBS | frozenset(v.lower() for v in extra_verbs)
        self._verb_stems: FrozenSet[str] = frozenset(self._stemmer.stemWords(sorted(self._verbs)))

    def split_sentences(self, text: str) -> List[str]:
        if not text.strip():
            return []
        with self._lock, warnings.catch_warnings():
            warnings.filterwarnings("ignore", category=SyntaxWarning)
            segments = self._segmenter.segment(text)
        # pysbd returns list[str] at runtime but type stubs are imprecise
        return [str(segment).strip() for segment in segments if str(segment).strip()]  # type: ignore[union-attr]

    def count_named_entities(self, text: str) -> int:
        count = 0
        in_entity = False
        sentence_start = True

        for raw in text.split():
            word = raw.strip(EDGE_PUNCTUATION)
            is_name = bool(word) and word[0].isupper() and not sentence_start and word.lower() not in NON_ENTITY_WORDS

            if is_name and not in_entity:
                count += 1
            in_entity = is_name

            # A new sentence (or clause-level punctuation) breaks a name run
            if SENTENCE_END_PATTERN.search(raw):
                sentence_start = True
                in_entity = False
            else:
                sentence_start = False
                if raw.endswith((",", ";", ":")):
                    in_entity = False

        return count

    def is_verb(self, word: str) -> bool:
        token = word.strip(EDGE_PUNCTUATION).lower()
        # Contractions: "let's" -> "let", "don't" -> "don"
        token = token.split("'")[0]
        if not token or not token.isalpha():
            return False
        if token in self._verbs:
            return True
        if token in NON_ENTITY_WORDS:
            return False
        with self._lock:
            stem = self._stemmer.stemWord(token)
        if stem in self._verb_stems:
            return True
        return len(token) > 5 and token.endswith(VERB_SUFFIXES)


# Global capabilities instance
DEFAULT_CAPABILITIES = RuleBasedCapabilities()
