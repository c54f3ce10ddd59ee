"""
Type definitions for the Transcript Bulletizer.

This module defines the data structures that flow through the extraction
pipeline (clauses and their scores) and the grouped result handed back to callers.
"""

from enum import Enum
from typing import Dict, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BulletGroup(str, Enum):
    """Semantic group a bullet is filed under. Declaration order is the output order."""

    ACTIONS = "Actions"
    IDEAS = "Ideas"
    KEY_POINTS = "Key Points"
    NOTES = "Notes"


GROUP_ORDER: List[BulletGroup] = list(BulletGroup)

BULLET_PREFIX = "• "


class Clause(BaseModel):
    """
    A minimal atomic unit of meaning extracted from a sentence.

    Attributes:
        text: Clause text as it appears in the cleaned transcript
        original_index: Position of the clause in the clause stream
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Clause text")
    original_index: int = Field(..., ge=0, description="Position in the clause stream")


class ScoredClause(Clause):
    """A clause together with its salience score."""

    score: float = Field(..., description="Additive salience score")


class GroupedBullets(BaseModel):
    """Bullets filed under one group."""

    model_config = ConfigDict(frozen=True)

    group: BulletGroup = Field(..., description="Semantic group")
    bullets: Tuple[str, ...] = Field(default_factory=tuple, description="Bullets in source order")


class BulletizedResult(BaseModel):
    """
    Structured output of the bulletizer: grouped bullets plus a flat rendering.

    Groups always appear in the fixed order Actions, Ideas, Key Points, Notes,
    and only non-empty groups are present.
    """

    model_config = ConfigDict(frozen=True)

    groups: Tuple[GroupedBullets, ...] = Field(default_factory=tuple, description="Non-empty groups in fixed order")
    plain_text: str = Field(default="", description="'• ' prefixed bullets joined by newlines")

    @classmethod
    def from_groups(cls, groups: Sequence[GroupedBullets]) -> "BulletizedResult":
        """Build a result and its plain-text rendering from grouped bullets."""
        ordered = sorted((g for g in groups if g.bullets), key=lambda g: GROUP_ORDER.index(g.group))
        plain = "\n".join(f"{BULLET_PREFIX}{bullet}" for group in ordered for bullet in group.bullets)
        return cls(groups=tuple(ordered), plain_text=plain)

    @classmethod
    def empty(cls) -> "BulletizedResult":
        return cls(groups=(), plain_text="")

    @property
    def all_bullets(self) -> List[str]:
        return [bullet for group in self.groups for bullet in group.bullets]

    @property
    def has_groups(self) -> bool:
        return len(self.groups) > 1

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def bullets_for(self, group: BulletGroup) -> List[str]:
        """Return the bullets filed under ``group`` (empty when the group is absent)."""
        for item in self.groups:
            if item.group == group:
                return list(item.bullets)
        return []

    def as_mapping(self) -> Dict[str, List[str]]:
        """Group display name to bullets, in output order."""
        return {item.group.value: list(item.bullets) for item in self.groups}
