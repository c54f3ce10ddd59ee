"""
Result rendering for the Transcript Bulletizer.

This module provides deterministic text renderings of a ``BulletizedResult``:
the flat plain-text list, a Markdown document with one section per group, and
a grouped listing with upper-cased group headers.
"""

from typing import Dict

from .types import BULLET_PREFIX, BulletizedResult


class ResultRenderer:
    """
    Renders bulletized results in different text profiles.

    Supports three profiles:
    - plain: '• ' prefixed bullets, no group headers
    - markdown: '## Group' sections with '- ' list items
    - grouped: upper-cased group headers followed by indented bullets
    """

    def __init__(self):
        self.profiles = {
            "plain": self._render_plain,
            "markdown": self._render_markdown,
            "md": self._render_markdown,
            "grouped": self._render_grouped,
        }

    def render(self, result: BulletizedResult, profile: str = "plain") -> str:
        """
        Render a result.

        Args:
            result: The bulletized result to render
            profile: Rendering profile (plain, markdown, grouped)

        Returns:
            Rendered text

        Raises:
            ValueError: If profile is not supported
        """
        if profile not in self.profiles:
            raise ValueError(f"Unsupported profile: {profile}. Available: {list(self.profiles.keys())}")

        return self.profiles[profile](result)

    def render_all(self, result: BulletizedResult) -> Dict[str, str]:
        """Render the result in every supported profile."""
        return {profile: self.render(result, profile) for profile in self.profiles.keys()}

    def _render_plain(self, result: BulletizedResult) -> str:
        return result.plain_text

    def _render_markdown(self, result: BulletizedResult) -> str:
        sections = []
        for item in result.groups:
            bullets = "\n".join(f"- {bullet}" for bullet in item.bullets)
            sections.append(f"## {item.group.value}\n{bullets}")
        return "\n\n".join(sections)

    def _render_grouped(self, result: BulletizedResult) -> str:
        sections = []
        for item in result.groups:
            lines = [item.group.value.upper()]
            lines.extend(f"  {BULLET_PREFIX}{bullet}" for bullet in item.bullets)
            sections.append("\n".join(lines))
        return "\n\n".join(sections)
