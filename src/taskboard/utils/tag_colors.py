# Rev 0.7.0
"""Tag chip colours (background, foreground) keyed by lower-case tag name."""
from __future__ import annotations

DEFAULT_TAG_COLOR: tuple[str, str] = ("#f3f4f6", "#374151")

TAG_COLORS: dict[str, tuple[str, str]] = {
    "bug": ("#fee2e2", "#b91c1c"),
    "feature": ("#dbeafe", "#1d4ed8"),
    "refactor": ("#f3e8ff", "#7e22ce"),
    "bugfix": ("#ffedd5", "#c2410c"),
    "improvement": ("#dcfce7", "#15803d"),
    "documentation": ("#fef9c3", "#a16207"),
    "chore": DEFAULT_TAG_COLOR,
}


def tag_color(tag: str) -> tuple[str, str]:
    return TAG_COLORS.get(tag.strip().lower(), DEFAULT_TAG_COLOR)
