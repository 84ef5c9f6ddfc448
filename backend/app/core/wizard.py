"""
Interview bookkeeping: merging partial project data, tracking completed
categories and deciding when a deck may be generated.

Everything here is pure and returns new objects.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from app.schemas.project_data import (
    CATEGORY_DESCRIPTIONS,
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    ProjectData,
    is_blank,
)


def merge_project_data(current: ProjectData, update: ProjectData | Mapping[str, Any] | None) -> ProjectData:
    """Return *current* with every non-blank value of *update* applied.

    Null or empty values in *update* never replace a populated value.
    """
    if update is None:
        return current
    if not isinstance(update, ProjectData):
        update = ProjectData.model_validate(update)

    merged = current.model_dump()
    for key, value in update.model_dump().items():
        if is_blank(value):
            continue
        merged[key] = value
    return ProjectData.model_validate(merged)


def mark_categories_complete(completed: Iterable[str], newly: Iterable[str]) -> list[str]:
    """Union of *completed* and *newly*, unknown ids dropped, in interview order."""
    done = set(completed) | set(newly)
    return [category for category in CATEGORY_ORDER if category in done]


def next_category(completed: Iterable[str]) -> str | None:
    """First category not yet complete, or ``None`` when all are."""
    done = set(completed)
    for category in CATEGORY_ORDER:
        if category not in done:
            return category
    return None


def progress(completed: Iterable[str]) -> list[dict]:
    done = set(completed)
    current = next_category(done)
    return [
        {
            "category": category,
            "label": CATEGORY_LABELS[category],
            "description": CATEGORY_DESCRIPTIONS[category],
            "completed": category in done,
            "current": category == current,
        }
        for category in CATEGORY_ORDER
    ]


def can_generate(
    completed: Iterable[str],
    data: ProjectData,
    min_categories: int,
    min_fields: int,
) -> bool:
    """Readiness gate: enough categories finished or enough fields populated."""
    finished = len(set(completed) & set(CATEGORY_ORDER))
    return finished >= min_categories or len(data.populated()) >= min_fields
