"""Exercise catalog: list filters, filter options and bulk import."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.constants import DEFAULT_EQUIPMENT, DEFAULT_MUSCLE_GROUPS
from fittrack.core.enums import ExerciseCategory, ExerciseSort
from fittrack.models.exercise import Exercise

logger = logging.getLogger(__name__)


def normalize_muscle_groups(value: Any) -> list[str]:
    """Muscle groups arrive as a list, a mapping (values are the groups) or a single string."""
    if value is None:
        return []
    if isinstance(value, dict):
        value = list(value.values())
    elif isinstance(value, str):
        value = [value]
    return [str(g).strip() for g in value if str(g).strip()]


def _matches_search(exercise: Exercise, query: str) -> bool:
    if query in exercise.name.lower():
        return True
    if query in (exercise.equipment or "").lower():
        return True
    return any(query in g.lower() for g in exercise.muscle_groups or [])


def filter_exercises(
    exercises: Iterable[Exercise],
    search: str | None = None,
    category: ExerciseCategory = ExerciseCategory.ALL,
    muscle_groups: Sequence[str] | None = None,
    equipment: Sequence[str] | None = None,
    sort: ExerciseSort = ExerciseSort.DEFAULT,
) -> list[Exercise]:
    """Apply search, category, muscle group and equipment filters, then sort."""
    result = list(exercises)

    query = (search or "").strip().lower()
    if query:
        result = [e for e in result if _matches_search(e, query)]

    if category == ExerciseCategory.EQUIPMENT:
        result = [e for e in result if e.equipment]
    elif category == ExerciseCategory.MUSCLE:
        result = [e for e in result if e.muscle_groups]

    if muscle_groups:
        wanted = set(muscle_groups)
        result = [e for e in result if any(g in wanted for g in e.muscle_groups or [])]

    if equipment:
        wanted_equipment = set(equipment)
        result = [e for e in result if e.equipment in wanted_equipment]

    if sort == ExerciseSort.A_Z:
        result.sort(key=lambda e: e.name)
    elif sort == ExerciseSort.Z_A:
        result.sort(key=lambda e: e.name, reverse=True)
    return result


def filter_options(exercises: Iterable[Exercise]) -> tuple[list[str], list[str]]:
    """Sorted unique (muscle groups, equipment), falling back to defaults when the catalog has none."""
    groups: set[str] = set()
    equipment: set[str] = set()
    for e in exercises:
        groups.update(e.muscle_groups or [])
        if e.equipment:
            equipment.add(e.equipment)
    return (
        sorted(groups) if groups else list(DEFAULT_MUSCLE_GROUPS),
        sorted(equipment) if equipment else list(DEFAULT_EQUIPMENT),
    )


def load_documents(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of exercise documents."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Exercise file must contain a JSON array")
    return data


def _document_fields(doc: dict[str, Any]) -> dict[str, Any]:
    instructions = doc.get("instructions") or {}
    if isinstance(instructions, str):
        instructions = {"text": instructions}
    elif isinstance(instructions, list):
        instructions = {str(i + 1): str(step) for i, step in enumerate(instructions)}
    return {
        "equipment": str(doc.get("equipment") or ""),
        "muscle_groups": normalize_muscle_groups(doc.get("muscleGroups", doc.get("muscle_groups"))),
        "instructions": {str(k): str(v) for k, v in instructions.items()},
        "description": doc.get("description"),
        "images": list(doc.get("images") or []),
        "tags": list(doc.get("tags") or []),
        "videos": list(doc.get("videos") or []),
    }


async def import_exercises(db: AsyncSession, documents: Iterable[dict[str, Any]]) -> tuple[int, int]:
    """Upsert exercises by name. Returns (created, updated)."""
    result = await db.execute(select(Exercise))
    existing = {e.name: e for e in result.scalars().all()}
    created = updated = 0
    for doc in documents:
        name = str(doc.get("name") or doc.get("id") or "").strip()
        if not name:
            logger.warning("Skipping exercise document without name or id")
            continue
        fields = _document_fields(doc)
        exercise = existing.get(name)
        if exercise is None:
            exercise = Exercise(name=name, **fields)
            db.add(exercise)
            existing[name] = exercise
            created += 1
        else:
            for k, v in fields.items():
                setattr(exercise, k, v)
            updated += 1
    await db.flush()
    logger.info("Imported exercises: %d created, %d updated", created, updated)
    return created, updated
