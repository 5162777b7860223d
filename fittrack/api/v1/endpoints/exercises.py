"""Exercise library endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.deps import get_current_user, get_optional_user
from fittrack.core.enums import ExerciseCategory, ExerciseSort
from fittrack.db.session import get_db
from fittrack.models.exercise import Exercise
from fittrack.models.plan import PlanExercise, WorkoutPlan
from fittrack.models.user import User
from fittrack.schemas.exercise import ExerciseCreate, ExerciseFilterOptions, ExerciseRead, ExerciseUpdate
from fittrack.services.exercise_catalog import filter_exercises, filter_options

router = APIRouter()


async def _get_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


async def _ensure_unique_name(db: AsyncSession, name: str, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(Exercise.id).where(Exercise.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Exercise.id != exclude_id)
    result = await db.execute(stmt)
    if result.first() is not None:
        raise HTTPException(status_code=409, detail="An exercise with this name already exists")


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    user: User | None = Depends(get_optional_user),
    search: str | None = None,
    category: ExerciseCategory = ExerciseCategory.ALL,
    muscle_groups: list[str] | None = Query(None),
    equipment: list[str] | None = Query(None),
    sort: ExerciseSort = ExerciseSort.DEFAULT,
    exclude_plan_id: uuid.UUID | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List exercises: search, category, muscle group and equipment filters, then sort and paginate."""
    result = await db.execute(select(Exercise).order_by(Exercise.name))
    exercises = list(result.scalars().all())

    if exclude_plan_id is not None:
        if user is None:
            raise HTTPException(status_code=401, detail="Not authenticated")
        owned = await db.execute(
            select(WorkoutPlan.id).where(WorkoutPlan.id == exclude_plan_id, WorkoutPlan.user_id == user.id)
        )
        if owned.scalar_one_or_none() is None:
            raise HTTPException(status_code=404, detail="Workout plan not found")
        in_plan = await db.execute(
            select(PlanExercise.exercise_id).where(PlanExercise.plan_id == exclude_plan_id)
        )
        taken = set(in_plan.scalars().all())
        exercises = [e for e in exercises if e.id not in taken]

    filtered = filter_exercises(
        exercises,
        search=search,
        category=category,
        muscle_groups=muscle_groups,
        equipment=equipment,
        sort=sort,
    )
    return filtered[skip : skip + limit]


@router.get("/filters", response_model=ExerciseFilterOptions)
async def get_filter_options(db: AsyncSession = Depends(get_db)):
    """Muscle groups and equipment to offer in the filter dialog."""
    result = await db.execute(select(Exercise))
    groups, equipment = filter_options(result.scalars().all())
    return ExerciseFilterOptions(muscle_groups=groups, equipment=equipment)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    await _ensure_unique_name(db, payload.name)
    exercise = Exercise(**payload.model_dump())
    db.add(exercise)
    await db.flush()
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _get_exercise(db, exercise_id)


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update an exercise (partial)."""
    exercise = await _get_exercise(db, exercise_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("name") is not None and data["name"] != exercise.name:
        await _ensure_unique_name(db, data["name"], exclude_id=exercise.id)
    for k, v in data.items():
        if v is None and k != "description":
            continue
        setattr(exercise, k, v)
    await db.flush()
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete an exercise. Plans and sessions keep their name snapshot."""
    exercise = await _get_exercise(db, exercise_id)
    await db.delete(exercise)
    return None
