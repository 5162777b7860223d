"""Workout plan endpoints - plans and their ordered exercises."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.api.deps import get_current_user
from fittrack.core.timeutils import utcnow
from fittrack.db.session import get_db
from fittrack.models.exercise import Exercise
from fittrack.models.plan import PlanExercise, WorkoutPlan
from fittrack.models.user import User
from fittrack.schemas.plan import (
    PlanExerciseRead,
    PlanExercisesAdd,
    PlanExercisesReorder,
    PlanExerciseUpdate,
    WorkoutPlanCreate,
    WorkoutPlanRead,
    WorkoutPlanSummary,
    WorkoutPlanUpdate,
)

router = APIRouter()


async def get_owned_plan(db: AsyncSession, plan_id: uuid.UUID, user: User) -> WorkoutPlan:
    """Plan with exercises loaded; 404 when missing or owned by someone else."""
    result = await db.execute(
        select(WorkoutPlan)
        .options(selectinload(WorkoutPlan.exercises))
        .where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user.id)
    )
    plan = result.scalar_one_or_none()
    if not plan:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    return plan


def plan_to_read(plan: WorkoutPlan) -> WorkoutPlanRead:
    return WorkoutPlanRead(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        created_at=plan.created_at,
        updated_at=plan.updated_at,
        exercises=[
            PlanExerciseRead.model_validate(pe)
            for pe in sorted(plan.exercises, key=lambda pe: pe.position)
        ],
    )


def _find_plan_exercise(plan: WorkoutPlan, plan_exercise_id: uuid.UUID) -> PlanExercise:
    for pe in plan.exercises:
        if pe.id == plan_exercise_id:
            return pe
    raise HTTPException(status_code=404, detail="Exercise not found in this plan")


@router.get("", response_model=list[WorkoutPlanSummary])
async def list_plans(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
):
    """Caller's plans, newest first, with exercise counts."""
    exercise_count = (
        select(func.count(PlanExercise.id))
        .where(PlanExercise.plan_id == WorkoutPlan.id)
        .correlate(WorkoutPlan)
        .scalar_subquery()
    )
    result = await db.execute(
        select(WorkoutPlan, exercise_count.label("exercise_count"))
        .where(WorkoutPlan.user_id == user.id)
        .order_by(WorkoutPlan.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return [
        WorkoutPlanSummary(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            exercise_count=count or 0,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
        for plan, count in result.all()
    ]


@router.post("", response_model=WorkoutPlanRead, status_code=201)
async def create_plan(
    payload: WorkoutPlanCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create an empty plan (add exercises via /{plan_id}/exercises)."""
    now = utcnow()
    plan = WorkoutPlan(
        user_id=user.id,
        name=payload.name,
        description=payload.description,
        created_at=now,
        updated_at=now,
        exercises=[],
    )
    db.add(plan)
    await db.flush()
    return plan_to_read(plan)


@router.get("/{plan_id}", response_model=WorkoutPlanRead)
async def get_plan(
    plan_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return plan_to_read(await get_owned_plan(db, plan_id, user))


@router.patch("/{plan_id}", response_model=WorkoutPlanRead)
async def update_plan(
    plan_id: uuid.UUID,
    payload: WorkoutPlanUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    plan = await get_owned_plan(db, plan_id, user)
    for k, v in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(plan, k, v)
    plan.updated_at = utcnow()
    await db.flush()
    return plan_to_read(plan)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(
    plan_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a plan. Sessions started from it keep their snapshot."""
    plan = await get_owned_plan(db, plan_id, user)
    await db.delete(plan)
    return None


@router.post("/{plan_id}/exercises", response_model=WorkoutPlanRead, status_code=201)
async def add_plan_exercises(
    plan_id: uuid.UUID,
    payload: PlanExercisesAdd,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Append exercises in the given order. An exercise may appear in a plan only once."""
    plan = await get_owned_plan(db, plan_id, user)
    requested = [item.exercise_id for item in payload.exercises]
    if len(set(requested)) != len(requested):
        raise HTTPException(status_code=400, detail="The same exercise was selected more than once")
    already = {pe.exercise_id for pe in plan.exercises}
    if already.intersection(requested):
        raise HTTPException(status_code=400, detail="Exercise is already in this workout plan")

    result = await db.execute(select(Exercise).where(Exercise.id.in_(requested)))
    catalog = {e.id: e for e in result.scalars().all()}
    missing = [str(eid) for eid in requested if eid not in catalog]
    if missing:
        raise HTTPException(status_code=404, detail=f"Exercise not found: {', '.join(missing)}")

    position = max((pe.position for pe in plan.exercises), default=-1) + 1
    for item in payload.exercises:
        plan.exercises.append(
            PlanExercise(
                exercise_name=catalog[item.exercise_id].name,
                position=position,
                **item.model_dump(),
            )
        )
        position += 1
    plan.updated_at = utcnow()
    await db.flush()
    return plan_to_read(plan)


@router.patch("/{plan_id}/exercises/{plan_exercise_id}", response_model=WorkoutPlanRead)
async def update_plan_exercise(
    plan_id: uuid.UUID,
    plan_exercise_id: uuid.UUID,
    payload: PlanExerciseUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change sets, reps, rest, weight or notes of one plan exercise (partial)."""
    plan = await get_owned_plan(db, plan_id, user)
    pe = _find_plan_exercise(plan, plan_exercise_id)
    for k, v in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(pe, k, v)
    plan.updated_at = utcnow()
    await db.flush()
    return plan_to_read(plan)


@router.delete("/{plan_id}/exercises/{plan_exercise_id}", response_model=WorkoutPlanRead)
async def remove_plan_exercise(
    plan_id: uuid.UUID,
    plan_exercise_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove an exercise; the rest are renumbered 0..n-1."""
    plan = await get_owned_plan(db, plan_id, user)
    pe = _find_plan_exercise(plan, plan_exercise_id)
    plan.exercises.remove(pe)
    for position, remaining in enumerate(sorted(plan.exercises, key=lambda x: x.position)):
        remaining.position = position
    plan.updated_at = utcnow()
    await db.flush()
    return plan_to_read(plan)


@router.put("/{plan_id}/exercises/order", response_model=WorkoutPlanRead)
async def reorder_plan_exercises(
    plan_id: uuid.UUID,
    payload: PlanExercisesReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Set the exercise order. The ids must be exactly the plan's exercises."""
    plan = await get_owned_plan(db, plan_id, user)
    by_id = {pe.id: pe for pe in plan.exercises}
    ids = payload.plan_exercise_ids
    if len(ids) != len(by_id) or set(ids) != set(by_id):
        raise HTTPException(status_code=400, detail="Order must list every exercise of the plan exactly once")
    for position, pe_id in enumerate(ids):
        by_id[pe_id].position = position
    plan.updated_at = utcnow()
    await db.flush()
    return plan_to_read(plan)
