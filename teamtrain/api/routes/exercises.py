from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.core.base import utcnow
from teamtrain.core.db import get_db
from teamtrain.core.errors import NotFoundError
from teamtrain.core.rbac import get_current_user, require_admin
from teamtrain.models.exercise import Exercise
from teamtrain.models.user import User
from teamtrain.schemas.auth import SuccessResponse
from teamtrain.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter(tags=["exercises"])

EXERCISE_NOT_FOUND = "Exercise not found"


async def get_exercise_or_404(db: AsyncSession, exercise_id: str) -> Exercise:
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise NotFoundError(EXERCISE_NOT_FOUND)
    return exercise


@router.get("", response_model=List[ExerciseRead])
async def list_exercises(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Exercise).order_by(Exercise.name))
    return result.scalars().all()


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_exercise_or_404(db, exercise_id)


@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    exercise_data: ExerciseCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    exercise = Exercise(**exercise_data.model_dump(), created_at=utcnow())
    db.add(exercise)
    await db.commit()
    await db.refresh(exercise)
    return exercise


@router.put("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: str,
    exercise_data: ExerciseUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    exercise = await get_exercise_or_404(db, exercise_id)
    for field, value in exercise_data.changes().items():
        setattr(exercise, field, value)
    await db.commit()
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", response_model=SuccessResponse)
async def delete_exercise(
    exercise_id: str,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    exercise = await db.get(Exercise, exercise_id)
    if exercise:
        await db.delete(exercise)
        await db.commit()
    return SuccessResponse()
