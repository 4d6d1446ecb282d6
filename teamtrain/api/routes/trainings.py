from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.core.base import utcnow
from teamtrain.core.db import get_db
from teamtrain.core.errors import NotFoundError
from teamtrain.core.rbac import get_current_user, require_admin
from teamtrain.models.training import Training
from teamtrain.models.user import User
from teamtrain.schemas.auth import SuccessResponse
from teamtrain.schemas.training import TrainingCreate, TrainingRead, TrainingUpdate

router = APIRouter(tags=["trainings"])

TRAINING_NOT_FOUND = "Training not found"


async def get_training_or_404(db: AsyncSession, training_id: str) -> Training:
    training = await db.get(Training, training_id)
    if not training:
        raise NotFoundError(TRAINING_NOT_FOUND)
    return training


@router.get("", response_model=List[TrainingRead])
async def list_trainings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Training).order_by(Training.date, Training.time))
    return result.scalars().all()


@router.get("/{training_id}", response_model=TrainingRead)
async def get_training(
    training_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_training_or_404(db, training_id)


@router.post("", response_model=TrainingRead, status_code=status.HTTP_201_CREATED)
async def create_training(
    training_data: TrainingCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    training = Training(**training_data.model_dump(), created_at=utcnow())
    db.add(training)
    await db.commit()
    await db.refresh(training)
    return training


@router.put("/{training_id}", response_model=TrainingRead)
async def update_training(
    training_id: str,
    training_data: TrainingUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    training = await get_training_or_404(db, training_id)
    for field, value in training_data.changes().items():
        setattr(training, field, value)
    await db.commit()
    await db.refresh(training)
    return training


@router.delete("/{training_id}", response_model=SuccessResponse)
async def delete_training(
    training_id: str,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    training = await db.get(Training, training_id)
    if training:
        await db.delete(training)
        await db.commit()
    return SuccessResponse()
