from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from teamtrain.core.rbac import require_admin
from teamtrain.models.user import User
from teamtrain.schemas.upload import UploadResponse
from teamtrain.services import upload_service

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_media(
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(require_admin),
):
    """Store one image or video and return its public path."""
    return await upload_service.save_upload(file)
