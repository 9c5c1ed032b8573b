from fastapi import APIRouter, Depends, File, UploadFile, status
from app import schemas
from app.core.deps import get_current_user
from app.models.user import User
from app.services.storage_service import storage_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=schemas.TempUpload, status_code=status.HTTP_201_CREATED)
async def upload_temp_file(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user)
):
    """
    Stage a file for a later post.

    The returned ``tempId`` goes into the ``media`` list of a post create or
    update request, which moves the file to its permanent location.
    """
    content = await file.read()
    temp_id = storage_service.save_temp(content, file.filename)
    logger.info(f"User {current_user.username} staged upload {temp_id}")
    return {"tempId": temp_id}
