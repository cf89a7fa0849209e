import os
import re
import logging
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, UploadFile

from mealhub.api.dependencies import current_user
from mealhub.domain.User import User
from mealhub.domain.errors import ValidationError
from mealhub.utilities.config import MAX_UPLOAD_BYTES, UPLOADS_DIR

router = APIRouter()
logger = logging.getLogger(__name__)

_FOLDER_RE = re.compile(r"^[A-Za-z0-9_-]{1,40}$")

# Stored extension comes from the declared type, never from the client filename
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

# Ensure uploads directory exists
os.makedirs(UPLOADS_DIR, exist_ok=True)


@router.post("/api/upload/image")
async def upload_image(file: UploadFile = File(None), folder: str = Form("uploads"),
                       user: User = Depends(current_user)):
    if file is None or not file.filename:
        raise ValidationError("No file provided")
    ext = IMAGE_EXTENSIONS.get((file.content_type or "").lower())
    if ext is None:
        raise ValidationError("Invalid image type")
    if not _FOLDER_RE.match(folder or ""):
        folder = "uploads"

    contents = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(contents) > MAX_UPLOAD_BYTES:
        raise ValidationError("Image is too large")

    target_dir = Path(UPLOADS_DIR) / folder
    os.makedirs(target_dir, exist_ok=True)
    name = f"{uuid4().hex}{ext}"
    with open(target_dir / name, "wb") as f:
        f.write(contents)
    logger.info("Image %s/%s uploaded by %s", folder, name, user.id)
    return {"success": True, "imageUrl": f"/uploads/{folder}/{name}"}
