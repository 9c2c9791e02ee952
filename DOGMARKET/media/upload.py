# file: DOGMARKET/media/upload.py
import os
import re
import time
import logging

import aiofiles
from fastapi import HTTPException, UploadFile

from DOGMARKET.core.config import UPLOAD_DIR, UPLOAD_URL_PREFIX

logger = logging.getLogger("app.media")


def build_upload_filename(original: str) -> str:
    """`<epoch ms>-<original name with whitespace replaced by _>`"""
    base = os.path.basename(original or "upload")
    safe_name = re.sub(r"\s+", "_", base)
    return f"{int(time.time() * 1000)}-{safe_name}"


async def save_upload(file: UploadFile, upload_dir: str = None) -> str:
    """
    Write an uploaded image to the uploads directory and return its public path.
    """
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    directory = upload_dir or UPLOAD_DIR
    os.makedirs(directory, exist_ok=True)

    filename = build_upload_filename(file.filename)
    file_path = os.path.join(directory, filename)
    async with aiofiles.open(file_path, "wb") as out_file:
        content = await file.read()
        await out_file.write(content)

    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return f"{UPLOAD_URL_PREFIX}/{filename}"
