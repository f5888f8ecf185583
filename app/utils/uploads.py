"""
Local file storage for uploaded profile pictures and KYC documents.

Files land in UPLOAD_DIR named by upload time in milliseconds plus the
original extension. Two uploads in the same millisecond with the same
extension would collide; that risk is accepted.
"""

import time
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from app.config.settings import get_settings
from app.shared.exceptions import FileTooLargeError, InvalidFileTypeError, ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def get_upload_dir() -> Path:
    """Upload directory, created on first use."""
    upload_dir = Path(get_settings().UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def get_extension(filename: Optional[str]) -> str:
    """Lowercased extension of an uploaded filename, including the dot."""
    return Path(filename or "").suffix.lower()


async def read_upload(
    file: Optional[UploadFile],
    field_name: str
) -> bytes:
    """
    Read an uploaded file and enforce the size limit.

    Args:
        file: Uploaded file (None when the form field was missing)
        field_name: Form field name for error messages

    Returns:
        bytes: File content

    Raises:
        ValidationError: If no file was sent
        FileTooLargeError: If file exceeds MAX_UPLOAD_SIZE_MB
    """
    if file is None or not file.filename:
        raise ValidationError(f"{field_name} is required!")

    content = await file.read()

    max_bytes = get_settings().MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise FileTooLargeError(
            f"File size exceeds {get_settings().MAX_UPLOAD_SIZE_MB}MB limit"
        )

    return content


def check_image_type(file: UploadFile) -> None:
    """
    Check an uploaded image against ALLOWED_IMAGE_TYPES.

    Raises:
        InvalidFileTypeError: If content type is not allowed
    """
    allowed = get_settings().ALLOWED_IMAGE_TYPES
    if file.content_type not in allowed:
        raise InvalidFileTypeError(
            f"Invalid file type {file.content_type}. Allowed types: {', '.join(allowed)}"
        )


def check_document_extension(extension: str) -> None:
    """
    Check a document extension against ALLOWED_DOCUMENT_EXTENSIONS.

    Raises:
        InvalidFileTypeError: If extension is not allowed
    """
    allowed = get_settings().ALLOWED_DOCUMENT_EXTENSIONS
    if extension not in allowed:
        raise InvalidFileTypeError(
            f"Invalid document extension '{extension}'. Allowed: {', '.join(allowed)}"
        )


async def save_file(content: bytes, extension: str) -> str:
    """
    Write content to the upload directory off the event loop.

    Args:
        content: Bytes to write
        extension: Extension including the dot (may be empty)

    Returns:
        str: Path of the stored file
    """
    filename = f"{int(time.time() * 1000)}{extension}"
    path = get_upload_dir() / filename
    await run_in_threadpool(path.write_bytes, content)

    logger.info(f"Upload stored: path={path}, size={len(content)}")
    return str(path)


async def read_file(path: str) -> bytes:
    """Read a previously stored upload off the event loop."""
    return await run_in_threadpool(Path(path).read_bytes)


async def store_image(file: Optional[UploadFile], field_name: str = "profilePic") -> str:
    """
    Validate and store an uploaded image.

    Args:
        file: Uploaded image
        field_name: Form field name for error messages

    Returns:
        str: Path of the stored image

    Raises:
        ValidationError: If no file was sent
        InvalidFileTypeError: If the content type is not an allowed image type
        FileTooLargeError: If the image exceeds the size limit
    """
    content = await read_upload(file, field_name)
    check_image_type(file)
    return await save_file(content, get_extension(file.filename))
