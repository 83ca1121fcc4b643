import os

from fastapi import UploadFile

from auditpro.config import settings

ALLOWED_EXTENSIONS = {ext.strip() for ext in settings.allowed_extensions.split(",")}


def validate_file(file: UploadFile) -> None:
    if file.filename:
        ext = os.path.splitext(file.filename)[1].lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValueError(
                f"File type '{ext}' not allowed. Allowed: {sorted(ALLOWED_EXTENSIONS)}"
            )
    max_bytes = settings.max_file_size_mb * 1024 * 1024
    if file.size is not None and file.size > max_bytes:
        raise ValueError(
            f"File '{file.filename}' exceeds {settings.max_file_size_mb} MB limit"
        )


async def read_upload_text(file: UploadFile) -> str:
    content = await file.read()
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"File '{file.filename}' is not valid UTF-8 text") from e
