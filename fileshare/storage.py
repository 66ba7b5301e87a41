# Filename: fileshare/storage.py
import logging
import os
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from .config import settings
import aiofiles

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def file_extension(name: str) -> str:
    """Extension without the leading dot ("" when there is none)."""
    return os.path.splitext(name)[1].lstrip(".")


def make_storage_name(file_id: str, original_filename: str) -> str:
    ext = os.path.splitext(original_filename)[1]
    return f"{file_id}{ext}"


class LocalStorage:
    """Physical bytes of storage-type files, kept under one directory."""

    def __init__(self, root: Path = settings.filestore_path):
        self.root = Path(root)

    def path_for(self, storage_name: str) -> Path:
        return self.root / storage_name

    async def save_upload_file(self, upload_file: UploadFile, storage_name: str):
        """
        Save UploadFile to disk. Returns tuple(size_bytes, filepath).
        """
        self.root.mkdir(parents=True, exist_ok=True)
        dest_path = self.path_for(storage_name)
        size = 0
        try:
            async with aiofiles.open(dest_path, "wb") as out_file:
                while True:
                    chunk = await upload_file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await out_file.write(chunk)
                    size += len(chunk)
        finally:
            await upload_file.close()
        return size, str(dest_path)

    def delete_bytes(self, path: str) -> None:
        """Remove a stored file. A file that is already gone is fine; other OSErrors propagate."""
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug("Stored file %s already missing", path)


def stat_linked_file(path: str) -> Optional[int]:
    """Size of an external file, or None if it cannot be reached."""
    try:
        info = os.stat(path)
    except OSError:
        return None
    if not os.path.isfile(path):
        return None
    return info.st_size
