# Filename: fileshare/routers/files.py
from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException, status, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse
from typing import List, Optional
from datetime import datetime
import json
import logging
import os

from ..auth import get_current_admin
from ..config import settings
from ..deps import get_repository, get_storage
from ..errors import Outcome
from ..models import DirType, File as FileModel, format_add_time, new_id
from ..repository import Repository
from ..schemas import FileOut, FileRename, Message, ShareToggle
from ..storage import LocalStorage, file_extension, make_storage_name, stat_linked_file
from ..utils import ensure_link_dirs_allowed, raise_for_result

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{settings.context_manage_path}/api",
    tags=["files"],
    dependencies=[Depends(get_current_admin)],
)


def send_file(record: FileModel) -> FileResponse:
    if not os.path.isfile(record.path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File missing on disk")
    return FileResponse(record.path, media_type="application/octet-stream", filename=record.name)


def _parse_file_paths(raw: Optional[str]) -> List[str]:
    if not raw:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File paths are required for link directory")
    try:
        paths = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file paths format")
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file paths format")
    return paths


def _link_records(directory_id: str, paths: List[str]) -> List[FileModel]:
    records = []
    for path in paths:
        size = stat_linked_file(path)
        if size is None:
            logger.info("Skipping missing linked file %s", path)
            continue
        records.append(
            FileModel(
                id=new_id(),
                name=os.path.basename(path),
                path=path,
                size=size,
                type=file_extension(path),
                add_time=format_add_time(datetime.now()),
                directory_id=directory_id,
            )
        )
    return records


def _discard_stored(storage: LocalStorage, paths: List[str]) -> None:
    for path in paths:
        try:
            storage.delete_bytes(path)
        except OSError as e:
            logger.error("Failed to remove stored upload %s: %s", path, e)


@router.get("/files", response_model=List[FileOut])
def list_files(directory_id: Optional[str] = Query(default=None), repo: Repository = Depends(get_repository)):
    return repo.list_files(directory_id)


# --- Upload into a storage directory, or link external paths into a link directory ---
@router.post("/files", response_model=List[FileOut], status_code=status.HTTP_201_CREATED)
async def upload_files(
    directory_id: str = Form(...),
    file_paths: Optional[str] = Form(default=None),
    files: Optional[List[UploadFile]] = File(default=None),
    repo: Repository = Depends(get_repository),
    storage: LocalStorage = Depends(get_storage),
):
    target = await run_in_threadpool(repo.find_directory, directory_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Directory not found")

    stored_paths: List[str] = []
    if target.dir_type is DirType.LINK:
        ensure_link_dirs_allowed(settings.link_dir_add)
        new_records = _link_records(directory_id, _parse_file_paths(file_paths))
    else:
        if not files:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
        new_records = []
        for upload in files:
            file_id = new_id()
            filename = upload.filename or file_id
            storage_name = make_storage_name(file_id, filename)
            try:
                size, saved_path = await storage.save_upload_file(upload, storage_name)
            except OSError:
                logger.exception("Failed to save uploaded file %s", filename)
                # the partially written file goes as well
                _discard_stored(storage, stored_paths + [str(storage.path_for(storage_name))])
                raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save file")
            stored_paths.append(saved_path)
            new_records.append(
                FileModel(
                    id=file_id,
                    name=filename,
                    path=saved_path,
                    size=size,
                    type=file_extension(filename),
                    add_time=format_add_time(datetime.now()),
                    directory_id=directory_id,
                )
            )

    result = await run_in_threadpool(repo.add_files, directory_id, new_records)
    if result.outcome is Outcome.NOT_FOUND:
        # directory vanished while the upload was being written
        _discard_stored(storage, stored_paths)
    raise_for_result(result, "Failed to save file records")
    return result.value


@router.get("/files/{file_id}/download")
def admin_download_file(file_id: str, repo: Repository = Depends(get_repository)):
    result = repo.get_file(file_id)
    raise_for_result(result)
    return send_file(result.value)


@router.patch("/files/{file_id}", response_model=Message)
def rename_file(file_id: str, data: FileRename, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.rename_file(file_id, data.name), "Failed to save file records")
    return Message(message="File updated successfully")


@router.patch("/files/{file_id}/share", response_model=Message)
def toggle_file_share(file_id: str, data: ShareToggle, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.set_file_share(file_id, data.is_shared), "Failed to save file records")
    return Message(message="File share status updated successfully")


@router.delete("/files/{file_id}", response_model=Message)
def delete_file(file_id: str, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.delete_file(file_id), "Failed to save file records")
    return Message(message="File deleted successfully")
