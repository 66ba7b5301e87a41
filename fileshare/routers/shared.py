# Filename: fileshare/routers/shared.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from ..config import settings
from ..deps import get_repository
from ..models import Directory
from ..repository import Repository
from ..schemas import Message, PasswordBody, SharedDirectoryOut, SharedFileOut
from ..utils import raise_for_result
from .files import send_file

# no authentication on this router
router = APIRouter(prefix=f"{settings.context_share_path}/api", tags=["shared"])


def _to_shared_out(directory: Directory) -> SharedDirectoryOut:
    return SharedDirectoryOut(
        id=directory.id,
        name=directory.name,
        parent_id=directory.parent_id,
        is_shared=directory.is_shared,
        has_password=bool(directory.password),
        children=[_to_shared_out(child) for child in directory.children],
    )


@router.get("/directories/shared", response_model=List[SharedDirectoryOut])
def shared_directories(repo: Repository = Depends(get_repository)):
    return [_to_shared_out(d) for d in repo.shared_directories()]


@router.post("/directories/{dir_id}/verify", response_model=Message)
def verify_directory_password(dir_id: str, data: PasswordBody, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.verify_directory_password(dir_id, data.password))
    return Message(message="Password verified successfully")


@router.get("/files/shared", response_model=List[SharedFileOut])
def shared_files(directory_id: Optional[str] = Query(default=None), repo: Repository = Depends(get_repository)):
    return repo.list_shared_files(directory_id)


@router.get("/files/{file_id}/download")
def download_file(file_id: str, repo: Repository = Depends(get_repository)):
    result = repo.get_file(file_id)
    raise_for_result(result)
    if not result.value.is_shared:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="File is not shared")
    return send_file(result.value)
