# Filename: fileshare/routers/directories.py
from fastapi import APIRouter, Depends, status
from typing import List

from ..auth import get_current_admin
from ..config import settings
from ..deps import get_repository
from ..models import DirType
from ..repository import Repository
from ..schemas import DirectoryCreate, DirectoryOut, DirectoryRename, Message, PasswordBody, ShareToggle
from ..utils import ensure_link_dirs_allowed, raise_for_result

router = APIRouter(
    prefix=f"{settings.context_manage_path}/api",
    tags=["directories"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/directories", response_model=List[DirectoryOut])
def list_directories(repo: Repository = Depends(get_repository)):
    return repo.list_directories()


@router.post("/directories", response_model=DirectoryOut, status_code=status.HTTP_201_CREATED)
def create_directory(data: DirectoryCreate, repo: Repository = Depends(get_repository)):
    dir_type = data.dir_type or DirType.STORAGE
    if dir_type is DirType.LINK:
        ensure_link_dirs_allowed(settings.link_dir_add)
    result = repo.create_directory(data.name, data.parent_id or "", dir_type)
    raise_for_result(result, "Failed to save directory")
    return result.value


@router.put("/directories/{dir_id}", response_model=Message)
def rename_directory(dir_id: str, data: DirectoryRename, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.rename_directory(dir_id, data.name), "Failed to save directory")
    return Message(message="Directory updated successfully")


@router.delete("/directories/{dir_id}", response_model=Message)
def delete_directory(dir_id: str, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.delete_directory(dir_id), "Failed to save directory")
    return Message(message="Directory deleted successfully")


@router.patch("/directories/{dir_id}/share", response_model=Message)
def toggle_directory_share(dir_id: str, data: ShareToggle, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.set_directory_share(dir_id, data.is_shared), "Failed to save directory")
    return Message(message="Directory share status updated successfully")


@router.patch("/directories/{dir_id}/password", response_model=Message)
def set_directory_password(dir_id: str, data: PasswordBody, repo: Repository = Depends(get_repository)):
    raise_for_result(repo.set_directory_password(dir_id, data.password), "Failed to save directory")
    return Message(message="Directory password updated successfully")
