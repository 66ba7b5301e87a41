# Filename: fileshare/routers/root.py
from fastapi import APIRouter, Depends
from ..config import settings
from ..deps import get_repository
from ..repository import Repository
from ..tree import walk

router = APIRouter()


@router.get("/", tags=["root"])
def health(repo: Repository = Depends(get_repository)):
    """Service info plus the size of the loaded forest."""
    directories = repo.list_directories()
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "directories": sum(1 for _ in walk(directories)),
        "files": len(repo.list_files()),
        "link_dirs_enabled": settings.link_dir_add,
        "status": "ok",
    }
