# Filename: fileshare/deps.py
from fastapi import Depends, Request

from .repository import Repository
from .storage import LocalStorage


def get_repository(request: Request) -> Repository:
    """The process-wide repository built at startup (dependency)."""
    return request.app.state.repository


def get_storage(repo: Repository = Depends(get_repository)) -> LocalStorage:
    return repo.storage
