# Filename: fileshare/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from .models import DirType


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminLogin(BaseModel):
    password: str = Field(..., min_length=1)


class Message(BaseModel):
    message: str


class DirectoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    parent_id: Optional[str] = None
    dir_type: Optional[DirType] = None


class DirectoryRename(BaseModel):
    name: str = Field(..., min_length=1)


class ShareToggle(BaseModel):
    is_shared: bool


class PasswordBody(BaseModel):
    password: str = ""


class DirectoryOut(BaseModel):
    id: str
    name: str
    parent_id: str
    is_shared: bool
    password: str
    dir_type: DirType
    children: List["DirectoryOut"] = []

    model_config = ConfigDict(from_attributes=True)


DirectoryOut.model_rebuild()


class SharedDirectoryOut(BaseModel):
    """Directory as seen by share viewers: whether a password exists, not the password."""

    id: str
    name: str
    parent_id: str
    is_shared: bool
    has_password: bool
    children: List["SharedDirectoryOut"] = []


SharedDirectoryOut.model_rebuild()


class FileOut(BaseModel):
    id: str
    name: str
    path: str
    size: int
    type: str
    add_time: str
    is_shared: bool
    directory_id: str

    model_config = ConfigDict(from_attributes=True)


class SharedFileOut(BaseModel):
    id: str
    name: str
    size: int
    type: str
    add_time: str
    directory_id: str

    model_config = ConfigDict(from_attributes=True)


class FileRename(BaseModel):
    name: str = Field(..., min_length=1)
