# Filename: fileshare/models.py
from sqlmodel import SQLModel, Field
from pydantic import BaseModel
from typing import List
from datetime import datetime
from enum import Enum
import uuid

ADD_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def new_id() -> str:
    return str(uuid.uuid4())


def format_add_time(moment: datetime) -> str:
    return moment.strftime(ADD_TIME_FORMAT)


class DirType(str, Enum):
    STORAGE = "storage"  # files are uploaded into the file store
    LINK = "link"  # files point at paths outside the file store


# --- In-memory entities (the forest is nested ownership) ---

class Directory(BaseModel):
    id: str
    name: str
    parent_id: str = ""
    is_shared: bool = False
    password: str = ""
    dir_type: DirType = DirType.STORAGE
    children: List["Directory"] = []


Directory.model_rebuild()


class File(BaseModel):
    id: str
    name: str
    path: str
    size: int
    type: str = ""
    add_time: str = ""
    is_shared: bool = False
    directory_id: str


# --- Durable rows ---

class DirectoryRecord(SQLModel, table=True):
    __tablename__ = "directory"

    id: str = Field(primary_key=True)
    name: str
    parent_id: str = Field(default="", nullable=False)
    is_shared: bool = Field(default=False, nullable=False)
    password: str = Field(default="", nullable=False)
    dir_type: str = Field(default=DirType.STORAGE.value, nullable=False)

    # physical placement; may disagree with parent_id
    container_id: str = Field(default="", index=True, nullable=False)
    position: int = Field(default=0, nullable=False)


class FileRecord(SQLModel, table=True):
    __tablename__ = "file"

    id: str = Field(primary_key=True)
    name: str
    path: str
    size: int = Field(default=0, nullable=False)
    type: str = Field(default="", nullable=False)
    add_time: str = Field(default="", nullable=False)
    is_shared: bool = Field(default=False, nullable=False)
    directory_id: str = Field(index=True)
    position: int = Field(default=0, nullable=False)
