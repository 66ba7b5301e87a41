# Filename: fileshare/db.py
from pathlib import Path
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from .config import settings

DATABASE_URL = settings.database_url


def make_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        Path(database_url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, echo=False, connect_args=connect_args)


engine = make_engine(DATABASE_URL)


def init_db(bind: Engine = engine) -> None:
    """Create DB tables and the file store dir"""
    settings.filestore_path.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(bind)
