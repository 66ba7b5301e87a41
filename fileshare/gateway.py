# Filename: fileshare/gateway.py
import logging
from typing import Dict, List, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .errors import PersistenceError
from .models import Directory, DirectoryRecord, DirType, File, FileRecord

logger = logging.getLogger(__name__)


def _flatten(forest: List[Directory], container_id: str = "") -> List[DirectoryRecord]:
    rows: List[DirectoryRecord] = []
    for position, directory in enumerate(forest):
        rows.append(
            DirectoryRecord(
                id=directory.id,
                name=directory.name,
                parent_id=directory.parent_id,
                is_shared=directory.is_shared,
                password=directory.password,
                dir_type=directory.dir_type.value,
                container_id=container_id,
                position=position,
            )
        )
        rows.extend(_flatten(directory.children, directory.id))
    return rows


class SqlGateway:
    """
    Loads and saves the whole forest and file list through SQLModel tables.

    Each directory row remembers the node that physically holds it
    (``container_id``) separately from its ``parent_id`` field, so the nested
    shape is restored exactly even when the two disagree.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def load_forest(self) -> List[Directory]:
        try:
            with Session(self.engine) as session:
                stmt = select(DirectoryRecord).order_by(DirectoryRecord.container_id, DirectoryRecord.position)
                rows = session.exec(stmt).all()
        except SQLAlchemyError as e:
            raise PersistenceError("load_forest", e) from e

        nodes: Dict[str, Directory] = {}
        placed: List[Tuple[str, Directory]] = []
        for row in rows:
            node = Directory(
                id=row.id,
                name=row.name,
                parent_id=row.parent_id,
                is_shared=row.is_shared,
                password=row.password,
                dir_type=DirType(row.dir_type or DirType.STORAGE.value),
            )
            nodes[row.id] = node
            placed.append((row.container_id, node))

        # rows are ordered by (container, position), so appending keeps sibling order
        forest: List[Directory] = []
        for container_id, node in placed:
            if not container_id:
                forest.append(node)
            elif container_id in nodes:
                nodes[container_id].children.append(node)
            else:
                logger.warning("Directory %s is held by missing directory %s, loading it as a root", node.id, container_id)
                forest.append(node)
        return forest

    def save_forest(self, forest: List[Directory]) -> None:
        try:
            with Session(self.engine) as session:
                for row in session.exec(select(DirectoryRecord)).all():
                    session.delete(row)
                session.flush()
                session.add_all(_flatten(forest))
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("save_forest", e) from e

    def load_files(self) -> List[File]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(select(FileRecord).order_by(FileRecord.position)).all()
                return [
                    File(
                        id=row.id,
                        name=row.name,
                        path=row.path,
                        size=row.size,
                        type=row.type,
                        add_time=row.add_time,
                        is_shared=row.is_shared,
                        directory_id=row.directory_id,
                    )
                    for row in rows
                ]
        except SQLAlchemyError as e:
            raise PersistenceError("load_files", e) from e

    def save_files(self, files: List[File]) -> None:
        try:
            with Session(self.engine) as session:
                for row in session.exec(select(FileRecord)).all():
                    session.delete(row)
                session.flush()
                session.add_all(
                    FileRecord(position=position, **f.model_dump())
                    for position, f in enumerate(files)
                )
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("save_files", e) from e
