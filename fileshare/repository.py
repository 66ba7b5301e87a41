# Filename: fileshare/repository.py
import logging
import threading
from typing import Dict, List, Optional, Protocol

from .cascade import delete_files_under
from .errors import Outcome, PersistenceError, Result
from .models import Directory, DirType, File, new_id
from .projection import project_shared
from . import tree

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    def load_forest(self) -> List[Directory]: ...

    def save_forest(self, forest: List[Directory]) -> None: ...

    def load_files(self) -> List[File]: ...

    def save_files(self, files: List[File]) -> None: ...


class ByteStore(Protocol):
    def delete_bytes(self, path: str) -> None: ...


class Repository:
    """
    Owner of the directory forest and the flat file list.

    Every mutation runs inside one re-entrant lock, changes memory first and
    then persists through the gateway. A failed save is reported as
    ``IO_ERROR`` and the in-memory change stays; the next successful save
    writes it out.
    """

    def __init__(self, gateway: Gateway, storage: ByteStore):
        self.gateway = gateway
        self.storage = storage
        self.forest: List[Directory] = []
        self.files: List[File] = []
        self._forest_dirty = False
        self._files_dirty = False
        self._lock = threading.RLock()

    def load(self) -> None:
        with self._lock:
            self.forest = self.gateway.load_forest()
            self.files = self.gateway.load_files()
            self._forest_dirty = self._files_dirty = False
        logger.info("Loaded %d root directories and %d files", len(self.forest), len(self.files))

    def _persist(self, forest: bool = False, files: bool = False) -> Optional[str]:
        # a collection stays dirty until a save of it succeeds
        self._forest_dirty = self._forest_dirty or forest
        self._files_dirty = self._files_dirty or files
        errors: List[str] = []
        if self._files_dirty:
            try:
                self.gateway.save_files(self.files)
                self._files_dirty = False
            except PersistenceError as e:
                errors.append(str(e))
        if self._forest_dirty:
            try:
                self.gateway.save_forest(self.forest)
                self._forest_dirty = False
            except PersistenceError as e:
                errors.append(str(e))
        if errors:
            logger.error("Save failed, in-memory state kept: %s", "; ".join(errors))
            return "; ".join(errors)
        return None

    def _saved(self, value=None, forest: bool = False, files: bool = False) -> Result:
        error = self._persist(forest=forest, files=files)
        if error is not None:
            return Result(Outcome.IO_ERROR, value, error)
        return Result.success(value)

    # --- directories ---

    def list_directories(self) -> List[Directory]:
        with self._lock:
            return [d.model_copy(deep=True) for d in self.forest]

    def find_directory(self, dir_id: str) -> Optional[Directory]:
        with self._lock:
            return tree.find_directory(self.forest, dir_id)

    def directory_exists(self, dir_id: str) -> bool:
        with self._lock:
            return tree.directory_exists(self.forest, dir_id)

    def owner_type(self, dir_id: str) -> DirType:
        """Type of the directory owning a file; unknown owners count as storage."""
        directory = self.find_directory(dir_id)
        if directory is None:
            return DirType.STORAGE
        return directory.dir_type

    def create_directory(self, name: str, parent_id: str = "", dir_type: DirType = DirType.STORAGE) -> Result[Directory]:
        new_dir = Directory(id=new_id(), name=name, parent_id=parent_id or "", dir_type=dir_type)
        with self._lock:
            outcome = tree.insert_directory(self.forest, new_dir)
            if outcome is not Outcome.OK:
                return Result.failure(outcome, "Parent directory not found")
            logger.info("Created directory %s (%s) under %r", new_dir.id, new_dir.name, new_dir.parent_id)
            return self._saved(new_dir.model_copy(deep=True), forest=True)

    def rename_directory(self, dir_id: str, name: str) -> Result:
        with self._lock:
            if tree.rename_directory(self.forest, dir_id, name) is not Outcome.OK:
                return Result.failure(Outcome.NOT_FOUND, "Directory not found")
            return self._saved(forest=True)

    def set_directory_share(self, dir_id: str, is_shared: bool) -> Result:
        with self._lock:
            if tree.set_directory_share(self.forest, dir_id, is_shared) is not Outcome.OK:
                return Result.failure(Outcome.NOT_FOUND, "Directory not found")
            return self._saved(forest=True)

    def set_directory_password(self, dir_id: str, password: str) -> Result:
        with self._lock:
            if tree.set_directory_password(self.forest, dir_id, password) is not Outcome.OK:
                return Result.failure(Outcome.NOT_FOUND, "Directory not found")
            return self._saved(forest=True)

    def delete_directory(self, dir_id: str) -> Result[List[File]]:
        """
        Remove a directory, its subtree and every file they own.

        Files are cascaded before the splice so the descendant set is taken
        from the intact forest. Stored bytes go too, except for files owned
        by link-type directories.
        """
        with self._lock:
            if not tree.directory_exists(self.forest, dir_id):
                return Result.failure(Outcome.NOT_FOUND, "Directory not found")

            owner_types: Dict[str, DirType] = {}
            for directory in tree.walk(self.forest):
                owner_types.setdefault(directory.id, directory.dir_type)

            removed_files = delete_files_under(self.forest, self.files, dir_id)
            tree.remove_directory(self.forest, dir_id)
            logger.info("Deleted directory %s and %d files", dir_id, len(removed_files))

            for record in removed_files:
                if owner_types.get(record.directory_id, DirType.STORAGE) is not DirType.LINK:
                    self._delete_bytes(record)

            return self._saved(removed_files, forest=True, files=True)

    def verify_directory_password(self, dir_id: str, password: str) -> Result:
        with self._lock:
            outcome = tree.verify_password(self.forest, dir_id, password)
        if outcome is Outcome.NOT_FOUND:
            return Result.failure(outcome, "Directory not found")
        if outcome is Outcome.UNAUTHORIZED:
            return Result.failure(outcome, "Invalid password")
        return Result.success()

    def shared_directories(self) -> List[Directory]:
        with self._lock:
            return project_shared(self.forest)

    # --- files ---

    def _delete_bytes(self, record: File) -> None:
        try:
            self.storage.delete_bytes(record.path)
        except OSError as e:
            # the record goes regardless
            logger.error("Failed to delete file %s: %s", record.path, e)

    def _find_file(self, file_id: str) -> Optional[File]:
        for record in self.files:
            if record.id == file_id:
                return record
        return None

    def list_files(self, directory_id: Optional[str] = None) -> List[File]:
        with self._lock:
            return [
                f.model_copy()
                for f in self.files
                if not directory_id or f.directory_id == directory_id
            ]

    def list_shared_files(self, directory_id: Optional[str] = None) -> List[File]:
        with self._lock:
            return [
                f.model_copy()
                for f in self.files
                if f.is_shared and (not directory_id or f.directory_id == directory_id)
            ]

    def get_file(self, file_id: str) -> Result[File]:
        with self._lock:
            record = self._find_file(file_id)
            if record is None:
                return Result.failure(Outcome.NOT_FOUND, "File not found")
            return Result.success(record.model_copy())

    def add_files(self, directory_id: str, new_files: List[File]) -> Result[List[File]]:
        with self._lock:
            if not tree.directory_exists(self.forest, directory_id):
                return Result.failure(Outcome.NOT_FOUND, "Directory not found")
            self.files.extend(new_files)
            logger.info("Added %d files to directory %s", len(new_files), directory_id)
            return self._saved([f.model_copy() for f in new_files], files=True)

    def rename_file(self, file_id: str, name: str) -> Result:
        with self._lock:
            record = self._find_file(file_id)
            if record is None:
                return Result.failure(Outcome.NOT_FOUND, "File not found")
            record.name = name
            return self._saved(files=True)

    def set_file_share(self, file_id: str, is_shared: bool) -> Result:
        with self._lock:
            record = self._find_file(file_id)
            if record is None:
                return Result.failure(Outcome.NOT_FOUND, "File not found")
            record.is_shared = is_shared
            return self._saved(files=True)

    def delete_file(self, file_id: str) -> Result[File]:
        with self._lock:
            record = self._find_file(file_id)
            if record is None:
                return Result.failure(Outcome.NOT_FOUND, "File not found")
            if self.owner_type(record.directory_id) is not DirType.LINK:
                self._delete_bytes(record)
            self.files.remove(record)
            return self._saved(record, files=True)
