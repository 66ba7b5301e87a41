# Filename: fileshare/tree.py
"""
Search and in-place mutation of the directory forest.

The forest is a list of root directories, each owning its subtree through
``children``. Every lookup walks depth-first in pre-order (a node is checked
before its children) and stops at the first match.
"""
from typing import List, Optional

from .errors import Outcome
from .models import Directory


def find_directory(forest: List[Directory], dir_id: str) -> Optional[Directory]:
    for directory in forest:
        if directory.id == dir_id:
            return directory
        if directory.children:
            found = find_directory(directory.children, dir_id)
            if found is not None:
                return found
    return None


def directory_exists(forest: List[Directory], dir_id: str) -> bool:
    for directory in forest:
        if directory.id == dir_id:
            return True
        if directory.children and directory_exists(directory.children, dir_id):
            return True
    return False


def insert_directory(forest: List[Directory], new_dir: Directory) -> Outcome:
    """Append ``new_dir`` to the roots or to the children of its parent."""
    if not new_dir.parent_id:
        forest.append(new_dir)
        return Outcome.OK
    parent = find_directory(forest, new_dir.parent_id)
    if parent is None:
        return Outcome.PARENT_NOT_FOUND
    parent.children.append(new_dir)
    return Outcome.OK


def rename_directory(forest: List[Directory], dir_id: str, name: str) -> Outcome:
    directory = find_directory(forest, dir_id)
    if directory is None:
        return Outcome.NOT_FOUND
    directory.name = name
    return Outcome.OK


def set_directory_share(forest: List[Directory], dir_id: str, is_shared: bool) -> Outcome:
    # children keep their own flag
    directory = find_directory(forest, dir_id)
    if directory is None:
        return Outcome.NOT_FOUND
    directory.is_shared = is_shared
    return Outcome.OK


def set_directory_password(forest: List[Directory], dir_id: str, password: str) -> Outcome:
    directory = find_directory(forest, dir_id)
    if directory is None:
        return Outcome.NOT_FOUND
    directory.password = password
    return Outcome.OK


def _remove_nested(dirs: List[Directory], dir_id: str) -> Optional[Directory]:
    for directory in dirs:
        if not directory.children:
            continue
        for index, child in enumerate(directory.children):
            if child.id == dir_id:
                return directory.children.pop(index)
        removed = _remove_nested(directory.children, dir_id)
        if removed is not None:
            return removed
    return None


def remove_directory(forest: List[Directory], dir_id: str) -> Optional[Directory]:
    """
    Splice a directory (and its subtree) out of the forest.

    Root entries are checked before nested ones. Returns the removed
    directory, or None when the id is nowhere in the forest.
    """
    for index, directory in enumerate(forest):
        if directory.id == dir_id:
            return forest.pop(index)
    return _remove_nested(forest, dir_id)


def verify_password(forest: List[Directory], dir_id: str, supplied: str) -> Outcome:
    directory = find_directory(forest, dir_id)
    if directory is None:
        return Outcome.NOT_FOUND
    # an unset password is not a challenge
    if directory.password and directory.password != supplied:
        return Outcome.UNAUTHORIZED
    return Outcome.OK


def walk(forest: List[Directory]):
    """Yield every directory of the forest in pre-order."""
    for directory in forest:
        yield directory
        if directory.children:
            yield from walk(directory.children)
