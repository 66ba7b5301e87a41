# Filename: fileshare/cascade.py
"""
Removal of the file records that belong to a directory being deleted.

A directory's descendants are found through two signals at once: the
``parent_id`` field of every directory in the forest, and the physical
nesting under ``children``. Either one is enough to pull a directory (and
its files) into the cascade, so a forest where the two disagree still loses
no files.
"""
from collections import defaultdict
from typing import Dict, List

from .models import Directory, File
from .tree import walk


def descendant_ids(forest: List[Directory], dir_id: str) -> List[str]:
    by_parent_field: Dict[str, List[Directory]] = defaultdict(list)
    by_id: Dict[str, List[Directory]] = defaultdict(list)
    for directory in walk(forest):
        by_parent_field[directory.parent_id].append(directory)
        by_id[directory.id].append(directory)

    result: List[str] = []
    seen = {dir_id}
    pending = [dir_id]
    while pending:
        current = pending.pop(0)
        candidates = list(by_parent_field.get(current, []))
        for holder in by_id.get(current, []):
            candidates.extend(holder.children)
        for candidate in candidates:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            result.append(candidate.id)
            pending.append(candidate.id)
    return result


def delete_files_under(forest: List[Directory], files: List[File], dir_id: str) -> List[File]:
    """
    Drop every file owned by ``dir_id`` or one of its descendants.

    ``files`` is edited in place; the forest is only read. Must run while the
    directory is still part of the forest, otherwise its descendants cannot
    be found. Returns the removed records, direct files first.
    """
    removed: List[File] = []

    kept = []
    for record in files:
        (removed if record.directory_id == dir_id else kept).append(record)

    descendants = set(descendant_ids(forest, dir_id))
    if descendants:
        remaining = []
        for record in kept:
            (removed if record.directory_id in descendants else remaining).append(record)
        kept = remaining

    files[:] = kept
    return removed
