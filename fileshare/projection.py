# Filename: fileshare/projection.py
from typing import List

from .models import Directory


def _shallow_copy(directory: Directory, children: List[Directory]) -> Directory:
    return Directory(
        id=directory.id,
        name=directory.name,
        parent_id=directory.parent_id,
        is_shared=directory.is_shared,
        password=directory.password,
        dir_type=directory.dir_type,
        children=children,
    )


def project_shared(forest: List[Directory]) -> List[Directory]:
    """
    Pruned copy of the forest holding only what a share viewer may see.

    A directory survives if it is shared itself, or if something below it is
    shared; in the second case it is kept as a pass-through ancestor with its
    own ``is_shared`` left false. Sharing is not inherited: children of a
    shared directory are judged one by one. The input is never modified and
    the result owns fresh objects and lists.
    """
    result: List[Directory] = []
    for directory in forest:
        shared_children = project_shared(directory.children) if directory.children else []
        if directory.is_shared or shared_children:
            result.append(_shallow_copy(directory, shared_children))
    return result
