"""Tests for the shared-only view of the forest."""

from fileshare.models import Directory
from fileshare.projection import project_shared
from fileshare.tree import walk


def make_dir(dir_id, parent_id="", shared=False, children=None, password=""):
    return Directory(
        id=dir_id,
        name=f"dir-{dir_id}",
        parent_id=parent_id,
        is_shared=shared,
        password=password,
        children=children or [],
    )


def ids(forest):
    return [d.id for d in walk(forest)]


def test_shared_child_keeps_pass_through_root():
    forest = [make_dir("1", children=[make_dir("2", "1", shared=True)])]

    projected = project_shared(forest)

    assert len(projected) == 1
    root = projected[0]
    assert root.id == "1"
    assert root.is_shared is False
    assert [c.id for c in root.children] == ["2"]
    assert root.children[0].is_shared is True


def test_non_shared_branch_without_shared_descendant_is_dropped():
    forest = [
        make_dir("1", children=[make_dir("2", "1"), make_dir("3", "1", children=[make_dir("4", "3")])]),
        make_dir("5"),
    ]
    assert project_shared(forest) == []


def test_sharing_is_not_inherited():
    forest = [make_dir("1", shared=True, children=[make_dir("2", "1"), make_dir("3", "1", shared=True)])]

    projected = project_shared(forest)

    assert ids(projected) == ["1", "3"]


def test_every_shared_node_survives_regardless_of_ancestors():
    forest = [
        make_dir("a", children=[
            make_dir("b", "a", children=[make_dir("c", "b", shared=True)]),
            make_dir("d", "a", shared=True),
        ]),
        make_dir("e", shared=True),
    ]

    projected = project_shared(forest)

    assert ids(projected) == ["a", "b", "c", "d", "e"]
    assert {d.id for d in walk(projected) if d.is_shared} == {"c", "d", "e"}


def test_order_mirrors_input():
    forest = [make_dir("z", shared=True), make_dir("m"), make_dir("a", shared=True)]
    assert [d.id for d in project_shared(forest)] == ["z", "a"]


def test_idempotent():
    forest = [
        make_dir("a", children=[make_dir("b", "a", children=[make_dir("c", "b", shared=True)]), make_dir("x", "a")]),
        make_dir("d", shared=True, password="pw", children=[make_dir("y", "d")]),
    ]
    once = project_shared(forest)
    assert project_shared(once) == once


def test_copy_carries_password_and_is_detached():
    forest = [make_dir("1", shared=True, password="pw", children=[make_dir("2", "1", shared=True)])]

    projected = project_shared(forest)
    forest[0].name = "renamed"
    forest[0].children[0].is_shared = False
    forest[0].children.append(make_dir("3", "1", shared=True))

    assert projected[0].password == "pw"
    assert projected[0].name == "dir-1"
    assert projected[0].children[0].is_shared is True
    assert [c.id for c in projected[0].children] == ["2"]


def test_input_is_not_mutated():
    forest = [make_dir("1", children=[make_dir("2", "1"), make_dir("3", "1", shared=True)])]
    before = [d.model_dump() for d in forest]
    project_shared(forest)
    assert [d.model_dump() for d in forest] == before
