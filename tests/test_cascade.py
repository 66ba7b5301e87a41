"""Tests for cascading removal of file records."""

from fileshare.cascade import delete_files_under, descendant_ids
from fileshare.models import Directory, File


def make_dir(dir_id, parent_id="", children=None):
    return Directory(id=dir_id, name=dir_id, parent_id=parent_id, children=children or [])


def make_file(file_id, directory_id):
    return File(id=file_id, name=f"{file_id}.txt", path=f"/store/{file_id}.txt", size=1, type="txt", directory_id=directory_id)


def chain_forest():
    # root -> A -> B, plus an unrelated sibling C
    return [
        make_dir("root", children=[
            make_dir("A", "root", children=[make_dir("B", "A")]),
            make_dir("C", "root"),
        ])
    ]


def test_descendants_of_nested_directory():
    assert descendant_ids(chain_forest(), "A") == ["B"]


def test_descendants_of_root_are_transitive():
    assert set(descendant_ids(chain_forest(), "root")) == {"A", "B", "C"}


def test_leaf_has_no_descendants():
    assert descendant_ids(chain_forest(), "B") == []
    assert descendant_ids(chain_forest(), "ghost") == []


def test_flat_parent_links_are_followed():
    # children stored flat at the root with only parent_id pointing upward
    forest = [make_dir("A"), make_dir("B", "A"), make_dir("D", "B")]
    assert descendant_ids(forest, "A") == ["B", "D"]


def test_structural_nesting_wins_over_stale_parent_id():
    # B sits inside A but its parent_id field says otherwise
    forest = [make_dir("A", children=[make_dir("B", "elsewhere", children=[make_dir("E", "B")])])]
    assert descendant_ids(forest, "A") == ["B", "E"]


def test_delete_files_under_removes_direct_and_descendant_files():
    forest = chain_forest()
    files = [make_file("fa", "A"), make_file("fb", "B"), make_file("fc", "C"), make_file("fr", "root")]

    removed = delete_files_under(forest, files, "A")

    assert [f.id for f in removed] == ["fa", "fb"]
    assert [f.id for f in files] == ["fc", "fr"]


def test_delete_files_under_keeps_forest_intact():
    forest = chain_forest()
    before = [d.model_dump() for d in forest]
    delete_files_under(forest, [make_file("fa", "A")], "A")
    assert [d.model_dump() for d in forest] == before


def test_delete_files_under_edits_list_in_place():
    files = [make_file("fb", "B")]
    alias = files
    delete_files_under(chain_forest(), files, "root")
    assert alias == []


def test_delete_files_under_nothing_to_remove():
    files = [make_file("fc", "C")]
    assert delete_files_under(chain_forest(), files, "B") == []
    assert [f.id for f in files] == ["fc"]
