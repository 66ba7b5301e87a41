"""Tests for forest search and in-place mutation."""

from fileshare.errors import Outcome
from fileshare.models import Directory
from fileshare import tree


def make_dir(dir_id, parent_id="", children=None, **kwargs):
    return Directory(id=dir_id, name=f"dir-{dir_id}", parent_id=parent_id, children=children or [], **kwargs)


def sample_forest():
    return [
        make_dir("1", children=[
            make_dir("2", "1", children=[make_dir("4", "2")]),
            make_dir("3", "1"),
        ]),
        make_dir("5"),
    ]


class TestFind:
    def test_finds_root_and_nested(self):
        forest = sample_forest()
        assert tree.find_directory(forest, "1").name == "dir-1"
        assert tree.find_directory(forest, "4").parent_id == "2"
        assert tree.find_directory(forest, "5") is forest[1]

    def test_missing_returns_none(self):
        assert tree.find_directory(sample_forest(), "nope") is None
        assert tree.find_directory([], "1") is None

    def test_returns_live_reference(self):
        forest = sample_forest()
        tree.find_directory(forest, "3").name = "changed"
        assert forest[0].children[1].name == "changed"

    def test_pre_order_first_match_wins(self):
        forest = [make_dir("1", children=[Directory(id="x", name="nested")]), Directory(id="x", name="root")]
        assert tree.find_directory(forest, "x").name == "nested"

    def test_exists(self):
        forest = sample_forest()
        assert tree.directory_exists(forest, "4") is True
        assert tree.directory_exists(forest, "5") is True
        assert tree.directory_exists(forest, "9") is False

    def test_walk_is_pre_order(self):
        assert [d.id for d in tree.walk(sample_forest())] == ["1", "2", "4", "3", "5"]


class TestInsert:
    def test_root_insert_appends(self):
        forest = sample_forest()
        assert tree.insert_directory(forest, make_dir("6")) is Outcome.OK
        assert forest[-1].id == "6"

    def test_nested_insert_under_parent(self):
        forest = sample_forest()
        assert tree.insert_directory(forest, make_dir("7", "4")) is Outcome.OK
        found = tree.find_directory(forest, "7")
        assert found.parent_id == "4"
        assert tree.find_directory(forest, "4").children == [found]

    def test_missing_parent_changes_nothing(self):
        forest = sample_forest()
        before = [d.model_dump() for d in forest]
        assert tree.insert_directory(forest, make_dir("8", "ghost")) is Outcome.PARENT_NOT_FOUND
        assert [d.model_dump() for d in forest] == before
        assert not tree.directory_exists(forest, "8")


class TestUpdates:
    def test_rename(self):
        forest = sample_forest()
        assert tree.rename_directory(forest, "4", "deep") is Outcome.OK
        assert tree.find_directory(forest, "4").name == "deep"

    def test_share_does_not_cascade(self):
        forest = sample_forest()
        assert tree.set_directory_share(forest, "1", True) is Outcome.OK
        assert forest[0].is_shared is True
        assert all(not c.is_shared for c in forest[0].children)

    def test_password_does_not_cascade(self):
        forest = sample_forest()
        assert tree.set_directory_password(forest, "2", "secret") is Outcome.OK
        assert tree.find_directory(forest, "2").password == "secret"
        assert tree.find_directory(forest, "4").password == ""

    def test_unknown_id_not_found_and_untouched(self):
        forest = sample_forest()
        before = [d.model_dump() for d in forest]
        assert tree.rename_directory(forest, "ghost", "x") is Outcome.NOT_FOUND
        assert tree.set_directory_share(forest, "ghost", True) is Outcome.NOT_FOUND
        assert tree.set_directory_password(forest, "ghost", "pw") is Outcome.NOT_FOUND
        assert [d.model_dump() for d in forest] == before


class TestRemove:
    def test_remove_root(self):
        forest = sample_forest()
        removed = tree.remove_directory(forest, "5")
        assert removed.id == "5"
        assert [d.id for d in forest] == ["1"]

    def test_remove_nested_takes_subtree(self):
        forest = sample_forest()
        removed = tree.remove_directory(forest, "2")
        assert removed.id == "2"
        assert [c.id for c in forest[0].children] == ["3"]
        assert not tree.directory_exists(forest, "4")

    def test_remove_missing(self):
        forest = sample_forest()
        assert tree.remove_directory(forest, "ghost") is None
        assert len(list(tree.walk(forest))) == 5

    def test_root_removal_has_precedence(self):
        forest = [make_dir("1", children=[Directory(id="x", name="nested")]), Directory(id="x", name="root")]
        removed = tree.remove_directory(forest, "x")
        assert removed.name == "root"
        assert [c.id for c in forest[0].children] == ["x"]


class TestVerify:
    def test_empty_password_accepts_anything(self):
        forest = [make_dir("1")]
        assert tree.verify_password(forest, "1", "") is Outcome.OK
        assert tree.verify_password(forest, "1", "whatever") is Outcome.OK

    def test_password_requires_exact_match(self):
        forest = [make_dir("1", password="x")]
        assert tree.verify_password(forest, "1", "x") is Outcome.OK
        assert tree.verify_password(forest, "1", "") is Outcome.UNAUTHORIZED
        assert tree.verify_password(forest, "1", "y") is Outcome.UNAUTHORIZED

    def test_missing_directory(self):
        assert tree.verify_password([], "1", "x") is Outcome.NOT_FOUND
