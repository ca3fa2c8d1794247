import pytest
from memns import (
    CollisionPolicy,
    MNSAlreadyDeletedError,
    MNSAlreadyExistsError,
    MNSCannotDeleteRootError,
    MNSDestroyedError,
    MNSInvalidNameError,
    MNSNotADirectoryError,
    MNSNotFoundError,
    MNSTypeMismatchError,
    MNSUnsupportedOperationError,
)
from memns._node import ROOT_ID, NodeTree
from memns._ops import create_entry, delete_node, move_leaf
from memns._resolver import PathResolver


@pytest.fixture
def tree():
    return NodeTree()


def _id(tree, path):
    return PathResolver(tree).resolve(path)


def _leaf(tree, parent, name, text=""):
    nid = create_entry(tree, parent, name, is_dir=False)
    if text:
        tree.get_leaf(nid).content.append(text)
    return nid


# ------------------------------------------------------------------
# move_leaf()
# ------------------------------------------------------------------


def test_same_directory_rename(tree):
    f = _leaf(tree, ROOT_ID, "f", "data")
    assert move_leaf(tree, f, "g") is True
    assert tree.children(ROOT_ID) == {"g": f}
    assert tree.name(f) == "g"


def test_move_into_other_directory(tree):
    d = create_entry(tree, ROOT_ID, "d", is_dir=True)
    f = _leaf(tree, ROOT_ID, "f")
    assert move_leaf(tree, f, "/d/f2")
    assert tree.parent(f) == d
    assert tree.full_path(f) == "/d/f2"
    assert "f" not in tree.children(ROOT_ID)


def test_relative_destination_resolves_from_leaf_parent(tree):
    a = create_entry(tree, ROOT_ID, "a", is_dir=True)
    sub = create_entry(tree, a, "sub", is_dir=True)
    f = _leaf(tree, a, "f")
    move_leaf(tree, f, "sub/g")
    assert tree.parent(f) == sub


def test_move_to_root_with_leading_delimiter(tree):
    a = create_entry(tree, ROOT_ID, "a", is_dir=True)
    f = _leaf(tree, a, "f")
    move_leaf(tree, f, "/f")
    assert tree.parent(f) == ROOT_ID


def test_move_missing_destination_directory_raises(tree):
    f = _leaf(tree, ROOT_ID, "f")
    with pytest.raises(MNSNotFoundError):
        move_leaf(tree, f, "/nope/f")
    assert tree.full_path(f) == "/f"


def test_move_auto_creates_destination(tree):
    f = _leaf(tree, ROOT_ID, "f")
    move_leaf(tree, f, "/x/y/f", auto_create=True)
    assert tree.full_path(f) == "/x/y/f"
    assert tree.is_dir(_id(tree, "/x/y"))


def test_move_destination_through_leaf_raises(tree):
    f = _leaf(tree, ROOT_ID, "f")
    _leaf(tree, ROOT_ID, "other")
    with pytest.raises(MNSNotADirectoryError):
        move_leaf(tree, f, "/other/f")
    assert tree.full_path(f) == "/f"


def test_move_invalid_name_leaves_node_intact(tree):
    f = _leaf(tree, ROOT_ID, "f")
    for bad in ("..", ".", "dir/"):
        with pytest.raises(MNSInvalidNameError):
            move_leaf(tree, f, bad)
    assert tree.name(f) == "f"
    assert tree.children(ROOT_ID) == {"f": f}


def test_move_directory_unsupported(tree):
    d = create_entry(tree, ROOT_ID, "d", is_dir=True)
    with pytest.raises(MNSUnsupportedOperationError):
        move_leaf(tree, d, "e")
    assert tree.name(d) == "d"


def test_move_onto_itself_is_noop(tree):
    f = _leaf(tree, ROOT_ID, "f")
    assert move_leaf(tree, f, "/f", policy=CollisionPolicy.ABORT) is True
    assert tree.children(ROOT_ID) == {"f": f}


def test_replace_overwrites_leaf(tree):
    f = _leaf(tree, ROOT_ID, "f", "new")
    g = _leaf(tree, ROOT_ID, "g", "old")
    assert move_leaf(tree, f, "g", policy=CollisionPolicy.REPLACE)
    assert tree.children(ROOT_ID) == {"g": f}
    assert tree.is_tombstone(g)
    assert tree.get_leaf(f).content.read() == "new"


def test_replace_onto_directory_raises_type_mismatch(tree):
    f = _leaf(tree, ROOT_ID, "f")
    d = create_entry(tree, ROOT_ID, "d", is_dir=True)
    with pytest.raises(MNSTypeMismatchError):
        move_leaf(tree, f, "d", policy=CollisionPolicy.REPLACE)
    assert tree.children(ROOT_ID) == {"f": f, "d": d}
    assert tree.name(f) == "f"


def test_abort_raises_and_changes_nothing(tree):
    f = _leaf(tree, ROOT_ID, "f", "1")
    g = _leaf(tree, ROOT_ID, "g", "2")
    with pytest.raises(MNSAlreadyExistsError):
        move_leaf(tree, f, "g", policy=CollisionPolicy.ABORT)
    assert tree.children(ROOT_ID) == {"f": f, "g": g}
    assert tree.get_leaf(g).content.read() == "2"


def test_keep_previous_returns_false_and_reverts(tree):
    d = create_entry(tree, ROOT_ID, "d", is_dir=True)
    f = _leaf(tree, ROOT_ID, "f", "mine")
    g = _leaf(tree, d, "f", "theirs")
    assert move_leaf(tree, f, "/d/f", policy=CollisionPolicy.KEEP_PREVIOUS) is False
    assert tree.name(f) == "f"
    assert tree.parent(f) == ROOT_ID
    assert tree.children(ROOT_ID)["f"] == f
    assert tree.children(d) == {"f": g}


def test_policy_accepts_string_value(tree):
    f = _leaf(tree, ROOT_ID, "f")
    _leaf(tree, ROOT_ID, "g")
    with pytest.raises(MNSAlreadyExistsError):
        move_leaf(tree, f, "g", policy="abort")


# ------------------------------------------------------------------
# delete_node()
# ------------------------------------------------------------------


def test_delete_root_raises(tree):
    with pytest.raises(MNSCannotDeleteRootError):
        delete_node(tree, ROOT_ID)
    assert tree.is_live(ROOT_ID)


def test_delete_leaf_tombstones(tree):
    f = _leaf(tree, ROOT_ID, "f", "content")
    assert delete_node(tree, f) is True
    assert tree.children(ROOT_ID) == {}
    with pytest.raises(MNSDestroyedError):
        tree.name(f)


def test_delete_twice_raises_already_deleted(tree):
    f = _leaf(tree, ROOT_ID, "f")
    delete_node(tree, f)
    with pytest.raises(MNSAlreadyDeletedError):
        delete_node(tree, f)


def test_delete_directory_cascades(tree):
    a = create_entry(tree, ROOT_ID, "a", is_dir=True)
    b = create_entry(tree, a, "b", is_dir=True)
    c = create_entry(tree, b, "c", is_dir=True)
    f = _leaf(tree, b, "f", "x")
    delete_node(tree, a)
    for nid in (a, b, c, f):
        assert tree.is_tombstone(nid)
    assert tree.node_count() == 1
    assert tree.children(ROOT_ID) == {}
