import dataclasses

from iavlkit.export import ExportDone, ExportNode, NotInitializedTreeError


def test_leaf_and_branch():
    leaf = ExportNode(key=b"a", value=b"\x01", version=1, height=0)
    branch = ExportNode(key=b"b", value=None, version=3, height=2)
    assert leaf.is_leaf is True
    assert branch.is_leaf is False


def test_defaults():
    node = ExportNode()
    assert (node.key, node.value, node.version, node.height) == (None, None, 0, 0)


def test_equality_by_fields():
    a = ExportNode(key=b"abc", value=b"\x06", version=3, height=0)
    b = ExportNode(key=b"abc", value=b"\x06", version=3, height=0)
    assert a == b
    assert (a == dataclasses.replace(b, version=2)) is False


def test_fields_are_mutable():
    node = ExportNode(key=b"d", value=None, version=3, height=3)
    node.key = None
    node.version -= 3
    assert node == ExportNode(key=None, value=None, version=0, height=3)


def test_export_done_message():
    err = ExportDone()
    assert str(err) == "export is complete"


def test_not_initialized_message():
    err = NotInitializedTreeError()
    assert str(err) == "iavl/export newExporter failed to create"