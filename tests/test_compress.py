import pytest

from iavlkit.compress import (
    CompressExporter,
    CompressImporter,
    delta_decode,
    delta_encode,
    diff_offset,
)
from iavlkit.encoding import DecodeError
from iavlkit.export import ExportDone, ExportNode

BASIC_EXPORT = [
    ExportNode(key=b"a", value=bytes([1]), version=1, height=0),
    ExportNode(key=b"abc", value=bytes([6]), version=3, height=0),
    ExportNode(key=b"abc", value=None, version=3, height=1),
    ExportNode(key=b"b", value=bytes([2]), version=3, height=0),
    ExportNode(key=b"c", value=bytes([3]), version=3, height=0),
    ExportNode(key=b"c", value=None, version=3, height=1),
    ExportNode(key=b"b", value=None, version=3, height=2),
    ExportNode(key=b"d", value=bytes([4]), version=2, height=0),
    ExportNode(key=b"e", value=bytes([5]), version=3, height=0),
    ExportNode(key=b"e", value=None, version=3, height=1),
    ExportNode(key=b"d", value=None, version=3, height=3),
]

COMPRESSED_EXPORT = [
    ExportNode(key=bytes([0, ord("a")]), value=bytes([1]), version=1, height=0),
    ExportNode(key=bytes([1, ord("b"), ord("c")]), value=bytes([6]), version=3, height=0),
    ExportNode(key=None, value=None, version=0, height=1),
    ExportNode(key=bytes([0, ord("b")]), value=bytes([2]), version=3, height=0),
    ExportNode(key=bytes([0, ord("c")]), value=bytes([3]), version=3, height=0),
    ExportNode(key=None, value=None, version=0, height=1),
    ExportNode(key=None, value=None, version=0, height=2),
    ExportNode(key=bytes([0, ord("d")]), value=bytes([4]), version=2, height=0),
    ExportNode(key=bytes([0, ord("e")]), value=bytes([5]), version=3, height=0),
    ExportNode(key=None, value=None, version=0, height=1),
    ExportNode(key=None, value=None, version=0, height=3),
]


class _ListExporter:
    def __init__(self, nodes):
        self._nodes = list(nodes)
        self._index = 0

    def next(self):
        if self._index >= len(self._nodes):
            raise ExportDone()
        node = self._nodes[self._index]
        self._index += 1
        return node


class _CollectingImporter:
    def __init__(self):
        self.nodes = []

    def add(self, node):
        self.nodes.append(node)


def _drain(exporter):
    out = []
    while True:
        try:
            out.append(exporter.next())
        except ExportDone:
            return out


def test_exporter_compress():
    exporter = CompressExporter(_ListExporter(BASIC_EXPORT))
    assert _drain(exporter) == COMPRESSED_EXPORT


def test_exporter_compress_does_not_mutate_input():
    nodes = [ExportNode(n.key, n.value, n.version, n.height) for n in BASIC_EXPORT]
    _drain(CompressExporter(_ListExporter(nodes)))
    assert nodes == BASIC_EXPORT


def test_exporter_compress_python_iteration():
    assert list(CompressExporter(_ListExporter(BASIC_EXPORT))) == COMPRESSED_EXPORT


def test_exporter_raises_done_after_end():
    exporter = CompressExporter(_ListExporter([]))
    with pytest.raises(ExportDone):
        exporter.next()


def test_importer_decompresses():
    sink = _CollectingImporter()
    importer = CompressImporter(sink)
    for node in COMPRESSED_EXPORT:
        importer.add(node)
    assert sink.nodes == BASIC_EXPORT


def test_round_trip():
    sink = _CollectingImporter()
    importer = CompressImporter(sink)
    for node in CompressExporter(_ListExporter(BASIC_EXPORT)):
        importer.add(node)
    assert sink.nodes == BASIC_EXPORT


def test_importer_rejects_branch_without_children():
    importer = CompressImporter(_CollectingImporter())
    with pytest.raises(ValueError):
        importer.add(ExportNode(key=None, value=None, version=0, height=1))


def test_importer_rejects_bad_varint():
    importer = CompressImporter(_CollectingImporter())
    with pytest.raises(DecodeError):
        importer.add(ExportNode(key=b"\xff", value=b"v", version=1, height=0))


def test_delta_encode_values():
    assert delta_encode(b"a", None) == bytes([0, ord("a")])
    assert delta_encode(b"abc", b"a") == bytes([1, ord("b"), ord("c")])
    assert delta_encode(b"b", b"abc") == bytes([0, ord("b")])


@pytest.mark.parametrize(
    "key,last",
    [(b"a", b""), (b"abc", b"a"), (b"ab", b"abc"), (b"xyz", b"xyz"), (b"q", b"abc")],
)
def test_delta_round_trip(key, last):
    assert delta_decode(delta_encode(key, last), last) == key


def test_delta_decode_errors():
    with pytest.raises(DecodeError):
        delta_decode(b"", b"abc")
    with pytest.raises(DecodeError):
        delta_decode(bytes([5, ord("x")]), b"ab")


def test_diff_offset():
    assert diff_offset(b"abc", b"abd") == 2
    assert diff_offset(b"", b"abc") == 0
    assert diff_offset(b"abc", b"abc") == 3
    assert diff_offset(b"ab", b"abc") == 2