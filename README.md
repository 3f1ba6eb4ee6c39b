# iavlkit

Building blocks for a versioned, snapshot-friendly AVL+ key-value store.

## What is in the package

- `iavlkit.encoding` – unsigned and zig-zag varints and varint
  length-prefixed byte strings (`encode_uvarint`, `encode_varint`,
  `encode_bytes`, `encode_32bytes_hash`, the matching `decode_*` functions
  and `encode_*_size` helpers). Malformed input raises `DecodeError`, whose
  `consumed` attribute tells how many bytes were read.
- `iavlkit.fastnode` – `FastNode`, a key with its latest value and the
  version it was last updated at, with `to_bytes`, `deserialize` and
  `encoded_size`.
- `iavlkit.cache` – `LRUCache`, a least-recently-used cache of objects
  with a `key` attribute, bounded by a number of entries.
- `iavlkit.db.types` – the store errors (`DBError`, `KeyEmptyError`,
  `ValueNilError`, `BatchClosedError`, `InvalidIteratorError`) and the
  abstract `Iterator` and `Batch` bases.
- `iavlkit.db.memdb` – `MemDB`, an ordered in-memory store with forward and
  reverse range iterators and write batches.
- `iavlkit.db.prefixdb` – `PrefixDB`, a namespace under a key prefix of
  another store, and `iterate_prefix` for scanning a prefix.
- `iavlkit.batch` – `BatchWithFlusher`, a batch that writes itself out
  whenever the next entry would take it past a size threshold.
- `iavlkit.export` – `ExportNode`, the record of one exported tree node,
  and the `ExportDone` and `NotInitializedTreeError` exceptions.
- `iavlkit.compress` – `CompressExporter` and `CompressImporter`, plus
  `delta_encode`, `delta_decode` and `diff_offset`.
- `iavlkit.hexbytes` – `HexBytes`, bytes that print and JSON-encode as
  upper-case hex, and `cp_incr`, which increments a byte string as a
  big-endian number.
- `iavlkit.color` – `green`, `blue`, `cyan` and `colored_bytes` for ANSI
  coloured output.
- `iavlkit.rand` – `Rand`, a seedable, thread-safe pseudo-random generator,
  and module-level helpers (`seed`, `rand_str`, `rand_int`, `rand_int31`,
  `rand_bytes`, `rand_perm`) backed by a shared instance.
- `iavlkit.viewer` – `encode_data`, `parse_weave_key`, `node_encoder` and
  `print_db_stats` for rendering stored keys and values as readable text.

## Storing data

```python
from iavlkit.db.memdb import MemDB
from iavlkit.db.prefixdb import PrefixDB

db = MemDB()
db.set(b"alice", b"abc")
db.get(b"alice")        # b"abc"
db.has(b"bob")          # False

accounts = PrefixDB(db, b"acc/")
accounts.set(b"bob", b"xyz")
db.get(b"acc/bob")      # b"xyz"
```

Empty keys raise `KeyEmptyError`, a value of `None` raises
`ValueNilError`, and a batch used after it was written or closed raises
`BatchClosedError`.

Iterators cover the half-open range `[start, end)`; `None` leaves a side
open. They can be driven by hand, or used as context managers and Python
iterators of `(key, value)` pairs:

```python
it = db.iterator(None, None)
while it.valid():
    print(it.key(), it.value())
    it.next()
it.close()

with db.reverse_iterator(b"a", b"b") as it:
    for key, value in it:
        print(key, value)
```

A `MemDB` iterator works on a snapshot of the range taken when it was
created.

## Batched writes

```python
from iavlkit.batch import BatchWithFlusher

batch = BatchWithFlusher(db, 100_000)
for n in range(1000):
    batch.set(n.to_bytes(2, "big"), bytes(10_000))
batch.write()
```

Before each `set` or `delete`, the batch estimates its size with the new
entry (plus a fixed overhead of 100 bytes); if that exceeds the threshold,
the pending entries are written to the store and a fresh batch is started.

## Encoding

```python
from iavlkit.encoding import encode_varint, decode_varint, encode_bytes, decode_bytes

data = encode_varint(-100)
value, read = decode_varint(data)             # -100 and the bytes read
payload, read = decode_bytes(encode_bytes(b"hi"))   # b"hi", 3
```

## Caching

```python
from iavlkit.cache import LRUCache
from iavlkit.fastnode import FastNode

cache = LRUCache(2)
cache.add(FastNode(b"k1", 1, b"v1"))
cache.add(FastNode(b"k2", 1, b"v2"))
evicted = cache.add(FastNode(b"k3", 2, b"v3"))   # the node for b"k1"
len(cache)                                        # 2
```

`add` returns the node it replaced under the same key, or the node it
evicted, or `None`.

## Compressed export streams

`CompressExporter` wraps any object whose `next()` returns `ExportNode`s
in depth-first post-order and raises `ExportDone` at the end. It drops
branch keys, delta-encodes leaf keys against the previous leaf and stores
branch versions relative to the larger of their children's versions; it
can also be iterated directly. `CompressImporter` wraps any object with an
`add(node)` method and restores the original keys and versions before
passing each node on.

## What the package does not do

The package holds the parts around a versioned tree, not the tree itself.
There is no mutable or immutable AVL+ tree, no versions to save, load or
delete, no hashing or proofs, and nothing that produces or consumes an
export stream other than the compression wrappers. Storage is in memory
only: there is no on-disk database backend. There is no command-line tool;
`iavlkit.viewer` offers the rendering helpers only.