"""Building blocks for a versioned AVL+ key-value store: encodings, fast nodes,
an LRU cache, key-value stores, batching and export stream compression."""

__version__ = "0.1.0"