"""Key-value stores: an in-memory store, a prefixed namespace store, and
their shared errors and iterator and batch interfaces."""