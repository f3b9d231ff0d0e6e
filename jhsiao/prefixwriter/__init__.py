"""Prefix every line written to a byte stream.

PrefixWriter wraps a destination and writes a fixed prefix before
every line, including empty ones.  It works on bytes only and keeps no
more than one buffer's worth of data in memory.

    >>> import io
    >>> buf = io.BytesIO()
    >>> w = PrefixWriter(buf, b'001> ')
    >>> w.write(b'hello\\nworld\\n')
    12
    >>> buf.getvalue()
    b'001> hello\\n001> world\\n'

Destinations that are not in-memory buffers get a BufferedSink so the
many small writes become few calls on the file.  The PrefixWriter is
flushed at the end of every write so nothing is left in its buffer.

Errors from the destination propagate unchanged, with the number of
input bytes consumed attached as `characters_written` the same way
io.BufferedIOBase reports partial writes.
"""
__all__ = [
    'PrefixWriter',
    'BufferedSink',
    'MemorySink',
    'ArraySink',
    'wrap',
]
from .writer import PrefixWriter
from .sinks import ArraySink, BufferedSink, MemorySink, wrap
