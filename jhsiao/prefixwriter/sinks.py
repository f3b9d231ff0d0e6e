"""Sink adapters.

A sink is anything with `write(data) -> int` and `flush()`.  The
PrefixWriter flushes its sink after every call so in-memory targets
get a no-op flush while external files get a BufferedSink that batches
the many small prefix/segment writes into few calls on the file.

Like io.BufferedIOBase, a failed write raises with the number of
accepted bytes in `characters_written` (see `accepted()`).
"""
__all__ = ['MemorySink', 'ArraySink', 'BufferedSink', 'wrap', 'accepted']
import errno
import io
import sys


def accepted(e):
    """Return the number of bytes accepted before e was raised.

    A BlockingIOError created without a count raises AttributeError on
    access, other errors usually have none at all.  Both mean 0.
    """
    return getattr(e, 'characters_written', 0)


def wouldblock(amt, message='write would block'):
    return BlockingIOError(errno.EAGAIN, message, amt)


class MemorySink(object):
    """Write directly to an in-memory buffer (io.BytesIO)."""
    def __init__(self, f):
        self.f = f
        self.write = f.write

    def flush(self):
        pass


class ArraySink(object):
    """Append to a bytearray."""
    def __init__(self, arr):
        self.f = arr

    def write(self, data):
        self.f.extend(data)
        return len(data)

    def flush(self):
        pass


class BufferedSink(object):
    """Batch writes to a file-like object.

    The wrapped file only needs `write()`.  It may accept fewer bytes
    than given (raw semantics), in which case the remainder is retried.
    A return of None or 0 means the write would block.  `flush()` is
    called on the wrapped file after draining, if it has one.

    Unwritten data is always at self.buf[:self.stop].
    """
    def __init__(self, f, size=0):
        """Initialize a BufferedSink.

        f: the file to wrap.
        size: int, buffer capacity.  <= 0 uses io.DEFAULT_BUFFER_SIZE.
        """
        if size <= 0:
            size = io.DEFAULT_BUFFER_SIZE
        self.f = f
        self.buf = bytearray(size)
        self.view = memoryview(self.buf)
        self.stop = 0

    @property
    def size(self):
        """Buffer capacity."""
        return len(self.buf)

    def __bool__(self):
        """Return whether unflushed data exists."""
        return self.stop > 0

    def _rawwrite(self, view):
        """Single write to the file, retry on EINTR.

        Return number of bytes written, always > 0.
        """
        while 1:
            try:
                amt = self.f.write(view)
            except EnvironmentError as e:
                if e.errno == errno.EINTR:
                    continue
                raise
            if amt:
                return amt
            raise wouldblock(0)

    def _drain(self):
        """Write all buffered bytes to the file.

        On failure, the unwritten tail is moved to the front.
        """
        start = 0
        try:
            while start < self.stop:
                try:
                    start += self._rawwrite(self.view[start:self.stop])
                except Exception as e:
                    start += accepted(e)
                    raise
        finally:
            if start:
                trail = self.view[start:self.stop]
                self.stop -= start
                self.view[:self.stop] = trail

    def write(self, data):
        """Buffer data, draining to the file as needed.

        Return the number of bytes accepted (all of them).  On error,
        the number accepted is in the exception's characters_written.
        """
        view = memoryview(data).cast('B')
        total = 0
        try:
            while len(view) > len(self.buf) - self.stop:
                if self.stop:
                    amt = len(self.buf) - self.stop
                    self.view[self.stop:] = view[:amt]
                    self.stop += amt
                    total += amt
                    view = view[amt:]
                    self._drain()
                else:
                    # Empty buffer, skip the copy.
                    try:
                        amt = self._rawwrite(view)
                    except Exception as e:
                        total += accepted(e)
                        raise
                    total += amt
                    view = view[amt:]
        except Exception as e:
            e.characters_written = total
            raise
        amt = len(view)
        self.view[self.stop:self.stop+amt] = view
        self.stop += amt
        return total + amt

    def flush(self):
        """Drain the buffer and flush the wrapped file."""
        self._drain()
        flush = getattr(self.f, 'flush', None)
        if flush is not None:
            flush()


def wrap(f, size=0, verbose=False):
    """Return a sink for f.

    f: io.BytesIO, bytearray, BufferedSink, binary or text file.
    size: int, minimum buffer size if buffering is needed.
        <= 0 uses io.DEFAULT_BUFFER_SIZE.
    verbose: bool, print a warning when unwrapping text streams.
    """
    if isinstance(f, io.BytesIO):
        return MemorySink(f)
    if isinstance(f, bytearray):
        return ArraySink(f)
    if isinstance(f, BufferedSink):
        if f.size >= (size if size > 0 else io.DEFAULT_BUFFER_SIZE):
            return f
    elif isinstance(f, io.TextIOBase):
        binary = getattr(f, 'buffer', None)
        if binary is None:
            raise TypeError(
                'text stream {!r} has no binary buffer'.format(f))
        if verbose:
            print(
                'WARNING: writing bytes to buffer of text stream',
                getattr(f, 'name', repr(f)), file=sys.stderr)
        f.flush()
        f = binary
    if not callable(getattr(f, 'write', None)):
        raise TypeError('{!r} has no write method'.format(f))
    return BufferedSink(f, size)
