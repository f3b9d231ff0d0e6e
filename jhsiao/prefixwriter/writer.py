"""Prefix every line written to a byte stream."""
__all__ = ['PrefixWriter']
import io
import sys

from .sinks import accepted, wouldblock, wrap


class PrefixWriter(io.BufferedIOBase):
    """Insert a prefix before every line, including empty ones.

    Lines end at b'\\n'.  Content and terminators are unchanged and the
    prefix itself is never scanned.  A trailing terminator does not get
    a prefix until the next write has something to put after it, so
    the output of several writes is the same as the output of one
    write of the concatenated data.

    The sink is flushed after every write.  Closing or detaching the
    PrefixWriter does not close the sink.
    """
    def __init__(self, f, prefix, size=0, verbose=False):
        """Initialize a PrefixWriter.

        f: the destination.  io.BytesIO and bytearray are written
            directly.  Anything else is wrapped in a BufferedSink
            unless it already is one with at least `size` capacity.
        prefix: bytes-like, copied.
        size: int, minimum buffer size.  <= 0 uses the default.
        verbose: bool, print sink failures to stderr.
        """
        super(PrefixWriter, self).__init__()
        self.f = None
        self.prefix = bytes(memoryview(prefix))
        self.f = wrap(f, size, verbose)
        self.raw = f
        self.verbose = verbose
        self.head = True
        # Bytes of the current line's prefix already written.
        self.hpos = 0
        self._written = 0

    @property
    def written(self):
        """Total bytes accepted by the sink, prefixes included."""
        return self._written

    def writable(self):
        return True

    def _put(self, view):
        """Write view to the sink.

        Accepted bytes are counted even if the write fails.  A short
        write raises BlockingIOError.
        """
        try:
            amt = self.f.write(view)
        except Exception as e:
            self._written += accepted(e)
            raise
        amt = amt or 0
        self._written += amt
        if amt < len(view):
            raise wouldblock(amt, 'short write')

    def _putprefix(self):
        if self.hpos < len(self.prefix):
            try:
                self._put(memoryview(self.prefix)[self.hpos:])
            except Exception as e:
                self.hpos += accepted(e)
                raise
        self.hpos = 0
        self.head = False

    def write(self, data):
        """Write data, prefixing each line.

        Return len(data).  Prefix bytes are not included in the count,
        see `written` for those.

        On failure, the original exception propagates with the number
        of bytes of data that reached the sink in its
        characters_written.  Writing data[characters_written:] later
        continues the output correctly.
        """
        if self.closed:
            raise ValueError('write to closed file')
        view = memoryview(data).cast('B')
        size = len(view)
        if not size:
            return 0
        if not isinstance(data, (bytes, bytearray)):
            data = view.tobytes()
        pos = 0
        try:
            while pos < size:
                if self.head:
                    self._putprefix()
                nl = data.find(b'\n', pos)
                stop = size if nl < 0 else nl + 1
                try:
                    self._put(view[pos:stop])
                except Exception as e:
                    pos += accepted(e)
                    # The terminator may land before the sink fails.
                    if pos == stop and nl >= 0:
                        self.head = True
                    raise
                pos = stop
                self.head = nl >= 0
            self.f.flush()
        except Exception as e:
            e.characters_written = pos
            if self.verbose:
                if isinstance(e, BlockingIOError):
                    state = 'blocked'
                else:
                    state = 'failed'
                print(
                    'PrefixWriter: sink', state,
                    'after {}/{} bytes ({} written): {!r}'.format(
                        pos, size, self._written, e),
                    file=sys.stderr)
            raise
        return size

    def flush(self):
        if self.closed:
            raise ValueError('flush of closed file')
        if self.f is not None:
            self.f.flush()

    def detach(self):
        """Flush, close, and return the wrapped destination.

        The destination itself stays open.
        """
        if self.f is None:
            raise ValueError('raw stream already detached')
        self.flush()
        ret = self.raw
        self.f = self.raw = None
        super(PrefixWriter, self).close()
        return ret
