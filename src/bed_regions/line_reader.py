"""Line-by-line reading of binary streams with a reused line buffer."""

import errno

from typing import BinaryIO

from .errors import NoCurrentLineError

DEFAULT_CHUNK_SIZE = 64 * 1024


class LineByLineReader:
    """Reads a binary stream one line at a time.

    After construction the reader holds no line. Each successful call to `read_next_line`
    loads the next line, terminator included, into an internal buffer that is reused
    across calls. The view returned by `current_line` is only valid until the next call
    to `read_next_line`; copy it (e.g. `bytes(view)`) to keep it longer.

    !!! info

        The buffer never shrinks. When a longer line arrives it is reallocated rather than
        resized in place, so a stale view left over by a caller never blocks growth.

    **Arguments:**

    - `stream`: Binary stream supporting `readinto` (a file opened in `"rb"` mode,
        `io.BytesIO`, `gzip.GzipFile`, ...). The reader borrows it and never closes it.
    - `chunk_size`: Number of bytes requested from the stream per read.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._input = stream
        self._chunk = bytearray(chunk_size)
        self._chunk_view = memoryview(self._chunk)
        self._chunk_start = 0
        self._chunk_end = 0
        self._eof = False

        self._buffer = bytearray()
        self._line_size = 0
        self._has_line = False
        self._lines_read = 0

    def read_next_line(self) -> bool:
        """Load the next line.

        **Returns:**

        - `True` if a line was read, `False` once the stream is exhausted.

        **Raises:**

        - `OSError`: If reading from the stream fails. End of stream is not an error.
        """
        # the previous line is overwritten from here on, even if the read fails
        self._has_line = False
        self._line_size = 0

        size = 0
        while True:
            if self._chunk_start == self._chunk_end:
                if self._eof or self._fill() == 0:
                    self._eof = True
                    break
            newline = self._chunk.find(b"\n", self._chunk_start, self._chunk_end)
            stop = self._chunk_end if newline < 0 else newline + 1
            size = self._append(size, stop)
            if newline >= 0:
                break

        if size == 0:
            return False

        self._line_size = size
        self._has_line = True
        self._lines_read += 1
        return True

    def current_line(self) -> memoryview:
        """Read-only view of the current line, valid until the next `read_next_line`."""
        if not self._has_line:
            raise NoCurrentLineError("LineByLineReader: no line data available")
        return memoryview(self._buffer).toreadonly()[: self._line_size]

    def current_text(self, encoding: str = "utf-8") -> str:
        return str(self.current_line(), encoding)

    def current_line_number(self) -> int:
        """0-based index of the most recently read line."""
        if self._lines_read == 0:
            raise NoCurrentLineError("LineByLineReader: no line has been read yet")
        return self._lines_read - 1

    @property
    def lines_read(self) -> int:
        return self._lines_read

    def eof(self) -> bool:
        return self._eof

    def _fill(self) -> int:
        n = self._input.readinto(self._chunk_view)
        if n is None:
            raise BlockingIOError(errno.EAGAIN, "LineByLineReader: stream has no data available")
        self._chunk_start = 0
        self._chunk_end = n
        return n

    def _append(self, size: int, stop: int) -> int:
        needed = size + (stop - self._chunk_start)
        if needed > len(self._buffer):
            grown = bytearray(max(needed, 2 * len(self._buffer)))
            grown[:size] = self._buffer[:size]
            self._buffer = grown
        self._buffer[size:needed] = self._chunk_view[self._chunk_start : stop]
        self._chunk_start = stop
        return needed
