import io
import sys
from typing import Any, Optional


class ByteSource:
    """Reads program input one byte at a time.

    Binary streams are read directly; the default is the binary layer
    of stdin. Text streams are UTF-8 encoded (undecodable bytes kept via
    surrogateescape) and a multi-byte character is handed out one byte
    per call. End of stream reads as 0.
    """
    def __init__(self, stream: Optional[Any] = None):
        self.stream = stream
        self.pending = bytearray()

    def _stream(self) -> Any:
        if self.stream is not None:
            return self.stream
        return getattr(sys.stdin, 'buffer', sys.stdin)

    def read_byte(self) -> int:
        if self.pending:
            return self.pending.pop(0)
        data = self._stream().read(1)
        if not data:
            return 0
        if isinstance(data, str):
            data = data.encode('utf-8', 'surrogateescape')
        self.pending.extend(data[1:])
        return data[0]


class ByteSink:
    """Writes program output one byte at a time, flushing after each byte."""
    def __init__(self, stream: Optional[Any] = None):
        self.stream = stream

    def _stream(self) -> Any:
        return self.stream if self.stream is not None else sys.stdout

    def write_byte(self, value: int) -> None:
        out = self._stream()
        data = bytes([value])
        if isinstance(out, io.TextIOBase) or hasattr(out, 'encoding'):
            buffer = getattr(out, 'buffer', None)
            if buffer is None:
                out.write(data.decode('latin-1'))
                out.flush()
                return
            # keep ordering with text already written through the wrapper
            out.flush()
            out = buffer
        out.write(data)
        out.flush()

    def write_text(self, text: str) -> None:
        out = self._stream()
        if isinstance(out, io.TextIOBase) or hasattr(out, 'encoding'):
            out.write(text)
        else:
            out.write(text.encode('utf-8'))
        out.flush()
