"""GNSSReader: raw byte access to a GPS receiver on a serial port.

The reader does no parsing. It hands out whatever bytes the UART has buffered
and leaves framing to ``SentenceFramer``, so the same pipeline can also be
fed from a recorded log file.

Reading strategy:
    pyserial's ``read(size)`` returns as soon as ``size`` bytes are available
    or the port timeout expires. An empty result is a timeout and not an end
    of stream; the timeout bounds how long ``cancel()`` takes to be noticed.
"""

import contextlib
from collections.abc import Iterator
from types import TracebackType
from typing import Protocol

import serial

__all__ = ["ByteStream", "GNSSReader"]

# --- serial port defaults -----------------------------------------------------

_PORT = "/dev/ttyACM0"
_BAUD_RATE = 9600
_TIMEOUT = 1.0  # seconds; determines maximum cancel() latency
_CHUNK_SIZE = 256


class ByteStream(Protocol):
    """The part of ``serial.Serial`` the reader relies on."""

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> int | None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class GNSSReader:
    """Context manager for reading raw NMEA bytes from a serial receiver.

    Two consumption patterns are supported:

    Continuous iteration (recommended for the bridge loop)::

        with GNSSReader("/dev/ttyACM0", 9600) as gnss:
            for chunk in gnss:
                publications = pipeline.feed(chunk)

    Single read::

        with GNSSReader() as gnss:
            chunk = gnss.read()  # b"" on timeout

    Args:
        port: Serial device path (default: ``"/dev/ttyACM0"``).
        baud_rate: Line speed (default: ``9600``).
        timeout: Read timeout in seconds (default: ``1.0``).
        stream: An already open byte stream to use instead of opening
            ``port``. The reader does not close a stream it did not open.
    """

    def __init__(
        self,
        port: str = _PORT,
        baud_rate: int = _BAUD_RATE,
        timeout: float = _TIMEOUT,
        stream: ByteStream | None = None,
    ) -> None:
        """Store connection parameters; the port is opened in ``__enter__``."""
        self._port = port
        self._baud_rate = baud_rate
        self._timeout = timeout
        self._injected = stream
        self._stream: ByteStream | None = None
        self._cancelled: bool = False

    def __enter__(self) -> "GNSSReader":
        """Open the serial port (unless a stream was injected) and reset state."""
        if self._injected is not None:
            self._stream = self._injected
        else:
            try:
                self._stream = serial.Serial(
                    self._port, baudrate=self._baud_rate, timeout=self._timeout
                )
            except serial.SerialException as e:
                raise EOFError(f"Cannot open serial port {self._port}.") from e
        self._cancelled = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the serial port if this reader opened it."""
        if self._stream is not None and self._injected is None:
            self._stream.close()
        self._stream = None

    def cancel(self) -> None:
        """Cancel pending blocking reads gracefully.

        Sets the cancellation flag and, on platforms where pyserial supports
        it, interrupts a read in progress. The next ``read()`` raises
        ``EOFError`` so background threads can exit.
        """
        self._cancelled = True
        cancel_read = getattr(self._stream, "cancel_read", None)
        if cancel_read is not None:
            with contextlib.suppress(OSError):
                cancel_read()

    @property
    def cancelled(self) -> bool:
        """True once ``cancel()`` has been called in the current ``with`` block."""
        return self._cancelled

    def _require_stream(self) -> ByteStream:
        if self._stream is None:
            raise RuntimeError("GNSSReader must be used as a context manager.")
        return self._stream

    def read(self, size: int = _CHUNK_SIZE) -> bytes:
        """Read up to ``size`` bytes; returns ``b""`` when the port times out.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the read is cancelled or the port fails.
        """
        stream = self._require_stream()
        if self._cancelled:
            raise EOFError("Serial read cancelled.")
        try:
            data = stream.read(size)
        except (serial.SerialException, OSError) as e:
            raise EOFError("Serial port closed.") from e
        if self._cancelled and not data:
            raise EOFError("Serial read cancelled.")
        return data

    def write(self, data: bytes) -> None:
        """Write ``data`` to the receiver and wait until it has been sent.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the port fails.
        """
        stream = self._require_stream()
        try:
            stream.write(data)
            stream.flush()
        except (serial.SerialException, OSError) as e:
            raise EOFError("Serial port closed.") from e

    def __iter__(self) -> Iterator[bytes]:
        """Yield non-empty byte chunks indefinitely.

        Timeouts are skipped. Iteration ends only by the caller breaking the
        loop or an exception propagating out (``EOFError`` on cancellation or
        port failure).
        """
        while True:
            data = self.read()
            if data:
                yield data
