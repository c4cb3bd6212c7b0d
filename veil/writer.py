"""
Response Writers
The capability set the padding core needs from an inbound response, and
the decorator that adds padding to it exactly once.
"""

import threading
from abc import ABC, abstractmethod
from http import HTTPStatus
from typing import MutableMapping

from veil.injector import PaddingInjector


class ResponseWriter(ABC):
    """Minimal response abstraction an inbound adapter must provide."""

    @property
    @abstractmethod
    def headers(self) -> MutableMapping[str, str]:
        """Mutable header collection, committed by ``write_header``."""

    @abstractmethod
    def write_header(self, status_code: int) -> None:
        """Commit the status line and headers."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write body bytes after the headers.

        Returns:
            Number of bytes written.
        """


class PaddingResponseWriter(ResponseWriter):
    """
    Decorates a ResponseWriter so the padding header is set exactly once,
    before the first body byte.

    State moves one way, unwritten to header-written, triggered either by
    an explicit ``write_header`` or implicitly by the first ``write``
    (with 200 OK). Later ``write_header`` calls are silent no-ops.

    The lock only guards the flag. Padding is computed and the wrapped
    writer is called outside of it. ``_committed`` is set once the wrapped
    ``write_header`` returned, and body writes wait for it, so a body
    write racing an in-flight header commit cannot overtake it.

    Any attribute not overridden here is read from the wrapped writer.

    Args:
        writer: The underlying response writer.
        injector: Produces the padding header.
    """

    def __init__(self, writer: ResponseWriter, injector: PaddingInjector):
        self.writer = writer
        self.injector = injector
        self._wrote_header = False
        self._committed = threading.Event()
        self._lock = threading.Lock()

    @property
    def headers(self) -> MutableMapping[str, str]:
        return self.writer.headers

    @property
    def wrote_header(self) -> bool:
        return self._wrote_header

    def write_header(self, status_code: int) -> None:
        with self._lock:
            if self._wrote_header:
                return
            self._wrote_header = True

        try:
            self.injector.pad_headers(self.writer.headers)
            self.writer.write_header(status_code)
        finally:
            self._committed.set()

    def write(self, data: bytes) -> int:
        # Fast path: a bool read is atomic and visible across threads under the GIL
        if not self._wrote_header:
            with self._lock:
                pending = not self._wrote_header
            if pending:
                self.write_header(HTTPStatus.OK)
        self._committed.wait()
        return self.writer.write(data)

    def __getattr__(self, name):
        # Only called for attributes missing on the decorator itself
        if name == "writer":
            raise AttributeError(name)
        return getattr(self.writer, name)
