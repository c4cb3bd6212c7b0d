"""
Inbound padding for WSGI applications.

The app's ``start_response`` call is the explicit header write and the
PEP 3333 ``write`` callable is the body write. Both go through a
PaddingResponseWriter so the padding header is added exactly once.
"""

from http import HTTPStatus
from wsgiref.headers import Headers

from veil.injector import PaddingInjector
from veil.options import PaddingOptions
from veil.pool import RandomPool
from veil.writer import PaddingResponseWriter, ResponseWriter


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class WSGIResponseWriter(ResponseWriter):
    """ResponseWriter on top of a server's ``start_response``."""

    def __init__(self, start_response):
        self._start_response = start_response
        self._headers = Headers([])
        self._write = None
        self.reason = ""
        self.exc_info = None

    @property
    def headers(self) -> Headers:
        return self._headers

    def write_header(self, status_code: int) -> None:
        status = f"{int(status_code)} {self.reason or _reason(status_code)}".rstrip()
        self._write = self._start_response(status, self._headers.items(), self.exc_info)
        self.exc_info = None

    def restart(self, status: str, headers: Headers, exc_info) -> None:
        """Replace status and headers of an error response (PEP 3333)."""
        self._headers = headers
        self._write = self._start_response(status, headers.items(), exc_info)

    def write(self, data: bytes) -> int:
        if self._write is None:
            raise RuntimeError("write() called before start_response()")
        self._write(data)
        return len(data)


class PaddingMiddleware:
    """
    WSGI middleware padding every response with a random header.

    Args:
        app: The wrapped WSGI application.
        options: Header name and profile, resolved once here.
        pool: Shared random pool. A new one is filled when omitted.
    """

    def __init__(self, app, options: PaddingOptions = None, pool: RandomPool = None):
        self.app = app
        self.injector = PaddingInjector(options, pool)

    def __call__(self, environ, start_response):
        writer = WSGIResponseWriter(start_response)
        padded = PaddingResponseWriter(writer, self.injector)

        def padded_start_response(status, headers, exc_info=None):
            if padded.wrote_header:
                if exc_info is None:
                    # Let the server report the double call
                    return start_response(status, headers)
                replacement = Headers(list(headers))
                self.injector.pad_headers(replacement)
                writer.restart(status, replacement, exc_info)
                return padded.write

            code, _, reason = status.partition(" ")
            writer.reason = reason
            writer.exc_info = exc_info
            for name, value in headers:
                writer.headers.add_header(name, value)
            padded.write_header(int(code))
            return padded.write

        return self.app(environ, padded_start_response)
