"""
Framework adapters.
Install the padding core on an outbound requests session or an inbound WSGI app.
"""

from veil.adapters.outbound import PaddingAdapter, install_padding
from veil.adapters.wsgi import PaddingMiddleware, WSGIResponseWriter

__all__ = [
    "PaddingAdapter",
    "install_padding",
    "PaddingMiddleware",
    "WSGIResponseWriter",
]
