"""
Outbound padding for requests sessions.

The transport adapter is the last stage before a prepared request hits
the wire, and it runs once per request, so no locking is needed here.
"""

from typing import Iterable

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from veil.injector import PaddingInjector
from veil.options import PaddingOptions
from veil.pool import RandomPool


class PaddingAdapter(HTTPAdapter):
    """
    HTTPAdapter that adds a padding header to every request it sends.

    Args:
        injector: Shared padding injector.
        **kwargs: Passed through to ``HTTPAdapter`` (pool sizes, retries).
    """

    def __init__(self, injector: PaddingInjector, **kwargs):
        self.injector = injector
        super().__init__(**kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        if request.headers is None:
            request.headers = CaseInsensitiveDict()
        self.injector.pad_headers(request.headers)
        return super().send(request, **kwargs)


def install_padding(
    session: requests.Session,
    options: PaddingOptions = None,
    pool: RandomPool = None,
    prefixes: Iterable[str] = ("http://", "https://"),
    **adapter_kwargs,
) -> PaddingAdapter:
    """
    Mount a PaddingAdapter on ``session`` for each URL prefix.

    Options are resolved here, once. Returns the mounted adapter.
    """
    adapter = PaddingAdapter(PaddingInjector(options, pool), **adapter_kwargs)
    for prefix in prefixes:
        session.mount(prefix, adapter)
    return adapter
