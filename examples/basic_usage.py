"""
Veil — Basic Usage Example

Serves a small WSGI app behind the padding middleware and calls it with a
padded requests session. Both directions carry an X-Padding header whose
length changes on every message.
"""

import logging
import sys
import threading
from pathlib import Path
from wsgiref.simple_server import WSGIRequestHandler, make_server

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from veil import PaddingOptions, PROFILE_SHORT, RandomPool
from veil.adapters import PaddingMiddleware, install_padding


class QuietHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        pass


def hello(environ, start_response):
    received = environ.get("HTTP_X_PADDING", "")
    body = f"request padding: {len(received)} bytes\n".encode()
    start_response("200 OK", [("Content-Type", "text/plain"), ("Content-Length", str(len(body)))])
    return [body]


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    # One pool for the whole process, shared by both directions
    pool = RandomPool()
    options = PaddingOptions(profile=PROFILE_SHORT)

    print("=" * 50)
    print("  Veil — Randomized Header Padding")
    print("=" * 50)

    server = make_server("127.0.0.1", 0, PaddingMiddleware(hello, options, pool), handler_class=QuietHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    url = f"http://127.0.0.1:{server.server_port}/"

    session = requests.Session()
    install_padding(session, options, pool)

    try:
        for i in range(5):
            response = session.get(url, timeout=5)
            padding = response.headers.get("X-Padding", "")
            print(f"  #{i + 1}  {response.text.strip():<28} response padding: {len(padding)} bytes")
    finally:
        server.shutdown()
        server.server_close()

    print()
    print("Each message carries a different amount of padding.")


if __name__ == "__main__":
    main()
