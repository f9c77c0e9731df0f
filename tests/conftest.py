# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web

from munin_probes.config import HttpLoadConfig
from munin_probes.logger import init_logging

#: body sizes of the fixture site, used by size assertions
ROOT_HTML = (
    "<html><head>"
    '<link rel="stylesheet" href="/style.css">'
    '<script src="/app.js"></script>'
    "</head><body>"
    '<a href="/about">About</a>'
    '<img src="/logo.png">'
    '<img src="/missing.png">'
    '<form action="/search"></form>'
    "</body></html>"
)
CSS = "body { color: black; }"
JS = "console.log('hi');"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 92


@pytest.fixture(autouse=True)
def quiet_logger():
    """Put the project logger back to its defaults after each test."""
    yield
    init_logging()


@pytest.fixture()
def url_file(tmp_path) -> Path:
    path = tmp_path / "urls.txt"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture()
def http_config(tmp_path, url_file) -> HttpLoadConfig:
    """
    Return a basic valid HttpLoadConfig pointing into tmp_path.
    """
    return HttpLoadConfig(
        url_file=url_file,
        cache_dir=tmp_path / "state",
        timeout=2.0,
        max_redirects=3,
        user_agent="TestAgent/1.0",
    )


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[str]:
    """A page with a stylesheet, a script, two images (one missing), an anchor and a form."""
    app = web.Application()

    async def handle_root(_):
        return web.Response(text=ROOT_HTML, content_type="text/html")

    async def handle_css(_):
        return web.Response(text=CSS, content_type="text/css")

    async def handle_js(_):
        return web.Response(text=JS, content_type="application/javascript")

    async def handle_png(_):
        return web.Response(body=PNG, content_type="image/png")

    async def handle_moved(_):
        raise web.HTTPFound("/")

    async def handle_loop(_):
        raise web.HTTPFound("/loop")

    async def handle_slow(_):
        await asyncio.sleep(2)
        return web.Response(text="late", content_type="text/plain")

    app.router.add_get("/", handle_root)
    app.router.add_get("/style.css", handle_css)
    app.router.add_get("/app.js", handle_js)
    app.router.add_get("/logo.png", handle_png)
    app.router.add_get("/moved", handle_moved)
    app.router.add_get("/loop", handle_loop)
    app.router.add_get("/slow", handle_slow)

    async for url in _serve_app(app, unused_tcp_port):
        yield url
