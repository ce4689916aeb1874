from __future__ import annotations

import asyncio
import socket
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from courier.config import NetworkConfig
from courier.core.exceptions import TransportError
from courier.events import RecheckNeeded, ResponseReceived
from courier.network import Network
from courier.types import Request

pytestmark = [pytest.mark.unit]


def make_app() -> web.Application:
    app = web.Application()

    async def api(request: web.Request) -> web.Response:
        form = dict(await request.post())
        match request.query.get("command"):
            case "OpenReport":
                return web.json_response({"reportID": 7, "sent": form})
            case "Slow":
                await asyncio.sleep(0.3)
                return web.json_response({"slow": True})
            case _:
                return web.Response(status=404, text="unknown command")

    app.router.add_post("/api", api)
    return app


@pytest.fixture
async def server():
    srv = TestServer(make_app())
    await srv.start_server()
    yield srv
    await srv.close()


@pytest.fixture
def base_url(server: TestServer) -> str:
    return f"http://{server.host}:{server.port}"


@pytest.fixture
def dead_url() -> str:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}"


def open_report() -> Request:
    return Request("OpenReport", {"persist": True, "reportID": 7})


@pytest.mark.asyncio
async def test_success_drains_persisted_entry_and_emits(base_url: str, tmp_path: Path):
    config = NetworkConfig(base_url=base_url, platform="ios", persisted_path=tmp_path / "q.json")
    async with Network(config) as net:
        received: list[ResponseReceived] = []
        net.bus.on(ResponseReceived)(received.append)
        net.persisted.save([open_report()])

        response = await net.process(open_report())

    assert response["reportID"] == 7
    assert response["sent"]["platform"] == "ios"
    assert response["sent"]["api_setCookie"] == "false"
    assert net.persisted.get_all() == []
    assert [e.response for e in received] == [response]


@pytest.mark.asyncio
async def test_unreachable_server_keeps_persisted_entry(dead_url: str):
    async with Network(NetworkConfig(base_url=dead_url)) as net:
        net.persisted.save([open_report()])

        with pytest.raises(TransportError, match="^Failed to fetch$"):
            await net.process(open_report())

    assert net.persisted.get_all() == [open_report()]


@pytest.mark.asyncio
async def test_http_error_is_absorbed_and_drains(base_url: str):
    async with Network(NetworkConfig(base_url=base_url)) as net:
        request = Request("Nope", {"persist": True})
        net.persisted.save([request])

        assert await net.process(request) is None

    assert net.persisted.get_all() == []


@pytest.mark.asyncio
async def test_cancel_pending_requests_is_absorbed(base_url: str):
    async with Network(NetworkConfig(base_url=base_url)) as net:
        request = Request("Slow", {"persist": True})
        net.persisted.save([request])
        task = asyncio.create_task(net.process(request))
        await asyncio.sleep(0.05)
        net.cancel_pending_requests()

        assert await task is None

    assert net.persisted.get_all() == []


@pytest.mark.asyncio
async def test_slow_request_triggers_recheck(base_url: str):
    config = NetworkConfig(base_url=base_url, recheck_timeout=0.05)
    async with Network(config) as net:
        rechecks: list[RecheckNeeded] = []
        net.bus.on(RecheckNeeded)(rechecks.append)

        await net.process(Request("Slow"))

    assert rechecks == [RecheckNeeded(pending_for=0.05)]


@pytest.mark.asyncio
async def test_fast_request_does_not_trigger_recheck(base_url: str):
    async with Network(NetworkConfig(base_url=base_url, recheck_timeout=0.2)) as net:
        rechecks: list[RecheckNeeded] = []
        net.bus.on(RecheckNeeded)(rechecks.append)

        await net.process(open_report())
        await asyncio.sleep(0.3)

    assert rechecks == []


@pytest.mark.asyncio
async def test_process_with_retry_gives_up_when_unreachable(dead_url: str):
    async with Network(NetworkConfig(base_url=dead_url)) as net:
        with pytest.raises(TransportError):
            await net.process_with_retry(open_report(), max_attempts=2, base_delay=0)


def test_from_files(tmp_path: Path):
    (tmp_path / "courier.toml").write_text(
        '[network]\nbase_url = "https://api.example.com"\n\n[logging]\nconsole = false\n'
    )
    net = Network.from_files(project_dir=tmp_path, global_path=tmp_path / "none.toml")
    assert net.config.base_url == "https://api.example.com"
