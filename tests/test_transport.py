import asyncio

import aiohttp
import pytest
from aiohttp import test_utils, web

from cryptomkt.core.errors import CryptoMktError, ErrorKind
from cryptomkt.core.transport import (
    AiohttpTransport,
    CannedResponse,
    CannedTransport,
    CannedTransportExhausted,
)


def build_app() -> web.Application:
    async def markets(request: web.Request) -> web.Response:
        return web.json_response({"status": "success", "data": ["ETHCLP", "BTCCLP"]})

    async def echo_headers(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "data": {
                    "apikey": request.headers.get("X-MKT-APIKEY"),
                    "query": dict(request.query),
                }
            }
        )

    async def echo_form(request: web.Request) -> web.Response:
        form = await request.post()
        return web.json_response({"data": {key: form[key] for key in form}})

    async def teapot(request: web.Request) -> web.Response:
        return web.Response(status=418, text="I'm a teapot")

    async def unavailable(request: web.Request) -> web.Response:
        return web.Response(status=503)

    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(2)
        return web.json_response({"data": []})

    async def undecodable(request: web.Request) -> web.Response:
        return web.Response(body=b"\xff\xfe\xfa", content_type="text/plain", charset="utf-8")

    app = web.Application()
    app.router.add_get("/v1/market", markets)
    app.router.add_get("/v1/headers", echo_headers)
    app.router.add_post("/v1/payment/new_order", echo_form)
    app.router.add_get("/v1/teapot", teapot)
    app.router.add_get("/v1/unavailable", unavailable)
    app.router.add_get("/v1/binary", undecodable)
    app.router.add_get("/v1/slow", slow)
    return app


def run_against_server(scenario):
    async def runner():
        async with test_utils.TestServer(build_app()) as server:
            async with AiohttpTransport(timeout=5) as transport:
                return await scenario(server, transport)

    return asyncio.run(runner())


def test_live_get_returns_body_text():
    async def scenario(server, transport):
        return await transport.get(str(server.make_url("/v1/market")), {})

    body = run_against_server(scenario)
    assert '"ETHCLP"' in body


def test_live_get_sends_headers_and_query():
    async def scenario(server, transport):
        url = str(server.make_url("/v1/headers")) + "?market=ETHCLP"
        return await transport.get(url, {"X-MKT-APIKEY": "APK"})

    body = run_against_server(scenario)
    assert '"apikey": "APK"' in body
    assert '"market": "ETHCLP"' in body


def test_live_post_is_form_encoded():
    async def scenario(server, transport):
        url = str(server.make_url("/v1/payment/new_order"))
        return await transport.post(url, {}, {"to_receive": "3000", "to_receive_currency": "CLP"})

    body = run_against_server(scenario)
    assert '"to_receive": "3000"' in body
    assert '"to_receive_currency": "CLP"' in body


@pytest.mark.parametrize(
    ("path", "kind"),
    [
        ("/v1/teapot", ErrorKind.TEAPOT),
        ("/v1/unavailable", ErrorKind.SERVICE_UNAVAILABLE),
        ("/v1/missing", ErrorKind.NOT_FOUND),
    ],
)
def test_live_error_statuses_are_translated(path, kind):
    async def scenario(server, transport):
        with pytest.raises(CryptoMktError) as excinfo:
            await transport.get(str(server.make_url(path)), {})
        return excinfo.value

    error = run_against_server(scenario)
    assert error.kind is kind


def test_live_undecodable_body_is_malformed():
    async def scenario(server, transport):
        with pytest.raises(CryptoMktError) as excinfo:
            await transport.get(str(server.make_url("/v1/binary")), {})
        return excinfo.value

    assert run_against_server(scenario).kind is ErrorKind.MALFORMED_RESOURCE


def test_live_connection_failure_is_bad_request():
    async def scenario():
        async with AiohttpTransport(timeout=5) as transport:
            await transport.get("http://127.0.0.1:1/v1/market", {})

    with pytest.raises(CryptoMktError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.kind is ErrorKind.BAD_REQUEST
    assert excinfo.value.status is None


def test_canned_transport_records_requests():
    transport = CannedTransport([CannedResponse(body='{"data": 1}'), CannedResponse(body='{"data": 2}')])

    async def scenario():
        first = await transport.get("https://example.test/v1/a", {"X": "1"})
        second = await transport.post("https://example.test/v1/b", {}, {"k": "v"})
        return first, second

    assert asyncio.run(scenario()) == ('{"data": 1}', '{"data": 2}')
    assert [request.method for request in transport.requests] == ["GET", "POST"]
    assert transport.requests[0].headers == {"X": "1"}
    assert transport.requests[1].payload == {"k": "v"}


def test_canned_transport_translates_statuses():
    transport = CannedTransport()
    transport.push("", status=401)
    with pytest.raises(CryptoMktError) as excinfo:
        asyncio.run(transport.get("https://example.test/v1/balance", {}))
    assert excinfo.value.kind is ErrorKind.UNAUTHORIZED
    assert excinfo.value.status == 401


def test_canned_transport_exhausted():
    transport = CannedTransport()
    with pytest.raises(CannedTransportExhausted):
        asyncio.run(transport.get("https://example.test/v1/market", {}))


def test_live_timeout_is_bad_request():
    async def runner():
        async with test_utils.TestServer(build_app()) as server:
            async with AiohttpTransport(timeout=0.2) as transport:
                with pytest.raises(CryptoMktError) as excinfo:
                    await transport.get(str(server.make_url("/v1/slow")), {})
                return excinfo.value

    error = asyncio.run(runner())
    assert error.kind is ErrorKind.BAD_REQUEST
    assert error.status is None


def test_injected_session_still_gets_the_timeout():
    async def runner():
        async with test_utils.TestServer(build_app()) as server:
            async with aiohttp.ClientSession() as session:
                transport = AiohttpTransport(session=session, timeout=0.2)
                with pytest.raises(CryptoMktError) as excinfo:
                    await transport.get(str(server.make_url("/v1/slow")), {})
                await transport.close()
                assert not session.closed
                return excinfo.value

    assert asyncio.run(runner()).kind is ErrorKind.BAD_REQUEST


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_non_positive_timeout_is_rejected(timeout):
    with pytest.raises(ValueError):
        AiohttpTransport(timeout=timeout)
