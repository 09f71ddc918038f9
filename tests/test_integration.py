"""Host-framework integration: EnvelopeRoute and the ASGI hook."""

from typing import Annotated, Any

import pytest
from fastapi import APIRouter, Depends, FastAPI, Request
from httpx import ASGITransport, AsyncClient, Response
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.types import ASGIApp

from api_envelope.exceptions import InvalidStatusCode
from api_envelope.response import EnvelopeRoute, ResponseEnvelope


def _limit() -> int:
    return 3


def build_app() -> FastAPI:
    router = APIRouter(route_class=EnvelopeRoute)

    @router.get("/sync/{name}")
    def sync_endpoint(name: str, shout: bool = False) -> ResponseEnvelope:
        return ResponseEnvelope.ok({"name": name.upper() if shout else name})

    @router.get("/async")
    async def async_endpoint(limit: Annotated[int, Depends(_limit)]) -> ResponseEnvelope:
        return ResponseEnvelope.ok(list(range(limit)))

    @router.get("/plain")
    async def plain_endpoint() -> dict[str, str]:
        return {"untouched": "yes"}

    @router.get("/with-request")
    async def request_endpoint(request: Request) -> ResponseEnvelope:
        return ResponseEnvelope.ok({"path": request.url.path})

    @router.get("/teapot")
    async def teapot_endpoint() -> ResponseEnvelope:
        return ResponseEnvelope(418, error_message="I'm a teapot")

    @router.get("/bad-code")
    async def bad_code_endpoint() -> ResponseEnvelope:
        return ResponseEnvelope(302)

    app = FastAPI()
    app.include_router(router, prefix="/api")
    return app


async def _get(app: ASGIApp, path: str, **kwargs: Any) -> Response:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.get(path, **kwargs)


@pytest.mark.asyncio
async def test_sync_endpoint_envelope_is_rendered() -> None:
    resp = await _get(build_app(), "/api/sync/alexey", params={"shout": "true"})
    assert resp.status_code == 200
    assert resp.json() == {"data": {"name": "ALEXEY"}}


@pytest.mark.asyncio
async def test_dependencies_still_resolve() -> None:
    resp = await _get(build_app(), "/api/async")
    assert resp.json() == {"data": [0, 1, 2]}


@pytest.mark.asyncio
async def test_non_envelope_return_passes_through() -> None:
    resp = await _get(build_app(), "/api/plain")
    assert resp.json() == {"untouched": "yes"}


@pytest.mark.asyncio
async def test_endpoint_can_still_take_the_request() -> None:
    resp = await _get(build_app(), "/api/with-request")
    assert resp.json() == {"data": {"path": "/api/with-request"}}


@pytest.mark.asyncio
async def test_error_envelope_sets_status() -> None:
    resp = await _get(build_app(), "/api/teapot")
    assert resp.status_code == 418
    assert resp.json() == {"error_message": "I'm a teapot"}


@pytest.mark.asyncio
async def test_invalid_status_code_propagates_from_endpoint() -> None:
    with pytest.raises(InvalidStatusCode):
        await _get(build_app(), "/api/bad-code")


@pytest.mark.asyncio
async def test_openapi_hides_injected_request_param() -> None:
    resp = await _get(build_app(), "/openapi.json")
    operation = resp.json()["paths"]["/api/sync/{name}"]["get"]
    assert [param["name"] for param in operation["parameters"]] == ["name", "shout"]
    assert operation["operationId"].startswith("sync_endpoint")


@pytest.mark.asyncio
async def test_starlette_route_can_return_envelope() -> None:
    async def endpoint(request: Request) -> ResponseEnvelope:
        return ResponseEnvelope.created({"id": int(request.path_params["item_id"])})

    app = Starlette(routes=[Route("/items/{item_id}", endpoint, methods=["POST"])])
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        resp = await client.post("/items/100")
    assert resp.status_code == 201
    assert resp.content == b'{"data":{"id":100}}'
    assert resp.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_envelope_as_exception_handler_response() -> None:
    class Gone(Exception):
        pass

    app = FastAPI()

    @app.exception_handler(Gone)
    async def gone_handler(request: Request, exc: Gone) -> ResponseEnvelope:
        return ResponseEnvelope(410, error_message="Gone for good")

    @app.get("/old")
    async def old() -> None:
        raise Gone()

    resp = await _get(app, "/old")
    assert resp.status_code == 410
    assert resp.json() == {"error_message": "Gone for good"}
