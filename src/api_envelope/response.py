"""ResponseEnvelope: a uniform JSON body whose shape follows the status code.

Success codes (200-300) carry ``{"data": ...}``; error codes (400-600) carry
``{"error_message": "..."}``. Building an envelope is pure. The HTTP response
only exists once the host framework asks for it, either through
``to_response()`` or by awaiting the envelope as an ASGI app.

Endpoints on a router built with ``route_class=EnvelopeRoute`` may return an
envelope directly::

    router = APIRouter(route_class=EnvelopeRoute)

    @router.get("/items/{item_id}")
    async def read_item(item_id: int) -> ResponseEnvelope:
        return ResponseEnvelope.ok({"id": item_id})
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from fastapi.encoders import jsonable_encoder
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import Receive, Scope, Send

from api_envelope.exceptions import InvalidStatusCode
from api_envelope.logging import get_logger

logger = get_logger(__name__)

SUCCESS_RANGE = range(200, 301)
ERROR_RANGE = range(400, 601)

# HTTP forbids a body on these; the envelope renders them empty
NO_BODY_STATUS_CODES = frozenset({204, 205})

Payload = Mapping[str, Any] | list[Any]


def is_valid_status_code(status_code: object) -> bool:
    """True for ints in 200-300 or 400-600, both ends inclusive."""
    # bool is an int subclass; True/False are never status codes
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        return False
    return status_code in SUCCESS_RANGE or status_code in ERROR_RANGE


@dataclass(frozen=True)
class ResponseEnvelope:
    """Immutable status code plus either a success payload or an error message.

    Only the status code is validated. Nothing stops a caller from setting
    both ``data`` and ``error_message``; the status code alone decides which
    one reaches the wire. The named constructors (``ok``, ``not_found``, ...)
    only expose the field that matches their code.
    """

    status_code: int
    # None is stored as {}
    data: Payload | None = field(default_factory=dict)
    error_message: str = ""

    def __post_init__(self) -> None:
        if not is_valid_status_code(self.status_code):
            raise InvalidStatusCode(self.status_code)
        if self.data is None:
            object.__setattr__(self, "data", {})

    @classmethod
    def create(
        cls,
        status_code: int,
        data: Payload | None = None,
        error_message: str = "",
    ) -> Self:
        return cls(status_code, data, error_message)

    @property
    def is_success(self) -> bool:
        return self.status_code in SUCCESS_RANGE

    @property
    def is_error(self) -> bool:
        return self.status_code in ERROR_RANGE

    def resolve_payload(self) -> dict[str, Any]:
        """Pick the body shape for this status code.

        Thresholds are checked from the highest down and the first match
        wins. 5xx and 4xx currently produce the same shape but stay separate
        branches.
        """
        if self.status_code >= 500:
            return {"error_message": self.error_message}
        if self.status_code >= 400:
            return {"error_message": self.error_message}
        if self.status_code >= 200:
            return {"data": self.data}
        # only reachable if status_code was forced past __post_init__
        raise InvalidStatusCode(self.status_code)

    def to_response(self, request: Request | None = None) -> Response:
        """Serialize the payload into a JSON response with this status code.

        The request is accepted so the envelope fits the host's response
        hooks; it is not read. Non-ASCII text is written as-is (UTF-8), and
        repeated calls produce byte-identical bodies.

        204 and 205 go out with no body and no Content-Type. ``resolve_payload``
        still reports the data shape for them.
        """
        if self.status_code in NO_BODY_STATUS_CODES:
            logger.debug("envelope_rendered", status_code=self.status_code, shape="empty")
            return Response(status_code=self.status_code)
        payload = jsonable_encoder(self.resolve_payload())
        logger.debug(
            "envelope_rendered",
            status_code=self.status_code,
            shape="error_message" if "error_message" in payload else "data",
        )
        return JSONResponse(content=payload, status_code=self.status_code)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = self.to_response(Request(scope, receive))
        await response(scope, receive, send)

    # Named constructors. Each is sugar over the primary constructor and only
    # exposes the field that belongs to its status class.

    @classmethod
    def ok(cls, data: Payload | None = None) -> Self:
        return cls(200, data=data)

    @classmethod
    def created(cls, data: Payload | None = None) -> Self:
        return cls(201, data=data)

    @classmethod
    def accepted(cls, data: Payload | None = None) -> Self:
        return cls(202, data=data)

    @classmethod
    def bad_request(cls, error_message: str = "Bad request") -> Self:
        return cls(400, error_message=error_message)

    @classmethod
    def unauthorized(cls, error_message: str = "Unauthorized") -> Self:
        return cls(401, error_message=error_message)

    @classmethod
    def forbidden(cls, error_message: str = "Forbidden") -> Self:
        return cls(403, error_message=error_message)

    @classmethod
    def not_found(cls, error_message: str = "Item not found") -> Self:
        return cls(404, error_message=error_message)

    @classmethod
    def conflict(cls, error_message: str = "Conflict") -> Self:
        return cls(409, error_message=error_message)

    @classmethod
    def unprocessable(cls, error_message: str = "Unprocessable entity") -> Self:
        return cls(422, error_message=error_message)

    @classmethod
    def server_error(cls, error_message: str = "Internal server error") -> Self:
        return cls(500, error_message=error_message)


_REQUEST_PARAM = "_envelope_request"


def _emit_envelopes(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap an endpoint so a returned ResponseEnvelope becomes a JSONResponse.

    The wrapper advertises the endpoint's own signature to FastAPI, plus a
    keyword-only ``Request`` parameter for FastAPI to fill in when the endpoint
    does not already take one. An envelope return annotation is swapped for
    JSONResponse so FastAPI does not derive a response model from the dataclass.
    """
    if getattr(endpoint, "__emits_envelopes__", False):
        # already wrapped, e.g. re-registered by include_router
        return endpoint

    signature = inspect.signature(endpoint, eval_str=True)
    is_async = inspect.iscoroutinefunction(endpoint) or inspect.iscoroutinefunction(
        getattr(endpoint, "__call__", None)
    )

    params = list(signature.parameters.values())
    # FastAPI fills a single Request parameter per endpoint; reuse the endpoint's own
    request_name = next(
        (
            param.name
            for param in params
            if isinstance(param.annotation, type) and issubclass(param.annotation, Request)
        ),
        None,
    )

    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        if request_name is None:
            request = kwargs.pop(_REQUEST_PARAM)
        else:
            request = kwargs[request_name]
        if is_async:
            result = await endpoint(*args, **kwargs)
        else:
            result = await run_in_threadpool(endpoint, *args, **kwargs)
        if isinstance(result, ResponseEnvelope):
            return result.to_response(request)
        return result

    if request_name is None:
        request_param = inspect.Parameter(
            _REQUEST_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Request
        )
        # keyword-only parameters must precede **kwargs
        if params and params[-1].kind is inspect.Parameter.VAR_KEYWORD:
            params.insert(len(params) - 1, request_param)
        else:
            params.append(request_param)

    return_annotation = signature.return_annotation
    if return_annotation is ResponseEnvelope:
        return_annotation = JSONResponse

    # No functools.wraps: FastAPI must see the wrapper, not unwrap to the endpoint
    for attr in ("__module__", "__name__", "__qualname__", "__doc__"):
        if hasattr(endpoint, attr):
            setattr(wrapper, attr, getattr(endpoint, attr))
    wrapper.__signature__ = signature.replace(  # type: ignore[attr-defined]
        parameters=params, return_annotation=return_annotation
    )
    wrapper.__emits_envelopes__ = True  # type: ignore[attr-defined]
    return wrapper


class EnvelopeRoute(APIRoute):
    """APIRoute whose endpoints may return a ResponseEnvelope.

    Any other return value goes through FastAPI's usual response handling.
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, _emit_envelopes(endpoint), **kwargs)
