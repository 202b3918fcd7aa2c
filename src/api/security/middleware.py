import logging
import time
from typing import Iterable

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from src.api.error import INTERNAL_ERROR_BODY, AuthorizationOriginError
from src.api.security.events import CORS_VIOLATION, log_security_event

logger = logging.getLogger(__name__)


def configure_security_headers(app: FastAPI, guarded_prefixes: Iterable[str] = ()) -> None:
    """
    Attach CORS and security headers to every response, answer preflight
    requests, and settle rate-limit bookkeeping left by ``Admission``.

    Requests under ``guarded_prefixes`` pass the origin guard here, before
    FastAPI reads the body, so a malformed payload cannot skip it. Unhandled
    exceptions from the routes become the opaque 500 envelope inside this
    layer and still get every header.
    """
    guarded_prefixes = tuple(guarded_prefixes)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        guard = request.app.state.origin_guard

        if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
            response = Response(status_code=status.HTTP_200_OK)
        elif request.url.path.startswith(guarded_prefixes) and not guard.validate_origin(
            request.headers
        ):
            log_security_event(CORS_VIOLATION, request)
            rejection = AuthorizationOriginError()
            response = JSONResponse(status_code=rejection.status_code, content=rejection.to_dict())
        else:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(f"Unhandled error on {request.method} {request.url.path}")
                response = JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content=INTERNAL_ERROR_BODY,
                )

        guard.apply_cors_headers(response.headers)
        guard.apply_security_headers(response.headers)

        for name, value in getattr(request.state, "rate_limit_headers", {}).items():
            response.headers[name] = value

        counted = getattr(request.state, "rate_limit", None)
        if counted is not None:
            key, policy = counted
            request.app.state.rate_limiter.record_outcome(key, policy, response.status_code)

        return response


def configure_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f} ms)"
        )
        return response
