# salon_scheduler/core/middleware.py
"""Request tracing and logging middleware"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Tag every request with a correlation ID, echoed back in the response"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    salon_id = request.headers.get("X-Salon-Id", "-")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} in {duration_ms}ms",
        extra={
            "correlation_id": correlation_id,
            "salon_id": salon_id,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
    )

    return response
