"""
Request metrics middleware.
"""

import time
from collections.abc import Callable

from fastapi import Request

from cloud_queue.observability.logging import bind_context, clear_context
from cloud_queue.observability.metrics import get_metrics


async def metrics_middleware(request: Request, call_next: Callable):
    """Count requests and observe latency per route template."""
    clear_context()
    bind_context(method=request.method, path=request.url.path)

    start = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start

    # Route template keeps /jobs/{job_id} as a single label value
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)

    get_metrics().record_api_request(
        method=request.method,
        endpoint=endpoint,
        status=response.status_code,
        duration_seconds=duration,
    )
    return response
