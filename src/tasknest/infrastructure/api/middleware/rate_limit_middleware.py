"""Rate limiting for the endpoints that send one-time codes.

Registration, code resend and password reset requests each trigger an
email, so they are limited per client IP and per path.
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from tasknest.core.logging import get_logger
from tasknest.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage

logger = get_logger(__name__)


def code_issuing_paths(api_prefix: str) -> frozenset[str]:
    return frozenset(
        f"{api_prefix}/auth/{endpoint}"
        for endpoint in ("register", "resend-otp", "forgot-password")
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limits on code-issuing POST requests."""

    def __init__(
        self,
        app: ASGIApp,
        paths: frozenset[str],
        rate_per_minute: float,
        burst: float,
        storage: RateLimitStorage | None = None,
    ) -> None:
        super().__init__(app)
        self.paths = paths
        self.rate_per_minute = rate_per_minute
        self.burst = burst
        self.storage = storage or RateLimitStorage()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if request.method != "POST" or path not in self.paths:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        key = f"ip:{client}:{path}"
        is_allowed, remaining, reset_seconds = self.storage.consume(
            key, self.rate_per_minute, burst=self.burst
        )

        if not is_allowed:
            retry_after = max(1, int(reset_seconds))
            logger.warning("Rate limit exceeded", key=key, path=path, retry_after=retry_after)
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": f"Too many requests. Try again in {retry_after} seconds",
                },
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(int(self.rate_per_minute)),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(int(self.rate_per_minute))
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
