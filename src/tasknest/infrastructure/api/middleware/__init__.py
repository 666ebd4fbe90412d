"""HTTP middleware."""

from tasknest.infrastructure.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
    code_issuing_paths,
)
from tasknest.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage

__all__ = ["RateLimitMiddleware", "RateLimitStorage", "code_issuing_paths"]
