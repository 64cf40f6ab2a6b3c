"""Rate limiting singleton using slowapi, plus its JSON 429 handler."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

RETRY_AFTER_SECONDS = 60


def _get_real_ip(request: Request) -> str:
    """Extract client IP, supporting X-Forwarded-For behind a reverse proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


limiter = Limiter(key_func=_get_real_ip)


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    return JSONResponse(
        {"error": "Too many requests", "detail": str(exc.detail), "retry_after": RETRY_AFTER_SECONDS},
        status_code=429,
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )
