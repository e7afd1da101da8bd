# ===== app/api/middleware/rate_limit_middleware.py =====
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import time

WINDOW_SECONDS = 60.0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client rate limiting for booking writes.

    Booking endpoints accept anonymous callers, so clients are keyed by IP.
    Clients idle for a full window are forgotten, which keeps the map bounded
    by the number of recently active IPs.
    State is per process; with several workers each keeps its own window.
    """

    def __init__(self, app, requests_per_minute: int = 10, path_prefix: str = "/api/v1/bookings", clock=time.time):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.path_prefix = path_prefix
        self.clock = clock
        self.request_times = {}
        self.last_sweep = clock()

    async def dispatch(self, request: Request, call_next):
        # Only apply to booking writes
        if request.method != "POST" or not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        current_time = self.clock()

        if current_time - self.last_sweep >= WINDOW_SECONDS:
            self._evict_idle_clients(current_time)

        # Remove old timestamps (older than 1 minute)
        recent = [
            t for t in self.request_times.get(client_id, [])
            if current_time - t < WINDOW_SECONDS
        ]

        if len(recent) >= self.requests_per_minute:
            self.request_times[client_id] = recent
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many booking requests. Please wait a minute and try again.",
                    "retry_after": 60
                },
                headers={"Retry-After": "60"}
            )

        recent.append(current_time)
        self.request_times[client_id] = recent

        return await call_next(request)

    def _evict_idle_clients(self, current_time: float):
        idle = [
            client_id for client_id, times in self.request_times.items()
            if not times or current_time - times[-1] >= WINDOW_SECONDS
        ]
        for client_id in idle:
            del self.request_times[client_id]
        self.last_sweep = current_time
