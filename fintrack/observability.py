# fintrack/observability.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op when the host (uvicorn, pytest) already configured logging
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()

        # Resolve the user before the handler runs; logout destroys the token
        store = getattr(request.app.state, "session_store", None)
        cookie_name = request.app.state.settings.session_cookie
        token = request.cookies.get(cookie_name)
        user_id = store.get(token) if (store is not None and token) else None

        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logging.getLogger("fintrack.req").info(
            "%s %s -> %s in %.1fms user=%s",
            request.method,
            request.url.path,
            response.status_code,
            ms,
            user_id,
        )
        return response
