"""
Fan-Out Gateway FastAPI Application.

Endpoints:
- GET/POST /api/1 - fan out to api/2 and api/3 under a shared deadline
- GET/POST /api/2, /api/3 - simulated delayed work
- GET /health - liveness
- GET /metrics - Prometheus metrics

Environment Variables:
    DOWNSTREAM_BASE_URL: base address of api/2 and api/3 (default: http://localhost:8080)
    DEADLINE_MS: shared fan-out deadline in milliseconds (default: 900)
    LOG_LEVEL: logging level (default: INFO)

Usage:
    # Development
    $ uvicorn apps.fanout_gateway.main:app --reload --port 8080

    # Production
    $ uvicorn apps.fanout_gateway.main:app --host 0.0.0.0 --port 8080
"""

from apps.fanout_gateway.app_factory import create_app
from apps.fanout_gateway.config import get_settings
from libs.common.logging import configure_logging

settings = get_settings()
configure_logging(service_name=settings.service_name, log_level=settings.log_level)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
