"""Web adapter: FastAPI trigger surface."""

from randoping.adapters.web.routes import ping_router
from randoping.adapters.web.server import build_service, create_app

__all__ = ["ping_router", "build_service", "create_app"]
