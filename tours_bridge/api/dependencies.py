from fastapi import Request

from tours_bridge.core.config import Settings
from tours_bridge.core.logging import get_logger
from tours_bridge.services.tour_service import TourService

# Initialize logger
logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """
    Dependency for the settings the application was built with.

    Returns:
        Settings: The explicit configuration object held on ``app.state``
    """
    return request.app.state.settings


def get_tour_service(request: Request) -> TourService:
    """
    Dependency for providing the tour service.

    The service, its connector and the shared HTTP client are created once
    in the application lifespan and shared read-only between requests.

    Returns:
        TourService: The application's tour service
    """
    return request.app.state.tour_service
