"""FastAPI dependencies for the dashboard feature."""

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.features.dashboard.service import DashboardReader


def get_dashboard_reader(settings: Settings = Depends(get_settings)) -> DashboardReader:
    """Build a reader for the current request.

    Routes receive the reader through this dependency so tests can swap it
    via ``app.dependency_overrides``.
    """
    return DashboardReader(settings=settings)
