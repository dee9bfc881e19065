"""Service wiring shared by the routers"""

import logging
from typing import Optional

from ..core.config import get_settings
from ..data.cache import QueryCache
from ..data.client import CampreservClient
from ..services.analytics import AnalyticsService
from ..services.referrals import ReferralService
from ..services.schedule_templates import ScheduleTemplateService
from ..services.site_classes import SiteClassService
from ..services.undo import UndoRegistry

logger = logging.getLogger(__name__)


class Services:
    """Container for the API client, cache and domain services"""

    def __init__(self, client: CampreservClient, cache_ttl_seconds: float, public_base_url: str):
        self.client = client
        self.cache = QueryCache(ttl_seconds=cache_ttl_seconds)
        self.undo = UndoRegistry()
        self.site_classes = SiteClassService(client, self.cache, self.undo)
        self.schedule = ScheduleTemplateService(client, self.cache)
        self.referrals = ReferralService(client, self.cache, public_base_url)
        self.analytics = AnalyticsService(client, self.cache)


_services: Optional[Services] = None


def configure(client: Optional[CampreservClient] = None) -> Services:
    """Create the service container (singleton)"""
    global _services
    settings = get_settings()
    if client is None:
        client = CampreservClient.from_settings(settings)
    _services = Services(client, settings.cache_ttl_seconds, settings.public_base_url)
    logger.info(f"Using campground API at {settings.api_base_url}")
    return _services


def get_services() -> Services:
    if _services is None:
        return configure()
    return _services


async def shutdown() -> None:
    global _services
    if _services is not None:
        await _services.client.aclose()
        _services = None
