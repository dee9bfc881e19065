"""Read-only analytics: NPS and amenity usage"""

import logging
import math
from typing import Optional

from ..core.errors import UpstreamError, UpstreamUnavailable
from ..data.cache import QueryCache
from ..data.client import CampreservClient
from ..models.analytics import AmenityAnalytics, NpsAnalytics

logger = logging.getLogger(__name__)

DATE_RANGES = ("last_30_days", "last_90_days", "last_12_months", "year_to_date", "all_time")

WORLD_CLASS_NPS = 70


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def nps_score(promoters: int, detractors: int, total: int) -> Optional[int]:
    """Percent promoters minus percent detractors; None without responses"""
    if total <= 0:
        return None
    return _round_half_up((promoters - detractors) / total * 100)


def promoters_needed(promoters: int, detractors: int, total: int, target: int) -> Optional[int]:
    """Additional promoter responses needed to reach target NPS.

    Solves (promoters + x - detractors) / (total + x) = target / 100 for x.
    Returns None when the target cannot be reached (100 or more).
    """
    current = nps_score(promoters, detractors, total)
    if current is None:
        return None
    if current >= target:
        return 0
    ratio = target / 100
    if ratio >= 1:
        return None
    needed = math.ceil((ratio * total - promoters + detractors) / (1 - ratio))
    return max(0, needed)


class AnalyticsService:
    def __init__(self, client: CampreservClient, cache: QueryCache):
        self.client = client
        self.cache = cache

    async def nps(self, date_range: str = "last_12_months") -> NpsAnalytics:
        """NPS dashboard data; flagged as sample when nothing is available"""
        if date_range not in DATE_RANGES:
            raise ValueError(f"Unknown date range {date_range!r}")
        try:
            data = await self.cache.fetch(
                ("analytics", "nps", date_range),
                lambda: self.client.get_nps_analytics(date_range),
            )
        except (UpstreamError, UpstreamUnavailable) as e:
            logger.warning(f"Failed to fetch NPS data: {e}")
            return NpsAnalytics(is_sample=True)

        overview = data.overview
        if overview.total_responses <= 0:
            return NpsAnalytics(is_sample=True)

        score = overview.score
        if score is None:
            score = nps_score(overview.promoters, overview.detractors, overview.total_responses)
        needed = promoters_needed(overview.promoters, overview.detractors, overview.total_responses, WORLD_CLASS_NPS)
        return data.model_copy(update={
            "overview": overview.model_copy(update={"score": score}),
            "promoters_needed": needed,
        })

    async def amenities(self, date_range: str = "last_12_months") -> AmenityAnalytics:
        if date_range not in DATE_RANGES:
            raise ValueError(f"Unknown date range {date_range!r}")
        return await self.cache.fetch(
            ("analytics", "amenities", date_range),
            lambda: self.client.get_amenity_analytics(date_range),
        )
