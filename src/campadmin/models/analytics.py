"""Analytics read models (pre-aggregated upstream)"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class NpsOverview(CamelModel):
    score: Optional[int] = None
    total_responses: int = 0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0
    promoter_percentage: float = 0.0
    passive_percentage: float = 0.0
    detractor_percentage: float = 0.0
    response_rate: Optional[float] = None
    previous_score: Optional[int] = None
    score_trend: Optional[int] = None


class NpsTrendPoint(CamelModel):
    period: str
    score: Optional[int] = None
    responses: int = 0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0


class NpsSegment(CamelModel):
    segment: str
    score: Optional[int] = None
    responses: int = 0
    promoters: int = 0
    detractors: int = 0


class NpsAnalytics(CamelModel):
    overview: NpsOverview = Field(default_factory=NpsOverview)
    trends: list[NpsTrendPoint] = Field(default_factory=list)
    by_accommodation_type: list[NpsSegment] = Field(default_factory=list)
    # Extra promoter responses needed to reach a world-class score (70)
    promoters_needed: Optional[int] = None
    is_sample: bool = False


class AmenityUsage(CamelModel):
    amenity: str
    bookings: int = 0
    revenue_cents: int = 0
    share: float = 0.0


class AmenityAnalytics(CamelModel):
    amenities: list[AmenityUsage] = Field(default_factory=list)
    total_bookings: int = 0
