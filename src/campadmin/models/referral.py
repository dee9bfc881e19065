"""Referral program models (DTO)"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class IncentiveType(str, Enum):
    PERCENT_DISCOUNT = "percent_discount"
    AMOUNT_DISCOUNT = "amount_discount"
    CREDIT = "credit"


class ReferralProgram(CamelModel):
    id: str
    code: str
    link_slug: Optional[str] = None
    source: Optional[str] = None
    channel: Optional[str] = None
    incentive_type: IncentiveType = IncentiveType.PERCENT_DISCOUNT
    # Percent for percent_discount, cents otherwise
    incentive_value: int = Field(0, ge=0)
    is_active: bool = True
    notes: Optional[str] = None


class ReferralProgramForm(CamelModel):
    code: str = Field(..., min_length=1)
    link_slug: str = ""
    source: str = ""
    channel: str = ""
    incentive_type: IncentiveType = IncentiveType.PERCENT_DISCOUNT
    incentive_value: int = Field(10, ge=0)
    is_active: bool = True
    notes: str = ""


class ReferralProgramUpdate(CamelModel):
    """Partial update; only fields present in the request are sent"""
    code: Optional[str] = Field(None, min_length=1)
    link_slug: Optional[str] = None
    source: Optional[str] = None
    channel: Optional[str] = None
    incentive_type: Optional[IncentiveType] = None
    incentive_value: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class ReferralProgramView(CamelModel):
    program: ReferralProgram
    incentive_label: str
    share_url: str


class ProgramPerformance(CamelModel):
    program_id: Optional[str] = None
    program_code: Optional[str] = None
    bookings: int = 0
    revenue_cents: int = 0
    discount_cents: int = 0


class ReferralPerformance(CamelModel):
    total_bookings: int = 0
    total_revenue_cents: int = 0
    total_referral_discount_cents: int = 0
    conversion_rate: Optional[float] = None
    programs: list[ProgramPerformance] = Field(default_factory=list)
