"""Referral programs for campground marketing"""

import logging
from typing import List

from ..core.errors import ActionFailed, UpstreamError, UpstreamUnavailable
from ..data.cache import QueryCache
from ..data.client import CampreservClient
from ..forms.site_class_form import cents_to_dollars
from ..models.referral import (
    IncentiveType,
    ReferralPerformance,
    ReferralProgram,
    ReferralProgramForm,
    ReferralProgramUpdate,
    ReferralProgramView,
)
from ..models.toast import Toast

logger = logging.getLogger(__name__)

PROGRAMS_KEY = "referral-programs"
PERFORMANCE_KEY = "referral-performance"

UPSTREAM_ERRORS = (UpstreamError, UpstreamUnavailable)


def incentive_label(incentive_type: IncentiveType, value: int) -> str:
    """Display label such as "10% off" or "$5.00 credit" (amounts in cents)"""
    if incentive_type == IncentiveType.PERCENT_DISCOUNT:
        return f"{value}% off"
    suffix = "credit" if incentive_type == IncentiveType.CREDIT else "off"
    return f"${cents_to_dollars(value)} {suffix}"


def share_url(base_url: str, program: ReferralProgram) -> str:
    base_url = base_url.rstrip("/")
    if program.link_slug:
        return f"{base_url}/r/{program.link_slug}"
    return f"{base_url}?ref={program.code}"


def program_payload(form: ReferralProgramForm) -> dict:
    return {
        "code": form.code.strip(),
        "linkSlug": form.link_slug.strip() or None,
        "source": form.source.strip() or None,
        "channel": form.channel.strip() or None,
        "incentiveType": form.incentive_type.value,
        "incentiveValue": form.incentive_value,
        "isActive": form.is_active,
        "notes": form.notes.strip() or None,
    }


class ReferralService:
    def __init__(self, client: CampreservClient, cache: QueryCache, public_base_url: str):
        self.client = client
        self.cache = cache
        self.public_base_url = public_base_url

    def _view(self, program: ReferralProgram) -> ReferralProgramView:
        return ReferralProgramView(
            program=program,
            incentive_label=incentive_label(program.incentive_type, program.incentive_value),
            share_url=share_url(self.public_base_url, program),
        )

    async def list_programs(self, campground_id: str) -> List[ReferralProgramView]:
        programs = await self.cache.fetch(
            (PROGRAMS_KEY, campground_id),
            lambda: self.client.list_referral_programs(campground_id),
        )
        return [self._view(p) for p in programs]

    async def performance(self, campground_id: str) -> ReferralPerformance:
        return await self.cache.fetch(
            (PERFORMANCE_KEY, campground_id),
            lambda: self.client.get_referral_performance(campground_id),
        )

    async def create_program(self, campground_id: str, form: ReferralProgramForm) -> tuple[ReferralProgramView, Toast]:
        try:
            program = await self.client.create_referral_program(campground_id, program_payload(form))
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Create referral program failed: {e}")
            raise ActionFailed("Failed to create program", e) from e

        self.cache.invalidate((PROGRAMS_KEY, campground_id))
        toast = Toast(
            title="Referral program created",
            description=f'Referral code "{program.code}" created! Share it to start earning referrals.',
        )
        return self._view(program), toast

    async def update_program(
        self, campground_id: str, program_id: str, changes: ReferralProgramUpdate
    ) -> tuple[ReferralProgramView, Toast]:
        payload = changes.model_dump(by_alias=True, exclude_unset=True, mode="json")
        try:
            program = await self.client.update_referral_program(campground_id, program_id, payload)
        except UPSTREAM_ERRORS as e:
            raise ActionFailed("Failed to update", e) from e

        self.cache.invalidate((PROGRAMS_KEY, campground_id))
        return self._view(program), Toast(title="Program updated!")
