"""HTTP client for the campground REST API"""

import logging
from datetime import date
from typing import Any, List, Optional

import httpx

from ..core.config import Settings
from ..core.errors import UpstreamError, UpstreamUnavailable
from ..models.analytics import AmenityAnalytics, NpsAnalytics
from ..models.referral import ReferralPerformance, ReferralProgram
from ..models.schedule import ScheduleTemplate
from ..models.site import Site
from ..models.site_class import SiteClass

logger = logging.getLogger(__name__)


class CampreservClient:
    """Typed facade over the campground REST API.

    Payloads are camelCase JSON and money fields are integer cents. HTTP and
    transport failures surface as ``UpstreamError`` / ``UpstreamUnavailable``;
    nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "CampreservClient":
        return cls(settings.api_base_url, settings.api_token, settings.request_timeout, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CampreservClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{method} {path} failed with {e.response.status_code}")
            raise UpstreamError(e.response.status_code, e.response.text) from e
        except httpx.RequestError as e:
            logger.error(f"{method} {path} unreachable: {e}")
            raise UpstreamUnavailable(f"Campground API unavailable: {e}") from e

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ============== Site classes ==============

    async def get_site_classes(self, campground_id: str) -> List[SiteClass]:
        data = await self._request("GET", f"/campgrounds/{campground_id}/site-classes")
        return [SiteClass.model_validate(item) for item in data or []]

    async def get_site_class(self, class_id: str) -> SiteClass:
        data = await self._request("GET", f"/site-classes/{class_id}")
        return SiteClass.model_validate(data)

    async def create_site_class(self, campground_id: str, payload: dict) -> SiteClass:
        data = await self._request(
            "POST", f"/campgrounds/{campground_id}/site-classes",
            json={**payload, "campgroundId": campground_id},
        )
        return SiteClass.model_validate(data)

    async def update_site_class(self, class_id: str, payload: dict) -> SiteClass:
        data = await self._request("PATCH", f"/site-classes/{class_id}", json=payload)
        return SiteClass.model_validate(data)

    async def delete_site_class(self, class_id: str) -> None:
        await self._request("DELETE", f"/site-classes/{class_id}")

    # ============== Sites ==============

    async def get_sites(self, campground_id: str) -> List[Site]:
        data = await self._request("GET", f"/campgrounds/{campground_id}/sites")
        return [Site.model_validate(item) for item in data or []]

    # ============== Staff schedule templates ==============

    async def get_schedule_templates(self, campground_id: str) -> List[ScheduleTemplate]:
        data = await self._request("GET", "/staff/templates", params={"campgroundId": campground_id})
        return [ScheduleTemplate.model_validate(item) for item in data or []]

    async def create_schedule_template(self, payload: dict) -> ScheduleTemplate:
        data = await self._request("POST", "/staff/templates", json=payload)
        return ScheduleTemplate.model_validate(data)

    async def update_schedule_template(self, template_id: str, payload: dict) -> ScheduleTemplate:
        data = await self._request("PATCH", f"/staff/templates/{template_id}", json=payload)
        return ScheduleTemplate.model_validate(data)

    async def delete_schedule_template(self, template_id: str) -> None:
        await self._request("DELETE", f"/staff/templates/{template_id}")

    async def apply_schedule_template(self, template_id: str, week_start: date, created_by: str) -> int:
        """Generate shifts for the week; returns the created-shift count"""
        data = await self._request(
            "POST", f"/staff/templates/{template_id}/apply",
            json={"weekStartDate": week_start.isoformat(), "createdBy": created_by},
        )
        return int((data or {}).get("count", 0))

    # ============== Referral programs ==============

    async def list_referral_programs(self, campground_id: str) -> List[ReferralProgram]:
        data = await self._request("GET", f"/campgrounds/{campground_id}/referral-programs")
        return [ReferralProgram.model_validate(item) for item in data or []]

    async def create_referral_program(self, campground_id: str, payload: dict) -> ReferralProgram:
        data = await self._request("POST", f"/campgrounds/{campground_id}/referral-programs", json=payload)
        return ReferralProgram.model_validate(data)

    async def update_referral_program(self, campground_id: str, program_id: str, payload: dict) -> ReferralProgram:
        data = await self._request(
            "PATCH", f"/campgrounds/{campground_id}/referral-programs/{program_id}", json=payload
        )
        return ReferralProgram.model_validate(data)

    async def get_referral_performance(self, campground_id: str) -> ReferralPerformance:
        data = await self._request("GET", f"/campgrounds/{campground_id}/reports/referrals")
        return ReferralPerformance.model_validate(data or {})

    # ============== Analytics ==============

    async def get_nps_analytics(self, date_range: str) -> NpsAnalytics:
        data = await self._request("GET", "/admin/platform-analytics/nps", params={"range": date_range})
        return NpsAnalytics.model_validate(data or {})

    async def get_amenity_analytics(self, date_range: str) -> AmenityAnalytics:
        data = await self._request("GET", "/admin/platform-analytics/amenities", params={"range": date_range})
        return AmenityAnalytics.model_validate(data or {})
