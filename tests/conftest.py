"""Shared fixtures: an in-memory campground API behind httpx.MockTransport"""

import json
import re
from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from campadmin.api import deps
from campadmin.data.cache import QueryCache
from campadmin.data.client import CampreservClient
from campadmin.services.schedule_templates import ScheduleTemplateService
from campadmin.services.site_classes import SiteClassService
from campadmin.services.undo import UndoRegistry

CAMPGROUND_ID = "cg1"
BASE_URL = "http://api.test/api"


def site_class_record(**overrides) -> dict:
    record = {
        "id": "sc1",
        "campgroundId": CAMPGROUND_ID,
        "name": "Premium RV",
        "description": None,
        "siteType": "rv",
        "defaultRate": 4550,
        "maxOccupancy": 6,
        "rigMaxLength": None,
        "minNights": None,
        "maxNights": None,
        "hookupsPower": True,
        "hookupsWater": True,
        "hookupsSewer": False,
        "rvOrientation": "back_in",
        "electricAmps": [30, 50],
        "equipmentTypes": [],
        "slideOutsAccepted": None,
        "amenityTags": ["fire_pit"],
        "petFriendly": True,
        "accessible": False,
        "photos": [],
        "policyVersion": None,
        "isActive": True,
    }
    record.update(overrides)
    return record


class FakeCampgroundApi:
    """Just enough of the campground REST API for the admin flows"""

    def __init__(self):
        self.site_classes = {
            "sc1": site_class_record(),
            "sc2": site_class_record(
                id="sc2", name="Lakeside Tent", siteType="tent", defaultRate=2500,
                electricAmps=[], rvOrientation=None, isActive=False,
            ),
        }
        self.sites = [
            {"id": "s1", "campgroundId": CAMPGROUND_ID, "siteClassId": "sc1", "name": "A1", "siteNumber": "A1"},
            {"id": "s2", "campgroundId": CAMPGROUND_ID, "siteClassId": "sc1", "name": "A2", "siteNumber": "A2"},
            {"id": "s3", "campgroundId": CAMPGROUND_ID, "siteClassId": "sc2", "name": "T1", "siteNumber": "T1",
             "siteType": "tent"},
            {"id": "s4", "campgroundId": CAMPGROUND_ID, "siteClassId": None, "name": "B1", "siteNumber": "B1"},
        ]
        self.templates = {
            "t1": {
                "id": "t1",
                "campgroundId": CAMPGROUND_ID,
                "name": "Summer weekdays",
                "isActive": True,
                "shifts": [
                    {"dayOfWeek": 1, "startTime": "09:00", "endTime": "17:00", "userId": "u1", "roleCode": "front_desk"},
                    {"dayOfWeek": 2, "startTime": "08:00", "endTime": "12:30", "userId": "u2"},
                    {"dayOfWeek": 3, "startTime": "09:00", "endTime": "17:00"},
                ],
            }
        }
        self.programs = {
            "rp1": {"id": "rp1", "code": "SUMMER10", "linkSlug": "summer", "incentiveType": "percent_discount",
                    "incentiveValue": 10, "isActive": True},
        }
        self.nps = {"overview": {"score": 42, "totalResponses": 120, "promoters": 60, "passives": 30,
                                 "detractors": 30}}
        self.requests: list[tuple[str, str, Optional[dict]]] = []
        self.fail_status: Optional[int] = None
        self.offline = False
        self._next_id = 100

    def calls(self, method: str, path_prefix: str = "") -> list:
        return [r for r in self.requests if r[0] == method and r[1].startswith(path_prefix)]

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}{self._next_id}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path.removeprefix("/api")
        self.requests.append((request.method, path, body))

        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_status:
            return httpx.Response(self.fail_status, json={"message": "upstream failure"})

        method = request.method
        if m := re.fullmatch(r"/campgrounds/([^/]+)/site-classes", path):
            if method == "GET":
                return httpx.Response(200, json=[c for c in self.site_classes.values()
                                                 if c["campgroundId"] == m.group(1)])
            record = site_class_record(id=self._new_id("sc"), **body)
            self.site_classes[record["id"]] = record
            return httpx.Response(201, json=record)

        if m := re.fullmatch(r"/site-classes/([^/]+)", path):
            record = self.site_classes.get(m.group(1))
            if record is None:
                return httpx.Response(404, json={"message": "Site class not found"})
            if method == "GET":
                return httpx.Response(200, json=record)
            if method == "PATCH":
                record.update(body)
                return httpx.Response(200, json=record)
            del self.site_classes[m.group(1)]
            for site in self.sites:
                if site["siteClassId"] == m.group(1):
                    site["siteClassId"] = None
            return httpx.Response(204)

        if m := re.fullmatch(r"/campgrounds/([^/]+)/sites", path):
            return httpx.Response(200, json=[s for s in self.sites if s["campgroundId"] == m.group(1)])

        if path == "/staff/templates":
            if method == "GET":
                return httpx.Response(200, json=list(self.templates.values()))
            record = {"id": self._new_id("t"), "isActive": True, **body}
            self.templates[record["id"]] = record
            return httpx.Response(201, json=record)

        if m := re.fullmatch(r"/staff/templates/([^/]+)/apply", path):
            template = self.templates[m.group(1)]
            count = sum(1 for s in template["shifts"] if s.get("userId"))
            return httpx.Response(200, json={"count": count, "weekStartDate": body["weekStartDate"]})

        if m := re.fullmatch(r"/staff/templates/([^/]+)", path):
            if method == "DELETE":
                self.templates.pop(m.group(1), None)
                return httpx.Response(204)
            self.templates[m.group(1)].update(body)
            return httpx.Response(200, json=self.templates[m.group(1)])

        if m := re.fullmatch(r"/campgrounds/([^/]+)/referral-programs", path):
            if method == "GET":
                return httpx.Response(200, json=list(self.programs.values()))
            record = {"id": self._new_id("rp"), **body}
            self.programs[record["id"]] = record
            return httpx.Response(201, json=record)

        if m := re.fullmatch(r"/campgrounds/([^/]+)/referral-programs/([^/]+)", path):
            self.programs[m.group(2)].update(body)
            return httpx.Response(200, json=self.programs[m.group(2)])

        if re.fullmatch(r"/campgrounds/([^/]+)/reports/referrals", path):
            return httpx.Response(200, json={"totalBookings": 4, "totalRevenueCents": 120000})

        if path == "/admin/platform-analytics/nps":
            return httpx.Response(200, json=self.nps)

        if path == "/admin/platform-analytics/amenities":
            return httpx.Response(200, json={"amenities": [{"amenity": "wifi", "bookings": 12}], "totalBookings": 12})

        return httpx.Response(404, json={"message": f"No route {method} {path}"})


@pytest.fixture
def fake_api() -> FakeCampgroundApi:
    return FakeCampgroundApi()


@pytest.fixture
def api_client(fake_api) -> CampreservClient:
    return CampreservClient(BASE_URL, token="secret", transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def undo() -> UndoRegistry:
    return UndoRegistry()


@pytest.fixture
def site_classes(api_client, cache, undo) -> SiteClassService:
    return SiteClassService(api_client, cache, undo)


@pytest.fixture
def schedule(api_client, cache) -> ScheduleTemplateService:
    return ScheduleTemplateService(api_client, cache)


@pytest.fixture
def app_client(fake_api):
    from campadmin.main import app

    deps.configure(CampreservClient(BASE_URL, transport=httpx.MockTransport(fake_api.handler)))
    with TestClient(app) as client:
        yield client
