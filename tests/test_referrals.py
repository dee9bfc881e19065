import pytest

from campadmin.core.errors import ActionFailed
from campadmin.models.referral import IncentiveType, ReferralProgram, ReferralProgramForm, ReferralProgramUpdate
from campadmin.services.referrals import ReferralService, incentive_label, program_payload, share_url

from .conftest import CAMPGROUND_ID

BASE = "https://campeveryday.com"


@pytest.fixture
def referrals(api_client, cache):
    return ReferralService(api_client, cache, BASE)


@pytest.mark.parametrize("incentive_type, value, label", [
    (IncentiveType.PERCENT_DISCOUNT, 10, "10% off"),
    (IncentiveType.AMOUNT_DISCOUNT, 500, "$5.00 off"),
    (IncentiveType.CREDIT, 1250, "$12.50 credit"),
])
def test_incentive_label(incentive_type, value, label):
    assert incentive_label(incentive_type, value) == label


def test_share_url_prefers_slug():
    assert share_url(BASE + "/", ReferralProgram(id="1", code="ABC", link_slug="lake")) == f"{BASE}/r/lake"
    assert share_url(BASE, ReferralProgram(id="1", code="ABC")) == f"{BASE}?ref=ABC"


def test_program_payload_blanks_become_null():
    payload = program_payload(ReferralProgramForm(code=" FALL5 ", incentive_type="credit", incentive_value=500))
    assert payload["code"] == "FALL5"
    assert payload["linkSlug"] is None
    assert payload["incentiveType"] == "credit"
    assert payload["incentiveValue"] == 500


async def test_list_programs_with_labels(referrals):
    views = await referrals.list_programs(CAMPGROUND_ID)
    assert views[0].incentive_label == "10% off"
    assert views[0].share_url == f"{BASE}/r/summer"


async def test_create_program(referrals, cache, fake_api):
    await referrals.list_programs(CAMPGROUND_ID)

    view, toast = await referrals.create_program(CAMPGROUND_ID, ReferralProgramForm(code="FALL5"))

    assert view.program.code == "FALL5"
    assert toast.description == 'Referral code "FALL5" created! Share it to start earning referrals.'
    assert len(await referrals.list_programs(CAMPGROUND_ID)) == 2


async def test_pause_program(referrals, fake_api):
    view, toast = await referrals.update_program(CAMPGROUND_ID, "rp1", ReferralProgramUpdate(is_active=False))
    assert view.program.is_active is False
    assert fake_api.calls("PATCH")[0][2] == {"isActive": False}
    assert toast.title == "Program updated!"


async def test_update_failure(referrals, fake_api):
    fake_api.fail_status = 500
    with pytest.raises(ActionFailed) as exc_info:
        await referrals.update_program(CAMPGROUND_ID, "rp1", ReferralProgramUpdate(is_active=False))
    assert exc_info.value.message == "Failed to update"


async def test_performance(referrals):
    performance = await referrals.performance(CAMPGROUND_ID)
    assert performance.total_bookings == 4
    assert performance.total_revenue_cents == 120000
