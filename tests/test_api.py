def test_health(app_client):
    response = app_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ============== Site classes ==============

def test_list_site_classes(app_client):
    response = app_client.get("/campgrounds/cg1/site-classes")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["active"] == 1
    first = body["classes"][0]
    assert first["siteCount"] == 2
    assert first["siteClass"]["defaultRate"] == 4550
    assert first["siteClass"]["slideOutsAccepted"] == "any"


def test_create_site_class(app_client, fake_api):
    response = app_client.post("/campgrounds/cg1/site-classes", json={
        "name": "Lakefront Cabin",
        "defaultRate": "129.99",
        "siteType": "cabin",
        "amenityTags": ["kitchenette", "fire_pit"],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["toast"]["title"] == "Site class created"
    assert body["data"]["defaultRate"] == 12999
    _, _, sent = fake_api.calls("POST")[0]
    assert sent["amenityTags"] == ["kitchenette", "fire_pit"]
    assert "electricAmps" not in sent


def test_create_invalid_form(app_client, fake_api):
    response = app_client.post("/campgrounds/cg1/site-classes", json={"name": "", "defaultRate": "-5"})

    assert response.status_code == 422
    assert set(response.json()["errors"]) >= {"name", "default_rate"}
    assert fake_api.calls("POST") == []


def test_create_when_api_unreachable(app_client, fake_api):
    fake_api.offline = True
    response = app_client.post("/campgrounds/cg1/site-classes", json={"name": "Tent", "defaultRate": 20})
    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to save class"


def test_create_rejected_upstream(app_client, fake_api):
    fake_api.fail_status = 500
    response = app_client.post("/campgrounds/cg1/site-classes", json={"name": "Tent", "defaultRate": 20})
    assert response.status_code == 502


def test_list_when_api_unreachable(app_client, fake_api):
    fake_api.offline = True
    response = app_client.get("/campgrounds/cg1/site-classes")
    assert response.status_code == 503
    assert response.json()["detail"] == "Service unavailable"


def test_edit_form_prefilled(app_client):
    response = app_client.get("/campgrounds/cg1/site-classes/sc1/form")

    assert response.status_code == 200
    form = response.json()
    assert form["defaultRate"] == "45.50"
    assert form["rigMaxLength"] == ""
    assert form["electricAmps"] == [30, 50]


def test_edit_form_unknown_class(app_client):
    assert app_client.get("/campgrounds/cg1/site-classes/nope/form").status_code == 404


def test_update_site_class(app_client, fake_api):
    form = app_client.get("/campgrounds/cg1/site-classes/sc1/form").json()
    form["maxOccupancy"] = 8

    response = app_client.patch("/campgrounds/cg1/site-classes/sc1", json=form)

    assert response.status_code == 200
    assert response.json()["toast"]["title"] == "Changes saved"
    _, _, sent = fake_api.calls("PATCH")[0]
    assert sent["maxOccupancy"] == 8
    assert sent["rigMaxLength"] is None
    assert sent["slideOutsAccepted"] is None


def test_site_type_defaults(app_client):
    response = app_client.get("/site-types/cabin/defaults")

    assert response.status_code == 200
    body = response.json()
    assert body["form"]["name"] == "Cabin"
    assert body["sameDayCutoffHint"] == 60
    assert "lodging_amenities" in body["sections"]
    assert app_client.get("/site-types/houseboat/defaults").status_code == 422


def test_inline_rate_and_undo(app_client, fake_api):
    response = app_client.post("/campgrounds/cg1/site-classes/sc1/rate", json={"rate": "50"})

    assert response.status_code == 200
    toast = response.json()["toast"]
    assert toast["description"] == "Premium RV rate set to $50.00"
    undo_id = toast["action"]["undoId"]

    undone = app_client.post(f"/undo/{undo_id}")
    assert undone.status_code == 200
    assert undone.json()["toast"]["title"] == "Undone"
    assert undone.json()["toast"]["action"] is None
    assert fake_api.site_classes["sc1"]["defaultRate"] == 4550

    assert app_client.post(f"/undo/{undo_id}").status_code == 410


def test_inline_rate_invalid_is_cancelled(app_client, fake_api):
    response = app_client.post("/campgrounds/cg1/site-classes/sc1/rate", json={"rate": "abc"})

    assert response.status_code == 200
    assert response.json()["ok"] is False
    assert fake_api.calls("PATCH") == []


def test_delete_impact(app_client):
    body = app_client.get("/campgrounds/cg1/site-classes/sc1/delete-impact").json()
    assert body["affectedSites"] == 2
    assert body["prompt"].startswith('Are you sure you want to delete "Premium RV"?')


def test_delete_needs_confirmation(app_client, fake_api):
    response = app_client.delete("/campgrounds/cg1/site-classes/sc1")

    assert response.status_code == 409
    assert response.json()["affectedSites"] == 2
    assert fake_api.calls("DELETE") == []

    confirmed = app_client.delete("/campgrounds/cg1/site-classes/sc1", params={"confirm": "true"})
    assert confirmed.status_code == 200
    assert confirmed.json()["toast"]["title"] == "Site class deleted"
    sites = app_client.get("/campgrounds/cg1/sites").json()
    assert [s["id"] for s in sites if s["siteClassId"] is None] == ["s1", "s2", "s4"]


# ============== Schedule templates ==============

def test_preview_week(app_client):
    response = app_client.get(
        "/campgrounds/cg1/schedule-templates/t1/preview", params={"weekStart": "2026-10-25"}
    )
    assert response.status_code == 200
    assert [s["shiftDate"] for s in response.json()] == ["2026-10-26", "2026-10-27"]


def test_apply_template(app_client, fake_api):
    response = app_client.post(
        "/campgrounds/cg1/schedule-templates/t1/apply",
        json={"weekStartDate": "2026-11-01", "createdBy": "u9"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["count"] == 2
    assert body["toast"]["title"] == "Created 2 shifts from template!"
    assert fake_api.calls("POST")[0][2]["weekStartDate"] == "2026-11-01"


def test_recurring_settings(app_client):
    response = app_client.put(
        "/campgrounds/cg1/schedule-templates/t1/recurring",
        json={"enabled": True, "recurringDay": 0, "weeksAhead": 1},
    )
    assert response.status_code == 200
    assert response.json()["toast"]["description"] == "Runs every Sunday, 1 week ahead"

    bad = app_client.put(
        "/campgrounds/cg1/schedule-templates/t1/recurring",
        json={"enabled": True, "recurringDay": 0, "weeksAhead": 6},
    )
    assert bad.status_code == 422


def test_create_template_without_shifts(app_client):
    response = app_client.post("/campgrounds/cg1/schedule-templates", json={"name": "Empty"})
    assert response.status_code == 422
    assert "shifts" in response.json()["errors"]


# ============== Referrals and analytics ==============

def test_referral_programs(app_client):
    programs = app_client.get("/campgrounds/cg1/referral-programs").json()
    assert programs[0]["incentiveLabel"] == "10% off"

    created = app_client.post(
        "/campgrounds/cg1/referral-programs",
        json={"code": "FALL5", "incentiveType": "amount_discount", "incentiveValue": 500},
    )
    assert created.status_code == 201
    assert created.json()["data"]["incentiveLabel"] == "$5.00 off"

    paused = app_client.patch("/campgrounds/cg1/referral-programs/rp1", json={"isActive": False})
    assert paused.json()["data"]["program"]["isActive"] is False


def test_nps_dashboard(app_client):
    response = app_client.get("/analytics/nps", params={"range": "last_30_days"})
    assert response.status_code == 200
    assert response.json()["overview"]["score"] == 42
    assert app_client.get("/analytics/nps", params={"range": "forever"}).status_code == 400


def test_nps_sample_when_unavailable(app_client, fake_api):
    fake_api.offline = True
    response = app_client.get("/analytics/nps")
    assert response.status_code == 200
    assert response.json()["isSample"] is True


def test_referral_update_sends_only_known_fields(app_client, fake_api):
    response = app_client.patch(
        "/campgrounds/cg1/referral-programs/rp1",
        json={"isActive": False, "incentive_value": 15, "bogus": "x"},
    )

    assert response.status_code == 200
    assert fake_api.calls("PATCH")[0][2] == {"isActive": False, "incentiveValue": 15}


def test_huge_rate_rejected_not_crashed(app_client, fake_api):
    response = app_client.post("/campgrounds/cg1/site-classes", json={"name": "X", "defaultRate": "1e30"})
    assert response.status_code == 422
    assert response.json()["errors"]["default_rate"] == "is too large"

    inline = app_client.post("/campgrounds/cg1/site-classes/sc1/rate", json={"rate": "1e30"})
    assert inline.status_code == 200
    assert inline.json()["ok"] is False
    assert fake_api.calls("POST") == []
    assert fake_api.calls("PATCH") == []


def test_failed_undo_can_be_retried(app_client, fake_api):
    toast = app_client.post("/campgrounds/cg1/site-classes/sc1/rate", json={"rate": "50"}).json()["toast"]
    undo_id = toast["action"]["undoId"]

    fake_api.offline = True
    assert app_client.post(f"/undo/{undo_id}").status_code == 503

    fake_api.offline = False
    retried = app_client.post(f"/undo/{undo_id}")
    assert retried.status_code == 200
    assert fake_api.site_classes["sc1"]["defaultRate"] == 4550
