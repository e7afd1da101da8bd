from helpers import auth_headers


SETTINGS = {
    "weeklySchedule": {
        "monday": {"enabled": True, "slots": [{"start_time": "09:00", "end_time": "10:00"}]},
        "wednesday": {"enabled": True, "slots": [
            {"start_time": "13:00", "end_time": "14:00"},
            {"start_time": "10:00", "end_time": "11:00"},
        ]},
    },
    "dateExceptions": [
        {"date": "2024-06-03", "type": "closed"},
        {"date": "2024-06-08", "type": "custom", "slots": [{"start_time": "11:00", "end_time": "12:00"}]},
    ],
}


def test_admin_replaces_and_reads_settings(client, admin):
    headers = auth_headers(admin)

    saved = client.put("/api/v1/admin/availability", json=SETTINGS, headers=headers)

    assert saved.status_code == 200
    assert saved.json() == {"success": True, "weeklyRules": 3, "dateExceptions": 2}

    settings = client.get("/api/v1/admin/availability", headers=headers).json()
    assert settings["weeklySchedule"]["wednesday"]["slots"] == [
        {"start_time": "10:00", "end_time": "11:00"},
        {"start_time": "13:00", "end_time": "14:00"},
    ]
    assert settings["weeklySchedule"]["sunday"] == {"enabled": False, "slots": []}
    assert [e["date"] for e in settings["dateExceptions"]] == ["2024-06-03", "2024-06-08"]

    closed = client.get("/api/v1/availability/time-slots", params={"date": "2024-06-03"}).json()
    special = client.get("/api/v1/availability/time-slots", params={"date": "2024-06-08"}).json()
    weekly = client.get("/api/v1/availability/time-slots", params={"date": "2024-06-05"}).json()
    assert closed["timeSlots"] == []
    assert special["timeSlots"] == [{"time": "11:00", "endTime": "12:00", "available": True}]
    assert [s["time"] for s in weekly["timeSlots"]] == ["10:00", "13:00"]


def test_partial_update_keeps_other_section(client, admin):
    headers = auth_headers(admin)
    client.put("/api/v1/admin/availability", json=SETTINGS, headers=headers)

    response = client.put("/api/v1/admin/availability", json={"dateExceptions": []}, headers=headers)

    assert response.json() == {"success": True, "dateExceptions": 0}
    settings = client.get("/api/v1/admin/availability", headers=headers).json()
    assert settings["weeklySchedule"]["monday"]["enabled"] is True
    assert settings["dateExceptions"] == []


def test_invalid_slot_is_rejected(client, admin):
    body = {"weeklySchedule": {"monday": {"enabled": True, "slots": [{"start_time": "10:00", "end_time": "09:00"}]}}}

    response = client.put("/api/v1/admin/availability", json=body, headers=auth_headers(admin))

    assert response.status_code == 400


def test_customers_cannot_edit_schedule(client, customer):
    headers = auth_headers(customer)

    assert client.get("/api/v1/admin/availability", headers=headers).status_code == 403
    assert client.put("/api/v1/admin/availability", json=SETTINGS, headers=headers).status_code == 403
