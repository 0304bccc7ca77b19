import pytest

ADMIN_ENDPOINTS = [
    ("get", "/api/v1/admin/overview"),
    ("get", "/api/v1/admin/doctors"),
    ("get", "/api/v1/admin/services"),
    ("get", "/api/v1/admin/patients"),
    ("get", "/api/v1/admin/appointments"),
]


@pytest.mark.parametrize("method, path", ADMIN_ENDPOINTS)
def test_admin_requires_sign_in(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHENTICATED"


@pytest.mark.parametrize("method, path", ADMIN_ENDPOINTS)
def test_admin_requires_admin_claim(client, user_headers, method, path):
    response = getattr(client, method)(path, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"


def test_forged_token_is_treated_as_signed_out(client):
    response = client.get(
        "/api/v1/admin/doctors", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_doctor_crud(client, admin_headers, cardiology):
    doctor = cardiology["doctor"]
    url = f"/api/v1/admin/doctors/{doctor['id']}"

    assert client.get(f"/api/v1/doctors/{doctor['id']}").json()["name"] == "Dr. Sarah Johnson"

    updated = client.put(
        url,
        json={**doctor, "rating": 4.5, "bio": "Heart specialist"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["rating"] == 4.5
    assert updated.json()["createdAt"] == doctor["createdAt"]

    assert client.delete(url, headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/doctors/{doctor['id']}").status_code == 404
    assert client.delete(url, headers=admin_headers).status_code == 404


def test_non_numeric_experience_is_rejected(client, admin_headers):
    response = client.post(
        "/api/v1/admin/doctors",
        json={
            "name": "Dr. X",
            "specialty": "GP",
            "department": "General",
            "experience": "ten",
        },
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_blank_features_are_dropped(cardiology):
    assert cardiology["service"]["features"] == ["Pre-op consult", "ICU stay"]


def test_inactive_services_are_admin_only(client, admin_headers, cardiology):
    service = cardiology["service"]
    client.put(
        f"/api/v1/admin/services/{service['id']}",
        json={**service, "isActive": False},
        headers=admin_headers,
    )

    public = client.get("/api/v1/services").json()
    admin = client.get("/api/v1/admin/services", headers=admin_headers).json()

    assert public == []
    assert [item["name"] for item in admin] == ["Heart Surgery"]
    assert admin[0]["isActive"] is False

    form = client.get("/api/v1/appointments/form").json()
    assert form["services"] == []


def test_public_doctor_filters(client, admin_headers, cardiology):
    client.post(
        "/api/v1/admin/doctors",
        json={"name": "Dr. Michael Chen", "specialty": "Neurologist", "department": "Neurology"},
        headers=admin_headers,
    )

    def names(**params):
        return sorted(doctor["name"] for doctor in client.get("/api/v1/doctors", params=params).json())

    assert names() == ["Dr. Michael Chen", "Dr. Sarah Johnson"]
    assert names(search="NEURO") == ["Dr. Michael Chen"]
    assert names(department="Cardiology") == ["Dr. Sarah Johnson"]
    assert names(department="all", search="dr.") == ["Dr. Michael Chen", "Dr. Sarah Johnson"]
    assert names(department="Neurology", search="sarah") == []


def test_departments_count_doctors_and_active_services(client, cardiology):
    departments = client.get("/api/v1/departments").json()
    assert departments == [
        {"name": "Cardiology", "doctorCount": 1, "serviceCount": 0},
        {"name": "Surgery", "doctorCount": 0, "serviceCount": 1},
    ]


def test_patient_registry(client, admin_headers):
    created = client.post(
        "/api/v1/admin/patients",
        json={
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-1234",
            "dateOfBirth": "1990-04-02",
            "medicalHistory": ["Asthma"],
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    patient = created.json()

    found = client.get("/api/v1/admin/patients", params={"search": "555-12"}, headers=admin_headers)
    assert [item["id"] for item in found.json()] == [patient["id"]]

    profile = client.get(f"/api/v1/admin/patients/{patient['id']}", headers=admin_headers).json()
    assert profile["dateOfBirth"] == "1990-04-02"
    assert profile["medicalHistory"] == ["Asthma"]

    assert (
        client.delete(f"/api/v1/admin/patients/{patient['id']}", headers=admin_headers).status_code
        == 204
    )
    assert client.get("/api/v1/admin/patients", headers=admin_headers).json() == []


def test_overview(client, admin_headers, cardiology):
    stats = client.get("/api/v1/admin/overview", headers=admin_headers).json()
    assert stats == {
        "totalPatients": 0,
        "appointmentsToday": 0,
        "doctors": 1,
        "activeServices": 1,
        "pendingAppointments": 0,
    }


def test_upload_without_asset_host_is_bad_gateway(client, admin_headers):
    response = client.post(
        "/api/v1/admin/uploads",
        files={"file": ("doctor.png", b"\x89PNG", "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 502
    assert response.json()["error"] == "UPLOAD_FAILED"


def test_session_state(client, admin_headers):
    signed_out = client.get("/api/v1/session").json()
    assert signed_out == {"currentUser": None, "isLoading": False, "isAdmin": False}

    admin = client.get("/api/v1/session", headers=admin_headers).json()
    assert admin["isAdmin"] is True
    assert admin["currentUser"]["uid"] == "admin-1"
    assert admin["currentUser"]["email"] == "admin@hospital.example"


def test_health_and_unknown_routes(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["database"]["healthy"] is True

    missing = client.get("/api/v1/nothing-here")
    assert missing.status_code == 404
    assert missing.json()["error"] == "NOT_FOUND"
    assert missing.headers["X-Request-ID"]


def test_catalog_changes_are_logged(client, admin_headers, monkeypatch):
    from hospital.services.v1 import catalog_service

    events = []

    class Recorder:
        def info(self, msg, **kwargs):
            events.append((msg, kwargs))

    monkeypatch.setattr(catalog_service, "logger", Recorder())
    service = client.post(
        "/api/v1/admin/services",
        json={
            "name": "Eye Exam",
            "description": "Routine check",
            "department": "Ophthalmology",
            "price": 80,
        },
        headers=admin_headers,
    ).json()
    client.delete(f"/api/v1/admin/services/{service['id']}", headers=admin_headers)

    assert [msg for msg, _ in events] == ["Service added", "Service removed"]
    assert events[0][1] == {"service_id": service["id"], "active": True}
