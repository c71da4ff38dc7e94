import pytest


@pytest.fixture()
def employer(make_client):
    return make_client("acme", "employer", name="Acme Corp")


@pytest.fixture()
def seeker(make_client):
    return make_client("sam", "seeker", name="Sam Seeker")


@pytest.fixture()
def job(employer, job_payload):
    resp = employer.post("/api/jobs", json=job_payload)
    assert resp.status_code == 201
    return resp.json()


def _apply(client, job_id, **extra):
    return client.post("/api/applications", json={"job_id": job_id, **extra})


class TestApply:
    def test_apply_forces_server_fields(self, seeker, job):
        me = seeker.get("/api/user").json()

        resp = _apply(seeker, job["id"], cover_letter="Hire me", seeker_id=999, status="accepted")

        assert resp.status_code == 201
        data = resp.json()
        assert data["seeker_id"] == me["id"]
        assert data["status"] == "applied"
        assert data["cover_letter"] == "Hire me"
        assert data["applied_at"]

    def test_apply_requires_login(self, client, job):
        assert _apply(client, job["id"]).status_code == 401

    def test_employer_cannot_apply(self, employer, job):
        resp = _apply(employer, job["id"])
        assert resp.status_code == 403
        assert resp.json()["message"] == "Only job seekers can apply for jobs"

    def test_apply_validation(self, seeker):
        resp = seeker.post("/api/applications", json={"cover_letter": "no job id"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid application data"

    def test_apply_to_missing_job(self, seeker):
        assert _apply(seeker, 4040).status_code == 404

    def test_apply_to_inactive_job(self, seeker, employer, job):
        employer.delete(f"/api/jobs/{job['id']}")
        resp = _apply(seeker, job["id"])
        assert resp.status_code == 404
        assert resp.json()["message"] == "Job not found or no longer active"

    def test_duplicate_application_rejected(self, seeker, employer, job):
        assert _apply(seeker, job["id"]).status_code == 201

        resp = _apply(seeker, job["id"], cover_letter="again")

        assert resp.status_code == 400
        assert resp.json()["message"] == "You have already applied for this job"
        mine = seeker.get("/api/applications/seeker").json()
        assert len([a for a in mine if a["job_id"] == job["id"]]) == 1
        assert len(employer.get(f"/api/applications/job/{job['id']}").json()) == 1


class TestListing:
    def test_seeker_applications_include_job(self, seeker, job):
        _apply(seeker, job["id"])
        resp = seeker.get("/api/applications/seeker")
        assert resp.status_code == 200
        [entry] = resp.json()
        assert entry["job"]["id"] == job["id"]
        assert entry["job"]["title"] == job["title"]

    def test_seeker_applications_require_login(self, client):
        assert client.get("/api/applications/seeker").status_code == 401

    def test_job_applications_include_seeker(self, seeker, employer, job):
        seeker.post("/api/profile/seeker", json={"title": "Tester", "skills": ["pytest"]})
        _apply(seeker, job["id"])

        resp = employer.get(f"/api/applications/job/{job['id']}")

        assert resp.status_code == 200
        [entry] = resp.json()
        assert entry["seeker"]["name"] == "Sam Seeker"
        assert "password" not in entry["seeker"]
        assert entry["seeker_profile"]["skills"] == ["pytest"]

    def test_job_applications_without_profile(self, seeker, employer, job):
        _apply(seeker, job["id"])
        [entry] = employer.get(f"/api/applications/job/{job['id']}").json()
        assert entry["seeker_profile"] is None

    def test_job_applications_owner_only(self, make_client, job):
        other = make_client("globex", "employer")
        assert other.get(f"/api/applications/job/{job['id']}").status_code == 403
        assert other.get("/api/applications/job/999").status_code == 404

    def test_job_applications_employer_only(self, seeker, job):
        assert seeker.get(f"/api/applications/job/{job['id']}").status_code == 403


class TestStatus:
    @pytest.fixture()
    def application(self, seeker, job):
        return _apply(seeker, job["id"]).json()

    def test_bogus_status_rejected(self, employer, seeker, application):
        resp = employer.put(f"/api/applications/{application['id']}/status", json={"status": "bogus"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid application status"
        [mine] = seeker.get("/api/applications/seeker").json()
        assert mine["status"] == "applied"

    def test_missing_status_rejected(self, employer, application):
        resp = employer.put(f"/api/applications/{application['id']}/status", json={})
        assert resp.status_code == 400

    def test_status_update_persists(self, employer, seeker, application):
        resp = employer.put(f"/api/applications/{application['id']}/status", json={"status": "interview"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "interview"
        [mine] = seeker.get("/api/applications/seeker").json()
        assert mine["status"] == "interview"

    def test_status_update_not_found(self, employer):
        resp = employer.put("/api/applications/999/status", json={"status": "reviewing"})
        assert resp.status_code == 404

    def test_status_update_by_other_employer(self, make_client, application):
        other = make_client("globex", "employer")
        resp = other.put(f"/api/applications/{application['id']}/status", json={"status": "accepted"})
        assert resp.status_code == 403

    def test_status_update_by_seeker(self, seeker, application):
        resp = seeker.put(f"/api/applications/{application['id']}/status", json={"status": "accepted"})
        assert resp.status_code == 403


def test_hiring_scenario(make_client):
    employer = make_client("pune_labs", "employer", name="Pune Labs")
    seeker = make_client("sneha", "seeker", name="Sneha Patil")

    job = employer.post(
        "/api/jobs",
        json={
            "title": "QA Engineer",
            "description": "Manual and automated testing",
            "location": "Pune",
            "job_type": "full-time",
        },
    ).json()

    applied = seeker.post(
        "/api/applications",
        json={"job_id": job["id"], "cover_letter": "I have five years of QA experience."},
    )
    assert applied.status_code == 201

    entries = employer.get(f"/api/applications/job/{job['id']}").json()
    assert len(entries) == 1
    assert entries[0]["seeker"]["name"] == "Sneha Patil"

    resp = employer.put(f"/api/applications/{entries[0]['id']}/status", json={"status": "interview"})
    assert resp.status_code == 200

    [mine] = seeker.get("/api/applications/seeker").json()
    assert mine["job"]["title"] == "QA Engineer"
    assert mine["status"] == "interview"
