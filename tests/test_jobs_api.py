def _post_job(client, payload, **overrides):
    resp = client.post("/api/jobs", json={**payload, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_list_jobs_empty(client):
    resp = client.get("/api/jobs")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_nonexistent_job(client):
    resp = client.get("/api/jobs/99999")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Job not found"}


def test_create_job_sets_server_fields(make_client, job_payload):
    employer = make_client("acme", "employer")
    me = employer.get("/api/user").json()

    job = _post_job(employer, job_payload, employer_id=12345, is_active=False, id=77)

    assert job["id"] == 1
    assert job["employer_id"] == me["id"]
    assert job["is_active"] is True
    assert job["posted_at"]
    assert job["skills"] == ["Selenium", "Python"]


def test_ids_strictly_increase(make_client, job_payload):
    employer = make_client("acme", "employer")
    ids = [_post_job(employer, job_payload, title=f"Role {i}")["id"] for i in range(4)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 4


def test_get_job_is_idempotent(client, make_client, job_payload):
    employer = make_client("acme", "employer")
    job = _post_job(employer, job_payload)
    first = client.get(f"/api/jobs/{job['id']}")
    second = client.get(f"/api/jobs/{job['id']}")
    assert first.status_code == 200
    assert first.json() == second.json()


def test_create_job_requires_login(client, job_payload):
    resp = client.post("/api/jobs", json=job_payload)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Unauthorized"


def test_seeker_cannot_post_job(client, make_client, job_payload):
    seeker = make_client("sam", "seeker")
    resp = seeker.post("/api/jobs", json=job_payload)
    assert resp.status_code == 403
    assert client.get("/api/jobs").json() == []


def test_create_job_validation_errors(make_client, job_payload):
    employer = make_client("acme", "employer")
    payload = {k: v for k, v in job_payload.items() if k != "title"}
    payload["job_type"] = "internship"

    resp = employer.post("/api/jobs", json=payload)

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid job data"
    fields = {tuple(err["loc"]) for err in body["errors"]}
    assert ("title",) in fields
    assert ("job_type",) in fields


def test_salary_bounds_not_cross_checked(make_client, job_payload):
    employer = make_client("acme", "employer")
    job = _post_job(employer, job_payload, salary_min=500, salary_max=100)
    assert (job["salary_min"], job["salary_max"]) == (500, 100)


def test_keyword_filter_is_case_insensitive(client, make_client, job_payload):
    employer = make_client("acme", "employer")
    frontend = _post_job(employer, job_payload, title="Frontend Developer", description="Build UIs", skills=[])
    _post_job(employer, job_payload, title="Backend Engineer", description="Build APIs", skills=[])

    resp = client.get("/api/jobs", params={"keyword": "frontend"})

    assert resp.status_code == 200
    assert [job["id"] for job in resp.json()] == [frontend["id"]]


def test_filters_combine(client, make_client, job_payload):
    acme = make_client("acme", "employer")
    globex = make_client("globex", "employer")
    acme_id = acme.get("/api/user").json()["id"]
    pune = _post_job(acme, job_payload, location="Pune, India")
    _post_job(acme, job_payload, location="Chennai, India", job_type="contract")
    _post_job(globex, job_payload, location="Pune, India")

    resp = client.get(
        "/api/jobs",
        params={"location": "pune", "job_type": "full-time", "employer_id": acme_id},
    )

    assert [job["id"] for job in resp.json()] == [pune["id"]]


def test_update_job_by_owner(make_client, job_payload):
    employer = make_client("acme", "employer")
    job = _post_job(employer, job_payload)

    resp = employer.put(f"/api/jobs/{job['id']}", json={"title": "Senior QA Engineer", "skills": ["Cypress"]})

    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Senior QA Engineer"
    assert data["skills"] == ["Cypress"]
    assert data["location"] == job["location"]
    assert data["posted_at"] == job["posted_at"]


def test_update_ignores_owner_and_identity_fields(make_client, job_payload):
    employer = make_client("acme", "employer")
    job = _post_job(employer, job_payload)

    resp = employer.put(f"/api/jobs/{job['id']}", json={"employer_id": 999, "id": 50, "posted_at": "2000-01-01T00:00:00"})

    assert resp.status_code == 200
    assert resp.json() == job


def test_update_by_other_employer_is_forbidden(client, make_client, job_payload):
    owner = make_client("acme", "employer")
    other = make_client("globex", "employer")
    job = _post_job(owner, job_payload)

    put = other.put(f"/api/jobs/{job['id']}", json={"title": "Hijacked"})
    delete = other.delete(f"/api/jobs/{job['id']}")

    assert put.status_code == 403
    assert delete.status_code == 403
    assert client.get(f"/api/jobs/{job['id']}").json() == job


def test_update_missing_job_is_not_found(make_client):
    employer = make_client("acme", "employer")
    assert employer.put("/api/jobs/404", json={"title": "x"}).status_code == 404
    assert employer.delete("/api/jobs/404").status_code == 404


def test_update_requires_login(client, make_client, job_payload):
    job = _post_job(make_client("acme", "employer"), job_payload)
    assert client.put(f"/api/jobs/{job['id']}", json={"title": "x"}).status_code == 401
    assert client.delete(f"/api/jobs/{job['id']}").status_code == 401


def test_delete_is_soft(client, make_client, job_payload):
    employer = make_client("acme", "employer")
    job = _post_job(employer, job_payload)
    kept = _post_job(employer, job_payload, title="Another")

    resp = employer.delete(f"/api/jobs/{job['id']}")

    assert resp.status_code == 200
    assert resp.json()["message"] == "Job listing deleted successfully"
    listed = [j["id"] for j in client.get("/api/jobs").json()]
    assert job["id"] not in listed
    assert kept["id"] in listed
    detail = client.get(f"/api/jobs/{job['id']}")
    assert detail.status_code == 200
    assert detail.json()["is_active"] is False


def test_api_responses_are_not_cached(client):
    resp = client.get("/api/jobs")
    assert "no-store" in resp.headers["Cache-Control"]


def test_bad_path_parameter_is_bad_request(client):
    resp = client.get("/api/jobs/not-a-number")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"
