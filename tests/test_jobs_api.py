"""
tests/test_jobs_api.py
======================
/jobs endpoints through the FastAPI app: envelope, status codes and the
admin → login → create → update flow.
"""
import pytest


class TestJobFlow:

    def test_end_to_end(self, client, make_user, password, job_payload):
        make_user("admin", email="admin@als.com")
        token = client.post("/auth/login", json={"email": "admin@als.com", "password": password}).json()["data"]["token"]
        headers = {"Authorization": f"Bearer {token}"}

        r = client.post("/jobs", headers=headers, json=job_payload(status="pending"))
        assert r.status_code == 201
        job = r.json()["data"]
        assert job["status"] == "pending"
        assert job["vessel"] is None
        assert r.json()["message"] == "Job created successfully"

        r = client.put(f"/jobs/{job['id']}", headers=headers, json={"status": "in_transit"})
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "vessel is required to change status from pending"}

        r = client.put(f"/jobs/{job['id']}", headers=headers, json={"status": "in_transit", "vessel": "MSC Oscar"})
        assert r.status_code == 200
        assert r.json()["data"]["status"] == "in_transit"
        assert r.json()["data"]["vessel"] == "MSC Oscar"


class TestCreateJobApi:

    def test_response_uses_camel_case(self, client, make_user, headers_for, job_payload):
        r = client.post("/jobs", headers=headers_for(make_user("admin")), json=job_payload())
        data = r.json()["data"]
        for key in ("jobNumber", "invoiceNumber", "partyName", "containerType", "containerNumbers",
                    "cutOffDate", "createdAt"):
            assert key in data
        assert "job_number" not in data

    @pytest.mark.parametrize("field", ["jobNumber", "partyName", "truck", "etd", "transporter"])
    def test_required_fields(self, client, make_user, headers_for, job_payload, field):
        body = job_payload()
        del body[field]
        r = client.post("/jobs", headers=headers_for(make_user("admin")), json=body)
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": f"{field} is required"}

    def test_blank_required_string(self, client, make_user, headers_for, job_payload):
        r = client.post("/jobs", headers=headers_for(make_user("admin")), json=job_payload(invoiceNumber="  "))
        assert r.status_code == 400
        assert r.json()["error"] == "invoiceNumber is required"

    def test_status_without_vessel(self, client, make_user, headers_for, job_payload):
        r = client.post("/jobs", headers=headers_for(make_user("admin")), json=job_payload(status="delivered"))
        assert r.status_code == 400
        assert r.json()["error"] == "vessel is required when status is not pending"

    def test_bad_container_type(self, client, make_user, headers_for, job_payload):
        r = client.post("/jobs", headers=headers_for(make_user("admin")), json=job_payload(containerType="BULK"))
        assert r.status_code == 400
        assert r.json()["error"].startswith("containerType")

    def test_container_numbers_text(self, client, make_user, headers_for, job_payload):
        r = client.post("/jobs", headers=headers_for(make_user("admin")),
                        json=job_payload(containerNumbers="MSKU1\n  MSKU2  \n\n"))
        assert r.json()["data"]["containerNumbers"] == ["MSKU1", "MSKU2"]


class TestListJobsApi:

    def test_paginated_shape(self, client, make_user, make_job, headers_for):
        for _ in range(25):
            make_job()
        headers = headers_for(make_user("admin"))

        body = client.get("/jobs", headers=headers, params={"page": 1, "limit": 10}).json()
        assert body["success"] is True
        assert len(body["data"]["data"]) == 10
        assert body["data"]["pagination"] == {"page": 1, "limit": 10, "total": 25, "totalPages": 3}

        body = client.get("/jobs", headers=headers, params={"page": 3, "limit": 10}).json()
        assert len(body["data"]["data"]) == 5

    def test_client_query_params_cannot_escape_scope(self, client, make_user, make_job, headers_for):
        make_job(party_name="Acme Traders")
        make_job(party_name="Other Party")
        headers = headers_for(make_user("client", party_name="Acme Traders"))

        body = client.get("/jobs", headers=headers, params={"partyName": "Other Party"}).json()
        assert body["data"]["data"] == []

        body = client.get("/jobs", headers=headers).json()
        assert [j["partyName"] for j in body["data"]["data"]] == ["Acme Traders"]

    def test_invalid_status_filter(self, client, make_user, headers_for):
        r = client.get("/jobs", headers=headers_for(make_user("admin")), params={"status": "lost"})
        assert r.status_code == 400
        assert r.json()["success"] is False

    def test_limit_bounds(self, client, make_user, headers_for):
        r = client.get("/jobs", headers=headers_for(make_user("admin")), params={"limit": 0})
        assert r.status_code == 400


class TestSingleJobApi:

    def test_get_not_found(self, client, make_user, headers_for):
        r = client.get("/jobs/999", headers=headers_for(make_user("admin")))
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Job not found"}

    def test_get_forbidden_for_other_party(self, client, make_user, make_job, headers_for):
        job = make_job(party_name="Other Party")
        r = client.get(f"/jobs/{job.id}", headers=headers_for(make_user("client")))
        assert r.status_code == 403
        assert r.json()["error"] == "Access denied"

    def test_vendor_update_drops_party_name(self, client, db_session, make_user, make_job, headers_for):
        job = make_job(party_name="Acme Traders")
        r = client.put(f"/jobs/{job.id}", headers=headers_for(make_user("vendor")),
                       json={"partyName": "Hijacked", "remarks": "At the gate"})
        assert r.status_code == 200
        assert r.json()["data"]["partyName"] == "Acme Traders"
        assert r.json()["data"]["remarks"] == "At the gate"

        db_session.refresh(job)
        assert job.party_name == "Acme Traders"

    def test_vendor_update_other_transporter(self, client, make_user, make_job, headers_for):
        job = make_job(transporter="Slow Movers")
        r = client.put(f"/jobs/{job.id}", headers=headers_for(make_user("vendor")), json={"remarks": "x"})
        assert r.status_code == 403

    def test_client_update_forbidden(self, client, make_user, make_job, headers_for):
        job = make_job()
        r = client.put(f"/jobs/{job.id}", headers=headers_for(make_user("client")), json={"remarks": "x"})
        assert r.status_code == 403
        assert r.json()["error"] == "Clients cannot update jobs"

    def test_delete(self, client, make_user, make_job, headers_for):
        job = make_job()
        assert client.delete(f"/jobs/{job.id}", headers=headers_for(make_user("vendor"))).status_code == 403

        admin_headers = headers_for(make_user("admin"))
        r = client.delete(f"/jobs/{job.id}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["message"] == "Job deleted successfully"
        assert client.delete(f"/jobs/{job.id}", headers=admin_headers).status_code == 404

    def test_non_integer_id(self, client, make_user, headers_for):
        r = client.get("/jobs/abc", headers=headers_for(make_user("admin")))
        assert r.status_code == 400
