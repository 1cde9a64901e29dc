import uuid

from studio_api.models.application import Application
from studio_api.models.job import JobPosting


class TestPublicListing:
    def test_only_active_jobs_listed(self, client, create_job):
        create_job(title="Open Role")
        create_job(title="Paused Role", status="inactive")
        create_job(title="Filled Role", status="closed")

        r = client.get("/api/jobs")
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 1
        assert [j["title"] for j in data["jobs"]] == ["Open Role"]

    def test_filters(self, client, create_job):
        create_job(title="Designer", department="Design", location="Remote")
        create_job(title="Engineer", department="Engineering", location="Lisbon", type="Contract")

        r = client.get("/api/jobs", params={"department": "Engineering"})
        assert [j["title"] for j in r.json()["jobs"]] == ["Engineer"]

        r = client.get("/api/jobs", params={"type": "Contract", "location": "Lisbon"})
        assert r.json()["total"] == 1

        r = client.get("/api/jobs", params={"department": "all"})
        assert r.json()["total"] == 2

    def test_get_single_job(self, client, create_job):
        job = create_job()
        r = client.get(f"/api/jobs/{job['id']}")
        assert r.status_code == 200
        data = r.json()
        assert data["title"] == "Motion Designer"
        assert data["requirements"] == ["After Effects", "A strong reel"]
        assert data["salaryCurrency"] == "USD"
        assert data["createdBy"] == "editor"

    def test_malformed_id(self, client):
        r = client.get("/api/jobs/not-a-uuid")
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid job ID"

    def test_unknown_id(self, client):
        r = client.get(f"/api/jobs/{uuid.uuid4()}")
        assert r.status_code == 404
        assert r.json()["error"] == "Job not found"


class TestAdminListing:
    def test_requires_auth(self, client):
        assert client.get("/api/jobs/admin/all").status_code == 401

    def test_lists_every_status(self, client, admin_headers, create_job):
        create_job(title="Open Role")
        create_job(title="Filled Role", status="closed")

        r = client.get("/api/jobs/admin/all", headers=admin_headers)
        assert r.json()["total"] == 2

        r = client.get("/api/jobs/admin/all", params={"status": "closed"}, headers=admin_headers)
        assert [j["title"] for j in r.json()["jobs"]] == ["Filled Role"]


class TestCreateJob:
    def test_requires_auth(self, client):
        r = client.post("/api/jobs", json={"title": "Sneaky"})
        assert r.status_code == 401

    def test_defaults(self, create_job):
        job = create_job()
        assert job["status"] == "active"
        assert job["type"] == "Full-time"
        assert job["salaryMin"] is None

    def test_missing_fields(self, client, admin_headers):
        r = client.post("/api/jobs", json={"title": "  "}, headers=admin_headers)
        assert r.status_code == 400
        fields = {d["field"] for d in r.json()["details"]}
        assert {"title", "department", "location", "experience", "description",
                "requirements", "benefits"} <= fields

    def test_invalid_type_and_status(self, client, admin_headers):
        r = client.post("/api/jobs", json={
            "title": "Role", "department": "Design", "location": "Remote",
            "experience": "1 year", "description": "Work",
            "requirements": ["One"], "benefits": ["Two"],
            "type": "Gig", "status": "archived",
        }, headers=admin_headers)
        assert r.status_code == 400
        fields = {d["field"] for d in r.json()["details"]}
        assert fields == {"type", "status"}

    def test_salary_range_checked(self, client, admin_headers):
        r = client.post("/api/jobs", json={
            "title": "Role", "department": "Design", "location": "Remote",
            "experience": "1 year", "description": "Work",
            "requirements": ["One"], "benefits": ["Two"],
            "salaryMin": 90000, "salaryMax": 50000,
        }, headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["details"][0]["field"] == "salaryMax"


class TestUpdateJob:
    def test_partial_update(self, client, admin_headers, create_job):
        job = create_job()
        r = client.put(f"/api/jobs/{job['id']}", json={"status": "closed", "location": "Berlin"},
                       headers=admin_headers)
        assert r.status_code == 200
        updated = r.json()["job"]
        assert updated["status"] == "closed"
        assert updated["location"] == "Berlin"
        assert updated["title"] == job["title"]

    def test_null_status_rejected(self, client, admin_headers, create_job):
        job = create_job()
        r = client.put(f"/api/jobs/{job['id']}", json={"status": None}, headers=admin_headers)
        assert r.status_code == 400

    def test_salary_checked_against_stored_value(self, client, admin_headers, create_job):
        job = create_job(salaryMin=40000, salaryMax=60000)
        r = client.put(f"/api/jobs/{job['id']}", json={"salaryMax": 30000}, headers=admin_headers)
        assert r.status_code == 400

    def test_unknown_job(self, client, admin_headers):
        r = client.put(f"/api/jobs/{uuid.uuid4()}", json={"title": "Ghost"}, headers=admin_headers)
        assert r.status_code == 404


class TestDeleteJob:
    def test_cascades_to_applications(self, client, db, admin_headers, create_job, apply):
        job = create_job()
        other = create_job(title="Other Role")
        apply(job["id"])
        apply(job["id"], email="grace@example.com")
        apply(job["id"], email="alan@example.com")
        apply(other["id"])

        r = client.delete(f"/api/jobs/{job['id']}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["deletedApplications"] == 3

        assert db.get(JobPosting, job["id"]) is None
        assert db.query(Application).filter(Application.job_id == job["id"]).count() == 0
        assert db.query(Application).count() == 1

    def test_admin_path_alias(self, client, admin_headers, create_job):
        job = create_job()
        r = client.delete(f"/api/jobs/admin/{job['id']}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["deletedApplications"] == 0
        assert client.get(f"/api/jobs/{job['id']}").status_code == 404

    def test_requires_auth(self, client, create_job):
        job = create_job()
        assert client.delete(f"/api/jobs/{job['id']}").status_code == 401


class TestJobStats:
    def test_counts(self, client, admin_headers, create_job, apply):
        job = create_job(department="Design")
        create_job(title="Engineer", department="Engineering")
        create_job(title="Old", department="Design", status="closed")
        apply(job["id"])

        r = client.get("/api/jobs/admin/stats", headers=admin_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["totalJobs"] == 3
        assert data["activeJobs"] == 2
        assert data["totalApplications"] == 1
        assert data["recentApplications"] == 1
        departments = {b["key"]: b["count"] for b in data["departmentStats"]}
        assert departments == {"Design": 1, "Engineering": 1}
        statuses = {b["key"]: b["count"] for b in data["statusStats"]}
        assert statuses == {"active": 2, "closed": 1}
