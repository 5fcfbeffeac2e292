"""
tests/test_api_routes.py — FastAPI Route Integration Tests
===========================================================
Exercises the public REST surface through the TestClient against the
in-memory database:

- Error envelope and status codes
- Auth register / login / me
- Residency, businesses, jobs, marketplace, cultural activities
- Dashboard stats and catalogues
"""

from __future__ import annotations

from conftest import ADMIN_EMAIL, auth, make_user


def _register(client, email="tashi@example.bt", password="kuzuzangpo-la"):
    return client.post("/api/auth/register", json={
        "email": email,
        "firstName": "Tashi",
        "lastName": "Dorji",
        "password": password,
    })


# ===========================================================================
# Health + error envelope
# ===========================================================================
class TestEnvelope:
    def test_health_returns_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_validation_error_is_400(self, client):
        resp = client.post("/api/auth/register", json={"email": "not-an-email"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid request data"}

    def test_not_found_is_404(self, client):
        resp = client.get("/api/jobs/12345")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Job not found"}

    def test_unexpected_error_is_500(self, client, monkeypatch):
        from digital_bhutan.services import catalog_service

        def _boom(session):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(catalog_service, "list_mini_apps", _boom)
        resp = client.get("/api/mini-apps")
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error"}


# ===========================================================================
# Auth
# ===========================================================================
class TestAuth:
    def test_register_hides_password(self, client):
        resp = _register(client)
        assert resp.status_code == 200
        body = resp.json()
        assert body["email"] == "tashi@example.bt"
        assert body["browniePoints"] == 0
        assert body["tierLevel"] == 1
        assert body["tierName"] == "Dragon Egg"
        assert "password" not in body

    def test_duplicate_email_is_400(self, client):
        _register(client)
        resp = _register(client)
        assert resp.status_code == 400
        assert resp.json() == {"message": "User already exists"}

    def test_login_and_me(self, client):
        _register(client)
        login = client.post("/api/auth/login", json={
            "email": "tashi@example.bt", "password": "kuzuzangpo-la",
        })
        assert login.status_code == 200
        token = login.json()["token"]

        me = client.get("/api/auth/me", headers=auth(token))
        assert me.status_code == 200
        assert me.json()["email"] == "tashi@example.bt"

    def test_bad_credentials_are_401(self, client):
        _register(client)
        resp = client.post("/api/auth/login", json={
            "email": "tashi@example.bt", "password": "wrong-password",
        })
        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid credentials"}

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_admin_email_gets_admin_token(self, client):
        _register(client, email=ADMIN_EMAIL)
        login = client.post("/api/auth/login", json={
            "email": ADMIN_EMAIL, "password": "kuzuzangpo-la",
        })
        token = login.json()["token"]
        assert login.json()["user"]["isAdmin"] is True
        assert client.get("/api/admin/settings", headers=auth(token)).status_code == 200


# ===========================================================================
# Residency
# ===========================================================================
class TestResidency:
    APPLICATION = {
        "firstName": "Tashi",
        "lastName": "Dorji",
        "email": "tashi@example.bt",
        "countryOfOrigin": "India",
        "reasonForResidency": "Starting a textile cooperative",
    }

    def test_apply_defaults_to_demo_user(self, client, seeded_engine):
        make_user(seeded_engine)
        resp = client.post("/api/residency/apply", json=self.APPLICATION)
        assert resp.status_code == 200
        assert resp.json()["userId"] == 1
        assert resp.json()["status"] == "pending"

    def test_approve_then_user_is_resident(self, client, seeded_engine):
        make_user(seeded_engine)
        app_id = client.post("/api/residency/apply", json=self.APPLICATION).json()["id"]

        resp = client.patch(f"/api/residency/applications/{app_id}/status", json={"status": "approved"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"
        assert client.get("/api/users/1").json()["isDigitalResident"] is True
        assert client.get("/api/dashboard/stats").json()["totalResidents"] == 1

    def test_invalid_status_is_400(self, client, seeded_engine):
        make_user(seeded_engine)
        app_id = client.post("/api/residency/apply", json=self.APPLICATION).json()["id"]
        resp = client.patch(f"/api/residency/applications/{app_id}/status", json={"status": "maybe"})
        assert resp.status_code == 400

    def test_unknown_application_is_404(self, client):
        resp = client.patch("/api/residency/applications/77/status", json={"status": "approved"})
        assert resp.status_code == 404

    def test_unknown_reviewer_is_404(self, client, seeded_engine):
        make_user(seeded_engine)
        app_id = client.post("/api/residency/apply", json=self.APPLICATION).json()["id"]

        resp = client.patch(
            f"/api/residency/applications/{app_id}/status",
            json={"status": "approved", "reviewerId": 999},
        )
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}
        assert client.get("/api/users/1").json()["isDigitalResident"] is False

    def test_list_applications(self, client, seeded_engine):
        make_user(seeded_engine)
        client.post("/api/residency/apply", json=self.APPLICATION)
        assert len(client.get("/api/residency/applications").json()) == 1


# ===========================================================================
# Businesses + jobs
# ===========================================================================
class TestBusinessesAndJobs:
    def test_register_business(self, client, seeded_engine):
        make_user(seeded_engine)
        resp = client.post("/api/businesses", json={
            "name": "Druk Weaves",
            "description": "Hand-loomed textiles",
            "category": "Textiles",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "pending"
        assert body["businessNftId"].startswith("biz_nft_")
        assert [b["name"] for b in client.get("/api/businesses").json()] == ["Druk Weaves"]

    def test_job_search_and_apply(self, client, seeded_engine):
        make_user(seeded_engine)
        for title, category in [("Backend Developer", "Technology"), ("Guide", "Tourism")]:
            client.post("/api/jobs", json={
                "title": title,
                "description": "Join us",
                "category": category,
                "experienceLevel": "Entry Level",
                "location": "Paro",
                "employmentType": "full-time",
                "skills": ["python"],
            })

        tech = client.get("/api/jobs", params={"category": "Technology"}).json()
        assert [j["title"] for j in tech] == ["Backend Developer"]
        assert len(client.get("/api/jobs", params={"category": "All Categories"}).json()) == 2
        assert len(client.get("/api/jobs", params={"experienceLevel": "Any Experience"}).json()) == 2

        job_id = tech[0]["id"]
        applied = client.post(f"/api/jobs/{job_id}/apply", json={"coverLetter": "Hello"})
        assert applied.status_code == 200
        assert applied.json()["applicantId"] == 1
        assert len(client.get(f"/api/jobs/{job_id}/applications").json()) == 1

    def test_job_with_unknown_business_is_404(self, client, seeded_engine):
        make_user(seeded_engine)
        resp = client.post("/api/jobs", json={
            "title": "Weaver",
            "description": "Loom work",
            "category": "Crafts",
            "experienceLevel": "Entry Level",
            "location": "Bumthang",
            "employmentType": "part-time",
            "businessId": 999,
        })
        assert resp.status_code == 404
        assert resp.json() == {"message": "Business not found"}
        assert client.get("/api/jobs").json() == []

    def test_apply_to_missing_job_is_404(self, client, seeded_engine):
        make_user(seeded_engine)
        assert client.post("/api/jobs/999/apply", json={}).status_code == 404


# ===========================================================================
# Marketplace + cultural activities
# ===========================================================================
class TestPointsEndpoints:
    def test_product_reward_badge_and_purchase(self, client, seeded_engine):
        make_user(seeded_engine)
        created = client.post("/api/products", json={
            "name": "Butter Lamp",
            "description": "Brass",
            "price": "18.00",
            "category": "Crafts",
            "browniePointsReward": 0,
        })
        assert created.status_code == 200
        assert created.json()["hasRewardBadge"] is False

        rewarding = client.post("/api/products", json={
            "name": "Thangka",
            "description": "Painted scroll",
            "price": "250.00",
            "category": "Art",
            "browniePointsReward": 1200,
        }).json()
        assert rewarding["rewardBadge"] == "+1200 Points"

        resp = client.post(f"/api/products/{rewarding['id']}/purchase", json={"userId": 1})
        assert resp.status_code == 200
        assert resp.json()["user"]["browniePoints"] == 1200
        assert resp.json()["user"]["tierLevel"] == 2
        assert resp.json()["tierChanged"] is True

        art = client.get("/api/products", params={"category": "Art"}).json()
        assert [p["name"] for p in art] == ["Thangka"]

    def test_complete_activity_updates_points_and_tier_views(self, client, seeded_engine):
        make_user(seeded_engine)
        activities = client.get("/api/cultural/activities").json()
        assert len(activities) == 4
        quiz = next(a for a in activities if a["title"] == "Dzongkha Language Quiz")

        resp = client.post(f"/api/cultural/activities/{quiz['id']}/complete", json={"score": 9})
        assert resp.status_code == 200
        assert resp.json()["pointsAwarded"] == 150

        points = client.get("/api/users/1/points").json()
        assert points["browniePoints"] == 150
        assert points["ledger"][0]["source"] == "activity_completion"

        tier = client.get("/api/users/1/tier").json()
        assert tier["tierLevel"] == 1
        assert tier["pointsToNextTier"] == 850
        assert tier["progress"] == 15.0

        history = client.get("/api/users/1/activities").json()
        assert history[0]["activityId"] == quiz["id"]

    def test_complete_unknown_activity_is_404(self, client, seeded_engine):
        make_user(seeded_engine)
        resp = client.post("/api/cultural/activities/999/complete", json={})
        assert resp.status_code == 404
        assert resp.json() == {"message": "Activity not found"}

    def test_unknown_user_is_404(self, client):
        resp = client.get("/api/users/31337")
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}


# ===========================================================================
# Dashboard + catalogues
# ===========================================================================
class TestDashboard:
    def test_stats_on_empty_platform(self, client):
        assert client.get("/api/dashboard/stats").json() == {
            "totalResidents": 0,
            "totalBusinesses": 0,
            "totalBrowniePoints": 0,
            "satisfactionRate": 94,
        }

    def test_catalogues(self, client):
        assert len(client.get("/api/mini-apps").json()) == 3
        services = client.get("/api/government/services").json()
        assert len(services) == 6
        assert services[0]["fee"] == "50.00"

    def test_public_settings(self, client):
        body = client.get("/api/settings/public").json()
        assert body["dashboard.satisfaction_rate"] == 94
        assert body["economy.points_currency_name"] == "Brownie Points"
