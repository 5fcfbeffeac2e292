"""
tests/test_admin_routes.py — Admin Console Integration Tests
=============================================================
Verifies:
- Auth guards on admin endpoints (401 missing/invalid, 403 non-admin)
- Manual awards go through the ledger and the audit log
- Business status changes, settings writes, minting and log endpoints
"""

from __future__ import annotations

import pytest
from conftest import auth, make_token, make_user

from digital_bhutan.services.business_service import create_business


@pytest.fixture
def non_admin_token():
    return make_token("67890", is_admin=False)


# ===========================================================================
# Auth guards — admin endpoints should reject unauthenticated/non-admin users
# ===========================================================================
class TestAdminAuthGuards:
    ADMIN_GET_ENDPOINTS = [
        "/api/admin/audit",
        "/api/admin/settings",
        "/api/admin/logs",
        "/api/admin/logs/level",
    ]

    @pytest.mark.parametrize("endpoint", ADMIN_GET_ENDPOINTS)
    def test_no_token_returns_401(self, client, endpoint):
        resp = client.get(endpoint)
        assert resp.status_code == 401
        assert resp.json() == {"message": "Missing token"}

    @pytest.mark.parametrize("endpoint", ADMIN_GET_ENDPOINTS)
    def test_invalid_token_returns_401(self, client, endpoint):
        resp = client.get(endpoint, headers=auth("garbage.token.here"))
        assert resp.status_code == 401

    @pytest.mark.parametrize("endpoint", ADMIN_GET_ENDPOINTS)
    def test_non_admin_returns_403(self, client, endpoint, non_admin_token):
        resp = client.get(endpoint, headers=auth(non_admin_token))
        assert resp.status_code == 403

    def test_award_requires_admin(self, client, non_admin_token):
        resp = client.post(
            "/api/admin/points/award",
            json={"userId": 1, "points": 10},
            headers=auth(non_admin_token),
        )
        assert resp.status_code == 403


# ===========================================================================
# Manual awards + audit
# ===========================================================================
class TestManualAward:
    def test_award_updates_balance_and_tier(self, client, seeded_engine, admin_token):
        user = make_user(seeded_engine)
        for points in (250, 250):
            client.post(
                "/api/admin/points/award",
                json={"userId": user.id, "points": points},
                headers=auth(admin_token),
            )
        resp = client.post(
            "/api/admin/points/award",
            json={"userId": user.id, "points": 600, "reason": "Tshechu volunteer"},
            headers=auth(admin_token),
        )
        assert resp.status_code == 200
        assert resp.json()["browniePoints"] == 1100
        assert resp.json()["tierLevel"] == 2

        audit = client.get(
            "/api/admin/audit", params={"targetTable": "users"}, headers=auth(admin_token)
        ).json()
        assert audit["total"] == 3
        latest = audit["entries"][0]
        assert latest["actionType"] == "MANUAL_AWARD"
        assert latest["actorId"] == 99999
        assert latest["reason"] == "Tshechu volunteer"
        assert latest["before"]["brownie_points"] == 500
        assert latest["after"]["brownie_points"] == 1100
        assert "password" not in latest["after"]

    def test_negative_award_is_400(self, client, seeded_engine, admin_token):
        user = make_user(seeded_engine)
        resp = client.post(
            "/api/admin/points/award",
            json={"userId": user.id, "points": -1},
            headers=auth(admin_token),
        )
        assert resp.status_code == 400

    def test_award_to_unknown_user_is_404(self, client, admin_token):
        resp = client.post(
            "/api/admin/points/award",
            json={"userId": 404, "points": 10},
            headers=auth(admin_token),
        )
        assert resp.status_code == 404


# ===========================================================================
# Business status
# ===========================================================================
class TestBusinessStatus:
    def test_approval_counts_on_dashboard(self, client, seeded_engine, admin_token):
        owner = make_user(seeded_engine)
        business = create_business(
            seeded_engine, owner_id=owner.id, name="Druk Tea", description="Tea", category="Food"
        )
        resp = client.patch(
            f"/api/admin/businesses/{business.id}/status",
            json={"status": "approved"},
            headers=auth(admin_token),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"
        assert client.get("/api/dashboard/stats").json()["totalBusinesses"] == 1

    def test_unknown_business_is_404(self, client, admin_token):
        resp = client.patch(
            "/api/admin/businesses/5/status", json={"status": "approved"}, headers=auth(admin_token)
        )
        assert resp.status_code == 404

    def test_bad_status_is_400(self, client, seeded_engine, admin_token):
        owner = make_user(seeded_engine)
        business = create_business(
            seeded_engine, owner_id=owner.id, name="Druk Tea", description="Tea", category="Food"
        )
        resp = client.patch(
            f"/api/admin/businesses/{business.id}/status",
            json={"status": "closed"},
            headers=auth(admin_token),
        )
        assert resp.status_code == 400


# ===========================================================================
# Settings
# ===========================================================================
class TestSettings:
    def test_update_satisfaction_rate(self, client, admin_token):
        resp = client.put(
            "/api/admin/settings",
            json=[{"key": "dashboard.satisfaction_rate", "value": 97}],
            headers=auth(admin_token),
        )
        assert resp.json() == {"updated": 1}
        assert client.get("/api/dashboard/stats").json()["satisfactionRate"] == 97

        audit = client.get(
            "/api/admin/audit", params={"targetTable": "settings"}, headers=auth(admin_token)
        ).json()
        entry = audit["entries"][0]
        assert entry["actionType"] == "UPDATE"
        assert entry["before"]["value"] == 94
        assert entry["after"]["value"] == 97

    def test_list_settings(self, client, admin_token):
        body = client.get("/api/admin/settings", headers=auth(admin_token)).json()
        keys = {s["key"] for s in body["settings"]}
        assert "dashboard.satisfaction_rate" in keys


# ===========================================================================
# Minting
# ===========================================================================
class TestMint:
    def test_mock_mint_records_transaction(self, client, seeded_engine, admin_token):
        user = make_user(seeded_engine)
        resp = client.post(
            f"/api/admin/users/{user.id}/mint",
            json={"toAddress": "0xabc"},
            headers=auth(admin_token),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["transactionType"] == "nft_mint"
        assert body["status"] == "pending"
        assert body["transactionHash"].startswith("0x")
        assert body["metadata"] == {"token_id": user.nft_id}

    def test_second_mint_is_409(self, client, seeded_engine, admin_token):
        user = make_user(seeded_engine)
        url = f"/api/admin/users/{user.id}/mint"
        client.post(url, json={"toAddress": "0xabc"}, headers=auth(admin_token))
        resp = client.post(url, json={"toAddress": "0xabc"}, headers=auth(admin_token))
        assert resp.status_code == 409


# ===========================================================================
# Live logs
# ===========================================================================
class TestLogs:
    def test_set_and_read_level(self, client, admin_token):
        resp = client.put("/api/admin/logs/level", json={"level": "warning"}, headers=auth(admin_token))
        assert resp.json() == {"level": "WARNING"}
        assert client.get("/api/admin/logs/level", headers=auth(admin_token)).json()["level"] == "WARNING"
        client.put("/api/admin/logs/level", json={"level": "INFO"}, headers=auth(admin_token))

    def test_invalid_level_is_400(self, client, admin_token):
        resp = client.put("/api/admin/logs/level", json={"level": "LOUD"}, headers=auth(admin_token))
        assert resp.status_code == 400

    def test_logs_shape(self, client, admin_token):
        body = client.get("/api/admin/logs", headers=auth(admin_token)).json()
        assert set(body) == {"entries", "total", "captureLevel", "validLevels"}
