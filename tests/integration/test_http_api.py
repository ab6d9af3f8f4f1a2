"""Integration tests for the HTTP API.

Requests go through the full FastAPI stack (auth, validation, providers,
services, repositories) against a throwaway SQLite database.
"""

import pytest

from panel_api.core.secrets import SECRET_MASK
from panel_api.repositories.theme_repository import ThemeRepository
from tests.conftest import _auth_headers, make_donation_payload, make_theme_payload

pytestmark = pytest.mark.asyncio


# ======================================================================
# Health endpoints
# ======================================================================


class TestHealthEndpoints:
    async def test_health_check(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["service"] == "kafkasder-panel-api"

    async def test_readiness_check(self, client):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"] == {"database": "ok", "redis": "ok"}

    async def test_api_ping(self, client):
        resp = await client.get("/api/v1/ping")
        assert resp.status_code == 200

    async def test_security_and_request_id_headers(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert resp.headers["x-request-id"] == "req-123"
        assert resp.headers["x-content-type-options"] == "nosniff"


# ======================================================================
# Settings store
# ======================================================================


class TestSettingsEndpoints:
    async def test_put_then_get(self, admin_client):
        resp = await admin_client.put(
            "/api/v1/settings/general/siteName",
            json={"value": "Kafkasder", "label": "Site Name", "is_public": True},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["version"] == 1
        assert body["data_type"] == "string"

        resp = await admin_client.get("/api/v1/settings/general/siteName")
        assert resp.status_code == 200
        assert resp.json()["value"] == "Kafkasder"

    async def test_version_increments_across_requests(self, admin_client):
        for value in ("a", "b", "c"):
            resp = await admin_client.put("/api/v1/settings/general/siteName", json={"value": value})
        assert resp.json()["version"] == 3

    async def test_stale_version_returns_409(self, admin_client):
        await admin_client.put("/api/v1/settings/general/siteName", json={"value": "a"})
        await admin_client.put("/api/v1/settings/general/siteName", json={"value": "b"})

        resp = await admin_client.put(
            "/api/v1/settings/general/siteName",
            json={"value": "c", "expected_version": 1},
        )
        assert resp.status_code == 409

        resp = await admin_client.get("/api/v1/settings/general/siteName")
        assert resp.json()["value"] == "b"

    async def test_missing_setting_404(self, admin_client):
        resp = await admin_client.get("/api/v1/settings/general/missing")
        assert resp.status_code == 404

    async def test_invalid_category_rejected(self, admin_client):
        resp = await admin_client.get("/api/v1/settings/Bad-Category")
        assert resp.status_code == 422

    async def test_secret_is_masked(self, admin_client):
        await admin_client.put("/api/v1/settings/email/smtpPassword", json={"value": "hunter2"})

        resp = await admin_client.get("/api/v1/settings/email")
        assert resp.json() == {"smtpPassword": SECRET_MASK}

        resp = await admin_client.get("/api/v1/settings/email/smtpPassword")
        body = resp.json()
        assert body["value"] == SECRET_MASK
        assert body["is_encrypted"] is True

        resp = await admin_client.get("/api/v1/settings")
        assert resp.json()["email"]["smtpPassword"]["value"] == SECRET_MASK

    async def test_bulk_update(self, admin_client):
        resp = await admin_client.put(
            "/api/v1/settings/general",
            json={"settings": {"siteName": "K", "pageSize": 25}},
        )
        assert resp.status_code == 200
        assert sorted(resp.json()["updated"]) == ["pageSize", "siteName"]

        resp = await admin_client.get("/api/v1/settings/general")
        assert resp.json() == {"pageSize": 25, "siteName": "K"}

    async def test_bulk_requires_settings(self, admin_client):
        resp = await admin_client.put("/api/v1/settings/general", json={"settings": {}})
        assert resp.status_code == 422

    async def test_reset_to_default(self, admin_client):
        await admin_client.put(
            "/api/v1/settings/general/pageSize", json={"value": 50, "default_value": 20}
        )
        resp = await admin_client.post("/api/v1/settings/general/pageSize/reset")
        assert resp.status_code == 200
        assert resp.json()["value"] == 20

    async def test_reset_without_default_404(self, admin_client):
        await admin_client.put("/api/v1/settings/general/pageSize", json={"value": 50})
        resp = await admin_client.post("/api/v1/settings/general/pageSize/reset")
        assert resp.status_code == 404

    async def test_seed_requires_super_admin(self, admin_client):
        resp = await admin_client.post(
            "/api/v1/settings/general/seed",
            json={"defaults": [{"key": "siteName", "value": "K"}]},
        )
        assert resp.status_code == 403

    async def test_seed_once(self, super_admin_client):
        payload = {"defaults": [{"key": "siteName", "value": "K"}, {"key": "pageSize", "value": 20}]}

        resp = await super_admin_client.post("/api/v1/settings/general/seed", json=payload)
        assert resp.json() == {"success": True, "message": "Seeded 2 settings", "count": 2}

        resp = await super_admin_client.post("/api/v1/settings/general/seed", json=payload)
        assert resp.json()["success"] is False

    async def test_delete_requires_super_admin(self, client):
        await client.put(
            "/api/v1/settings/general/siteName",
            json={"value": "K"},
            headers=_auth_headers("admin"),
        )
        resp = await client.delete(
            "/api/v1/settings/general/siteName", headers=_auth_headers("admin")
        )
        assert resp.status_code == 403

        resp = await client.delete(
            "/api/v1/settings/general/siteName", headers=_auth_headers("super_admin")
        )
        assert resp.status_code == 204

        resp = await client.delete(
            "/api/v1/settings/general/siteName", headers=_auth_headers("super_admin")
        )
        assert resp.status_code == 404

    async def test_staff_cannot_read_settings(self, staff_client):
        resp = await staff_client.get("/api/v1/settings")
        assert resp.status_code == 403

    async def test_unauthenticated_rejected(self, client):
        resp = await client.get("/api/v1/settings")
        assert resp.status_code == 401


class TestPublicSettings:
    async def test_only_public_settings_without_auth(self, client):
        headers = _auth_headers("admin")
        await client.put(
            "/api/v1/settings/general/siteName",
            json={"value": "Kafkasder", "is_public": True},
            headers=headers,
        )
        await client.put(
            "/api/v1/settings/general/internalNote",
            json={"value": "hidden", "is_public": False},
            headers=headers,
        )

        resp = await client.get("/api/v1/public/settings/general")
        assert resp.status_code == 200
        assert resp.json() == {"siteName": "Kafkasder"}

    async def test_unknown_category_is_empty(self, client):
        resp = await client.get("/api/v1/public/settings/nothing")
        assert resp.status_code == 200
        assert resp.json() == {}


# ======================================================================
# Themes
# ======================================================================


class TestThemeEndpoints:
    async def test_create_and_get(self, admin_client):
        resp = await admin_client.put("/api/v1/themes/ocean", json=make_theme_payload())
        assert resp.status_code == 200
        assert resp.json()["name"] == "ocean"
        assert resp.json()["is_custom"] is True

        resp = await admin_client.get("/api/v1/themes/ocean")
        assert resp.status_code == 200
        assert resp.json()["colors"]["primary"] == "#1e40af"

    async def test_colors_required(self, admin_client):
        resp = await admin_client.put("/api/v1/themes/ocean", json={"description": "x"})
        assert resp.status_code == 422

    async def test_default_swap(self, admin_client):
        await admin_client.put("/api/v1/themes/light", json=make_theme_payload(is_default=True))
        await admin_client.put("/api/v1/themes/dark", json=make_theme_payload())

        resp = await admin_client.post("/api/v1/themes/dark/default")
        assert resp.status_code == 200
        assert resp.json()["is_default"] is True

        resp = await admin_client.get("/api/v1/themes/default")
        assert resp.json()["name"] == "dark"

        resp = await admin_client.get("/api/v1/themes")
        defaults = [p["name"] for p in resp.json() if p["is_default"]]
        assert defaults == ["dark"]

    async def test_set_default_missing_404(self, admin_client):
        resp = await admin_client.post("/api/v1/themes/ghost/default")
        assert resp.status_code == 404

    async def test_no_default_404(self, admin_client):
        resp = await admin_client.get("/api/v1/themes/default")
        assert resp.status_code == 404

    async def test_delete_rules(self, client):
        admin = _auth_headers("admin")
        super_admin = _auth_headers("super_admin")
        await client.put(
            "/api/v1/themes/light", json=make_theme_payload(is_default=True), headers=admin
        )
        await client.put("/api/v1/themes/ocean", json=make_theme_payload(), headers=admin)

        assert (await client.delete("/api/v1/themes/ocean", headers=admin)).status_code == 403
        assert (await client.delete("/api/v1/themes/light", headers=super_admin)).status_code == 409
        assert (await client.delete("/api/v1/themes/ocean", headers=super_admin)).status_code == 204
        assert (await client.delete("/api/v1/themes/ocean", headers=super_admin)).status_code == 404

    async def test_default_is_reserved(self, admin_client):
        resp = await admin_client.put("/api/v1/themes/default", json=make_theme_payload())
        assert resp.status_code == 422

        resp = await admin_client.get("/api/v1/themes")
        assert resp.json() == []

    async def test_racing_default_switch_409(self, admin_client, monkeypatch):
        await admin_client.put("/api/v1/themes/light", json=make_theme_payload(is_default=True))
        await admin_client.put("/api/v1/themes/dark", json=make_theme_payload())

        async def lost_race(self, exclude_id=None):
            return None

        with monkeypatch.context() as m:
            m.setattr(ThemeRepository, "clear_defaults", lost_race)

            resp = await admin_client.post("/api/v1/themes/dark/default")
            assert resp.status_code == 409

            resp = await admin_client.put(
                "/api/v1/themes/ocean", json=make_theme_payload(is_default=True)
            )
            assert resp.status_code == 409

        resp = await admin_client.get("/api/v1/themes/default")
        assert resp.json()["name"] == "light"


# ======================================================================
# Branding
# ======================================================================


class TestBrandingEndpoints:
    async def test_seed_then_read(self, admin_client):
        resp = await admin_client.post("/api/v1/branding/seed")
        assert resp.json() == {
            "success": True,
            "message": "Default branding settings created",
            "count": 7,
        }

        resp = await admin_client.get("/api/v1/branding")
        body = resp.json()
        assert len(body) == 7
        assert body["organizationName"] == "Kafkasder"

        resp = await admin_client.post("/api/v1/branding/seed")
        assert resp.json()["success"] is False

    async def test_update_organization(self, admin_client):
        await admin_client.post("/api/v1/branding/seed")
        resp = await admin_client.put(
            "/api/v1/branding/organization",
            json={"organizationName": "Kafkasder Derneği", "slogan": "Birlikte"},
        )
        assert resp.status_code == 200
        assert sorted(resp.json()["updated"]) == ["organizationName", "slogan"]

        resp = await admin_client.get("/api/v1/settings/branding/organizationName")
        body = resp.json()
        assert body["value"] == "Kafkasder Derneği"
        assert body["version"] == 2
        assert body["is_public"] is True

    async def test_branding_is_public(self, client):
        await client.post("/api/v1/branding/seed", headers=_auth_headers("admin"))
        resp = await client.get("/api/v1/public/settings/branding")
        assert resp.json()["website"] == "https://kafkasder.org"

    async def test_logo_lifecycle(self, admin_client):
        resp = await admin_client.put(
            "/api/v1/branding/logos/main_logo",
            json={"storage_id": "st-1", "url": "https://cdn.test/logo.png"},
        )
        assert resp.status_code == 200
        assert resp.json()["url"] == "https://cdn.test/logo.png"

        resp = await admin_client.get("/api/v1/settings/branding/main_logo")
        body = resp.json()
        assert body["label"] == "Main Logo"
        assert body["data_type"] == "json"
        assert body["value"]["storageId"] == "st-1"

        resp = await admin_client.delete("/api/v1/branding/logos/main_logo")
        assert resp.status_code == 200
        resp = await admin_client.delete("/api/v1/branding/logos/main_logo")
        assert resp.status_code == 404

    async def test_unknown_logo_type(self, admin_client):
        resp = await admin_client.put(
            "/api/v1/branding/logos/banner",
            json={"storage_id": "st-1", "url": "https://cdn.test/logo.png"},
        )
        assert resp.status_code == 422

    async def test_staff_forbidden(self, staff_client):
        assert (await staff_client.get("/api/v1/branding")).status_code == 403


# ======================================================================
# Communication settings
# ======================================================================


class TestCommunicationEndpoints:
    async def test_seed_all_channels(self, admin_client):
        resp = await admin_client.post("/api/v1/communication/seed")
        assert resp.json()["seeded"] == {"email": True, "sms": True, "whatsapp": True}

        resp = await admin_client.post("/api/v1/communication/seed")
        assert resp.json()["seeded"] == {"email": False, "sms": False, "whatsapp": False}

        resp = await admin_client.get("/api/v1/communication")
        body = resp.json()
        assert body["email"]["smtpPort"] == 587
        assert body["sms"]["testMode"] is True

    async def test_update_email_masks_password(self, admin_client):
        resp = await admin_client.put(
            "/api/v1/communication/email",
            json={"smtpHost": "mail.kafkasder.org", "smtpPassword": "hunter2", "enabled": True},
        )
        assert resp.status_code == 200
        assert resp.json()["message"] == "Updated 3 email settings"

        resp = await admin_client.get("/api/v1/communication/email")
        body = resp.json()
        assert body["smtpHost"] == "mail.kafkasder.org"
        assert body["smtpPassword"] == SECRET_MASK

    async def test_masked_password_round_trip_keeps_secret(self, admin_client, settings_service):
        await admin_client.put("/api/v1/communication/email", json={"smtpPassword": "hunter2"})
        await admin_client.put("/api/v1/communication/email", json={"smtpPassword": SECRET_MASK})

        assert await settings_service.get("email", "smtpPassword") == "hunter2"

    async def test_invalid_port(self, admin_client):
        resp = await admin_client.put("/api/v1/communication/email", json={"smtpPort": 0})
        assert resp.status_code == 422

    async def test_sms_test_reports_missing_settings(self, admin_client):
        await admin_client.put("/api/v1/communication/sms", json={"enabled": True})
        resp = await admin_client.post(
            "/api/v1/communication/sms/test", json={"test_phone_number": "+905551234567"}
        )
        body = resp.json()
        assert body["success"] is False
        assert "twilioAccountSid" in body["message"]

    async def test_whatsapp_test_when_configured(self, admin_client):
        await admin_client.put(
            "/api/v1/communication/whatsapp",
            json={
                "phoneNumberId": "123",
                "accessToken": "tok",
                "enabled": True,
                "testMode": True,
            },
        )
        resp = await admin_client.post(
            "/api/v1/communication/whatsapp/test", json={"test_phone_number": "+905551234567"}
        )
        assert resp.json()["success"] is True
        assert resp.json()["test_mode"] is True

    async def test_email_test_when_disabled(self, admin_client):
        await admin_client.post("/api/v1/communication/seed")
        resp = await admin_client.post(
            "/api/v1/communication/email/test", json={"test_email": "me@kafkasder.org"}
        )
        assert resp.json() == {
            "success": False,
            "message": "email channel is disabled",
            "test_mode": False,
        }

    async def test_unknown_channel(self, admin_client):
        resp = await admin_client.get("/api/v1/communication/fax")
        assert resp.status_code == 422


# ======================================================================
# Communication logs
# ======================================================================


class TestCommunicationLogEndpoints:
    async def test_create_and_list(self, client):
        staff = _auth_headers("staff")
        resp = await client.post(
            "/api/v1/communication/logs",
            json={
                "type": "email",
                "to": "donor@example.org",
                "subject": "Teşekkürler",
                "message": "Bağışınız için teşekkürler",
                "status": "sent",
                "metadata": {"campaign": "ramazan"},
            },
            headers=staff,
        )
        assert resp.status_code == 201
        assert resp.json()["to"] == "donor@example.org"

        resp = await client.get("/api/v1/communication/logs", headers=_auth_headers("admin"))
        assert resp.status_code == 200
        assert len(resp.json()) == 1
        assert resp.json()[0]["metadata"] == {"campaign": "ramazan"}

    async def test_staff_cannot_list(self, staff_client):
        assert (await staff_client.get("/api/v1/communication/logs")).status_code == 403

    async def test_bulk_entry_and_stats(self, client):
        staff = _auth_headers("staff")
        resp = await client.post(
            "/api/v1/communication/logs/bulk",
            json={
                "type": "sms",
                "recipient_count": 100,
                "message": "Toplantı hatırlatması",
                "successful": 95,
                "failed": 5,
            },
            headers=staff,
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "sent"
        assert body["to"] == "Bulk: 100 recipients"
        assert body["metadata"]["recipientCount"] == 100
        assert body["metadata"]["bulkOperation"] is True

        await client.post(
            "/api/v1/communication/logs/bulk",
            json={
                "type": "sms",
                "recipient_count": 3,
                "message": "x",
                "successful": 0,
                "failed": 3,
            },
            headers=staff,
        )

        resp = await client.get(
            "/api/v1/communication/logs/stats",
            params={"type": "sms"},
            headers=_auth_headers("admin"),
        )
        assert resp.json() == {"total": 2, "sent": 1, "failed": 1, "pending": 0}

    async def test_filter_by_status(self, client):
        staff = _auth_headers("staff")
        for status_ in ("sent", "failed", "failed"):
            await client.post(
                "/api/v1/communication/logs",
                json={"type": "email", "to": "a@b.org", "message": "m", "status": status_},
                headers=staff,
            )

        resp = await client.get(
            "/api/v1/communication/logs",
            params={"status": "failed"},
            headers=_auth_headers("admin"),
        )
        assert [log["status"] for log in resp.json()] == ["failed", "failed"]

    async def test_bulk_tallies_validated(self, staff_client):
        resp = await staff_client.post(
            "/api/v1/communication/logs/bulk",
            json={
                "type": "sms",
                "recipient_count": 1,
                "message": "x",
                "successful": 1,
                "failed": 1,
            },
        )
        assert resp.status_code == 422


# ======================================================================
# Webhooks
# ======================================================================


class TestWebhookEndpoints:
    async def test_donation_is_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/donation-created", json=make_donation_payload()
        )
        assert resp.status_code == 202
        body = resp.json()
        assert body["queued"] is True
        assert queued_deliveries == [body["event_id"]]

    async def test_low_severity_error_not_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/error-logged",
            json={"error_code": "E42", "title": "Minor", "severity": "low"},
        )
        assert resp.status_code == 202
        assert resp.json()["queued"] is False
        assert queued_deliveries == []

    async def test_critical_error_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/error-logged",
            json={"error_code": "E500", "title": "DB down", "severity": "critical"},
        )
        assert resp.json()["queued"] is True
        assert len(queued_deliveries) == 1

    async def test_telegram_error_type_below_high_not_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/telegram-notify",
            json={
                "type": "error",
                "title": "Minor",
                "recipient_type": "group",
                "severity": "medium",
            },
        )
        assert resp.json()["queued"] is False

    async def test_telegram_error_without_severity_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/telegram-notify",
            json={
                "type": "error",
                "title": "Sunucu hatası",
                "recipient_type": "group",
                "details": {"Severity": "critical"},
            },
        )
        assert resp.json()["queued"] is True
        assert len(queued_deliveries) == 1

    async def test_telegram_general_queued(self, staff_client, queued_deliveries):
        resp = await staff_client.post(
            "/api/v1/webhooks/telegram-notify",
            json={"type": "meeting", "title": "Yönetim toplantısı", "recipient_type": "group"},
        )
        assert resp.json()["queued"] is True

    async def test_invalid_donation(self, staff_client):
        resp = await staff_client.post(
            "/api/v1/webhooks/donation-created", json=make_donation_payload(amount=-5)
        )
        assert resp.status_code == 422

    async def test_outbox_listing(self, client):
        await client.post(
            "/api/v1/webhooks/donation-created",
            json=make_donation_payload(),
            headers=_auth_headers("staff"),
        )

        admin = _auth_headers("admin")
        resp = await client.get("/api/v1/webhooks/outbox", headers=admin)
        assert resp.status_code == 200
        events = resp.json()
        assert len(events) == 1
        assert events[0]["event_type"] == "donation_created"
        assert events[0]["status"] == "pending"
        assert events[0]["attempts"] == 0

        resp = await client.get(
            "/api/v1/webhooks/outbox", params={"status": "succeeded"}, headers=admin
        )
        assert resp.json() == []

    async def test_outbox_requires_admin(self, staff_client):
        assert (await staff_client.get("/api/v1/webhooks/outbox")).status_code == 403

    async def test_requires_auth(self, client):
        resp = await client.post("/api/v1/webhooks/donation-created", json=make_donation_payload())
        assert resp.status_code == 401
