"""Unit tests for database models and enums."""

import pytest

from panel_api.models import (
    CommunicationLog,
    CommunicationStatus,
    CommunicationType,
    DataType,
    OutboxStatus,
    SystemSetting,
    ThemePreset,
    UserRole,
    WebhookEventType,
)


class TestDataTypeEnum:
    """Tests for DataType and its inference from Python values."""

    def test_all_types_defined(self):
        assert {t.value for t in DataType} == {"string", "number", "boolean", "json"}

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("smtp.gmail.com", DataType.STRING),
            (587, DataType.NUMBER),
            (0.5, DataType.NUMBER),
            (True, DataType.BOOLEAN),
            (False, DataType.BOOLEAN),
            ({"url": "x"}, DataType.JSON),
            (["a", "b"], DataType.JSON),
            (None, DataType.STRING),
        ],
    )
    def test_infer(self, value, expected):
        assert DataType.infer(value) == expected

    def test_bool_is_not_a_number(self):
        """bool subclasses int; it must still infer as boolean."""
        assert DataType.infer(True) is DataType.BOOLEAN


class TestCommunicationEnums:
    def test_channels(self):
        assert [c.value for c in CommunicationType] == ["email", "sms", "whatsapp"]

    def test_statuses(self):
        assert {s.value for s in CommunicationStatus} == {"sent", "failed", "pending"}

    def test_string_coercion(self):
        assert CommunicationType.EMAIL == "email"
        assert CommunicationType("sms") is CommunicationType.SMS

    def test_invalid_channel_raises(self):
        with pytest.raises(ValueError):
            CommunicationType("fax")


class TestOutboxEnums:
    def test_event_types(self):
        assert {e.value for e in WebhookEventType} == {
            "donation_created",
            "error_logged",
            "telegram_notify",
        }

    def test_statuses(self):
        assert {s.value for s in OutboxStatus} == {"pending", "succeeded", "failed"}


class TestUserRoleEnum:
    def test_roles(self):
        assert {r.value for r in UserRole} == {"super_admin", "admin", "staff"}


class TestTableDefinitions:
    """Schema-level guarantees the services rely on."""

    def test_setting_category_key_is_unique(self):
        constraints = {c.name for c in SystemSetting.__table__.constraints}
        assert "uq_system_settings_category_key" in constraints

    def test_setting_version_is_mapper_version_counter(self):
        mapper = SystemSetting.__mapper__
        assert mapper.version_id_col is SystemSetting.__table__.c.version

    def test_single_default_theme_index(self):
        index = next(
            i for i in ThemePreset.__table__.indexes if i.name == "uq_theme_presets_single_default"
        )
        assert index.unique is True
        assert index.dialect_options["postgresql"]["where"] is not None
        assert index.dialect_options["sqlite"]["where"] is not None

    def test_communication_log_metadata_column_name(self):
        """The attribute is extra_metadata; the column keeps the API name."""
        assert "metadata" in CommunicationLog.__table__.c
        assert CommunicationLog.extra_metadata.property.columns[0].name == "metadata"

    def test_setting_repr(self):
        setting = SystemSetting(category="email", key="smtpHost", version=3)
        assert repr(setting) == "<SystemSetting email.smtpHost v3>"
