"""Declared setting schemas.

Each known setting is described once here: its label, default value, data
type and whether it holds a secret. Sensitivity of undeclared keys falls
back to a key-name heuristic.
"""

from dataclasses import dataclass
from typing import Any

from panel_api.models.communication_log import CommunicationType
from panel_api.models.setting import DataType

BRANDING_CATEGORY = "branding"

SENSITIVE_KEY_MARKERS = ("password", "token", "secret")


@dataclass(frozen=True)
class SettingDefinition:
    """Schema entry for a single setting."""

    key: str
    default: Any
    label: str
    description: str | None = None
    sensitive: bool = False
    is_public: bool = False
    required: bool = False

    @property
    def data_type(self) -> DataType:
        return DataType.infer(self.default)

    def as_seed(self) -> dict[str, Any]:
        """Row values used when seeding this setting."""
        return {
            "key": self.key,
            "value": self.default,
            "label": self.label,
            "description": self.description,
            "is_public": self.is_public,
            "is_encrypted": self.sensitive,
            "data_type": self.data_type,
            "default_value": self.default,
        }


EMAIL_DEFINITIONS: tuple[SettingDefinition, ...] = (
    SettingDefinition("smtpHost", "smtp.gmail.com", "SMTP Host", required=True),
    SettingDefinition("smtpPort", 587, "SMTP Port", required=True),
    SettingDefinition("smtpUser", "", "SMTP User"),
    SettingDefinition("smtpPassword", "", "SMTP Password", sensitive=True),
    SettingDefinition("smtpSecure", True, "SMTP Secure (TLS)"),
    SettingDefinition("fromEmail", "noreply@kafkasder.org", "From Email", required=True),
    SettingDefinition("fromName", "Kafkasder", "From Name"),
    SettingDefinition("replyToEmail", "info@kafkasder.org", "Reply-To Email"),
    SettingDefinition("enabled", False, "Email Enabled"),
)

SMS_DEFINITIONS: tuple[SettingDefinition, ...] = (
    SettingDefinition(
        "twilioAccountSid", "", "Twilio Account SID", sensitive=True, required=True
    ),
    SettingDefinition("twilioAuthToken", "", "Twilio Auth Token", sensitive=True, required=True),
    SettingDefinition("twilioPhoneNumber", "", "Twilio Phone Number", required=True),
    SettingDefinition("twilioMessagingServiceSid", "", "Messaging Service SID", sensitive=True),
    SettingDefinition("enabled", False, "SMS Enabled"),
    SettingDefinition("testMode", True, "Test Mode"),
)

WHATSAPP_DEFINITIONS: tuple[SettingDefinition, ...] = (
    SettingDefinition("phoneNumberId", "", "Phone Number ID", required=True),
    SettingDefinition("accessToken", "", "Access Token", sensitive=True, required=True),
    SettingDefinition("businessAccountId", "", "Business Account ID"),
    SettingDefinition("webhookVerifyToken", "", "Webhook Verify Token", sensitive=True),
    SettingDefinition("enabled", False, "WhatsApp Enabled"),
    SettingDefinition("testMode", True, "Test Mode"),
)

CHANNEL_DEFINITIONS: dict[CommunicationType, tuple[SettingDefinition, ...]] = {
    CommunicationType.EMAIL: EMAIL_DEFINITIONS,
    CommunicationType.SMS: SMS_DEFINITIONS,
    CommunicationType.WHATSAPP: WHATSAPP_DEFINITIONS,
}

BRANDING_DEFINITIONS: tuple[SettingDefinition, ...] = (
    SettingDefinition(
        "organizationName",
        "Kafkasder",
        "Organizasyon Adı",
        "Derneğin resmi adı",
        is_public=True,
    ),
    SettingDefinition(
        "slogan",
        "Yardımlaşma ve Dayanışma Derneği",
        "Slogan",
        "Organizasyon sloganı",
        is_public=True,
    ),
    SettingDefinition(
        "footerText",
        "© 2024 Kafkasder. Tüm hakları saklıdır.",
        "Footer Metni",
        "Sayfa altı telif hakkı metni",
        is_public=True,
    ),
    SettingDefinition(
        "contactEmail",
        "info@kafkasder.org",
        "İletişim E-postası",
        "Genel iletişim e-posta adresi",
        is_public=True,
    ),
    SettingDefinition(
        "contactPhone",
        "+90 XXX XXX XX XX",
        "İletişim Telefonu",
        "Genel iletişim telefon numarası",
        is_public=True,
    ),
    SettingDefinition(
        "address",
        "İstanbul, Türkiye",
        "Adres",
        "Fiziksel adres",
        is_public=True,
    ),
    SettingDefinition(
        "website",
        "https://kafkasder.org",
        "Website",
        "Resmi web sitesi",
        is_public=True,
    ),
)

_REGISTRY: dict[tuple[str, str], SettingDefinition] = {
    (str(channel), d.key): d for channel, defs in CHANNEL_DEFINITIONS.items() for d in defs
}
_REGISTRY.update({(BRANDING_CATEGORY, d.key): d for d in BRANDING_DEFINITIONS})


def get_definition(category: str, key: str) -> SettingDefinition | None:
    """Return the declared schema entry for ``(category, key)``, if any."""
    return _REGISTRY.get((category, key))


def is_sensitive(category: str, key: str, explicit: bool | None = None) -> bool:
    """Decide whether a setting holds a secret.

    An explicit flag wins, then the declared definition, then the
    key-name heuristic.
    """
    if explicit is not None:
        return explicit
    definition = get_definition(category, key)
    if definition is not None:
        return definition.sensitive
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


def logo_label(logo_type: str) -> str:
    """``main_logo`` -> ``Main Logo``."""
    return " ".join(word.capitalize() for word in logo_type.split("_"))
