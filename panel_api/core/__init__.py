"""Core building blocks shared by services and workers."""
from panel_api.core.secrets import SettingsCipher
from panel_api.core.setting_definitions import SettingDefinition, get_definition, is_sensitive
from panel_api.core.webhook_gateway import WebhookGateway, should_forward

__all__ = [
    "SettingDefinition",
    "SettingsCipher",
    "WebhookGateway",
    "get_definition",
    "is_sensitive",
    "should_forward",
]
