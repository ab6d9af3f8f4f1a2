"""Shared constants used across the application."""

# Setting categories: lowercase identifiers (e.g. branding, email, sms)
CATEGORY_PATTERN = r"^[a-z][a-z0-9_]{0,99}$"

# Setting keys: identifiers as used by the admin UI (e.g. smtpHost, main_logo)
SETTING_KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_.-]{0,99}$"

# Theme preset names (e.g. light, dark, high-contrast)
THEME_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9 _-]{0,99}$"

# Path segments under /themes that are routes of their own.
RESERVED_THEME_NAMES = frozenset({"default"})

# E.164-ish phone numbers for connection tests
PHONE_PATTERN = r"^\+?[0-9 ()-]{6,20}$"
