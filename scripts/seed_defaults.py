"""Seed default branding, communication settings and theme presets.

Safe to run repeatedly: categories that already hold settings and presets
that already exist are left untouched.
"""
import asyncio
import sys
from pathlib import Path

import yaml

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from panel_api.config import get_settings
from panel_api.core.secrets import SettingsCipher
from panel_api.dependencies import create_engine, create_session_factory
from panel_api.repositories.settings_repository import SettingsRepository
from panel_api.repositories.theme_repository import ThemeRepository
from panel_api.services.branding_service import BrandingService
from panel_api.services.communication_service import CommunicationService
from panel_api.services.settings_service import SettingsService
from panel_api.services.theme_service import ThemeService

PRESETS_PATH = Path(__file__).parent.parent / "themes" / "default_presets.yaml"


def load_presets(path: Path = PRESETS_PATH) -> list[dict]:
    if not path.exists():
        print(f"Presets file not found: {path}")
        return []
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return data.get("presets", [])


async def main() -> None:
    print("Seeding panel defaults...")

    settings = get_settings()
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        settings_service = SettingsService(
            SettingsRepository(session), SettingsCipher(settings.settings_encryption_key)
        )

        branding = await BrandingService(settings_service).seed_defaults()
        print(f"  branding: {'seeded' if branding else 'already present'}")

        channels = await CommunicationService(settings_service).seed_defaults()
        for channel, seeded in channels.items():
            print(f"  {channel}: {'seeded' if seeded else 'already present'}")

        added = await ThemeService(ThemeRepository(session)).seed(load_presets())
        print(f"  themes: {added} preset(s) added")

        await session.commit()

    await engine.dispose()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
