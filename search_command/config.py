import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

RESOURCES_DIR = Path(__file__).parent / "resources"


class Settings:
    # Bot Framework registration (empty values disable auth for local emulator runs)
    APP_ID = os.getenv("MICROSOFT_APP_ID", "")
    APP_PASSWORD = os.getenv("MICROSOFT_APP_PASSWORD", "")
    TENANT_ID = os.getenv("MICROSOFT_APP_TENANT_ID")

    # NuGet search API
    NUGET_SEARCH_URL = os.getenv(
        "NUGET_SEARCH_URL",
        "https://azuresearch-usnc.nuget.org/query"
    )
    NUGET_SEARCH_TIMEOUT = float(os.getenv("NUGET_SEARCH_TIMEOUT", "30"))

    # Card templates
    PACKAGE_CARD_PATH = Path(os.getenv("PACKAGE_CARD_PATH", RESOURCES_DIR / "PackageCard.json"))
    DESIGNER_CARD_PATH = Path(os.getenv("DESIGNER_CARD_PATH", RESOURCES_DIR / "DesignerCard.json"))

    # API Configuration
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 3978))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @property
    def template_paths(self):
        """Template name -> file path mapping handed to the card template resolver."""
        return {
            "package": self.PACKAGE_CARD_PATH,
            "designer": self.DESIGNER_CARD_PATH,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
