import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    # Supabase (PostgREST + GoTrue)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    HTTP_TIMEOUT: int = int(os.getenv("LICITAX_HTTP_TIMEOUT", "30"))

    # Annuaire des entreprises
    DIRECTORY_PAGE_SIZE: int = 9
    SKELETON_CARDS: int = 6
    DISTINCT_VALUES_RPC: str = "get_distinct_column_values"

    # Comptes
    MIN_PASSWORD_LENGTH: int = 6

    # App
    APP_TITLE: str = "Licitax"
    LOG_LEVEL: str = os.getenv("LICITAX_LOG_LEVEL", "INFO")

    @property
    def rest_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1"


SETTINGS = Settings()
