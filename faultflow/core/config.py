"""Client configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Firebase project
    firebase_project_id: str
    functions_region: str = "europe-west1"
    update_status_function: str = "updateFaultReportStatus"

    # Firestore
    firestore_database: str = "(default)"
    firestore_base_url: str = "https://firestore.googleapis.com/v1"

    # Local emulators ("host:port"), override the production endpoints
    firestore_emulator_host: Optional[str] = None
    functions_emulator_host: Optional[str] = None

    # Transport
    request_timeout_seconds: float = 10.0

    @property
    def documents_url(self) -> str:
        """Root of the Firestore documents REST resource."""
        base = self.firestore_base_url
        if self.firestore_emulator_host:
            base = f"http://{self.firestore_emulator_host}/v1"
        return (
            f"{base}/projects/{self.firebase_project_id}"
            f"/databases/{self.firestore_database}/documents"
        )

    def callable_url(self, name: str) -> str:
        """URL of an HTTPS callable function."""
        if self.functions_emulator_host:
            return (
                f"http://{self.functions_emulator_host}/"
                f"{self.firebase_project_id}/{self.functions_region}/{name}"
            )
        return (
            f"https://{self.functions_region}-{self.firebase_project_id}"
            f".cloudfunctions.net/{name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
