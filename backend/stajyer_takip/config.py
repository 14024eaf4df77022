"""
stajyer_takip/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment
and lazily initializes the Firebase Admin SDK (Auth, Firestore) using the provided credentials.
Nothing touches Firebase at import time; `get_firebase_app()` and `get_firestore()` build the
handles on first use so that tests can inject their own backend instead.
"""
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    firebase_cred_file: str = Field('firebase_service_account.json', description="Service account JSON")
    firebase_project_id: str = Field('', description="Firebase project id")

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None

    firebase_web_api_key: str = Field('', description="Identity Toolkit web API key")
    identity_toolkit_url: str = "https://identitytoolkit.googleapis.com/v1"

    # Firestore: database + collection ids
    firestore_database: str = "(default)"
    users_collection: str = "users"
    activities_collection: str = "activities"

    # Session cookie (tek oturum taşıyıcısı)
    session_cookie_name: str = "stajyer_session"
    session_ttl_days: int = 5
    session_cookie_secure: bool = False
    route_guard_enabled: bool = True

    # İstatistik taraması: sayfa boyu + üst sınır
    stats_page_size: int = 500
    stats_max_rows: int = 5000

    timezone: str = "Europe/Istanbul"
    http_timeout: float = 10.0

    debug: bool = False
    log_level: str = "INFO"
    allowed_origins: str = '*'  # Comma-separated list or '*' for all

    def model_post_init(self, __context):
        """Validate Firebase Web API Key format"""
        if self.firebase_web_api_key and not self.firebase_web_api_key.startswith('AIza'):
            raise ValueError("FIREBASE_WEB_API_KEY must be a valid Firebase Web API Key starting with 'AIza'")

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def _credentials(settings: Settings):
    # Check if we have environment variables for Firebase credentials (Cloud Run)
    if all([
        settings.firebase_private_key_id,
        settings.firebase_private_key,
        settings.firebase_client_email,
        settings.firebase_client_id,
        settings.firebase_auth_uri,
        settings.firebase_token_uri,
        settings.firebase_auth_provider_x509_cert_url,
        settings.firebase_client_x509_cert_url
    ]):
        cred_dict = {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key_id": settings.firebase_private_key_id,
            # .env içinde tek satır tutulan anahtarlar "\n" kaçışlı gelir
            "private_key": settings.firebase_private_key.replace("\\n", "\n"),
            "client_email": settings.firebase_client_email,
            "client_id": settings.firebase_client_id,
            "auth_uri": settings.firebase_auth_uri,
            "token_uri": settings.firebase_token_uri,
            "auth_provider_x509_cert_url": settings.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": settings.firebase_client_x509_cert_url
        }
        return credentials.Certificate(cred_dict)
    # Use service account file (local development)
    return credentials.Certificate(settings.firebase_cred_file)


@lru_cache
def get_firebase_app() -> firebase_admin.App:
    settings = get_settings()
    try:
        return firebase_admin.initialize_app(
            _credentials(settings),
            {'projectId': settings.firebase_project_id},
        )
    except ValueError as e:
        if "already exists" in str(e):
            # Firebase app already initialized, get the default app
            return firebase_admin.get_app()
        raise


def get_firestore():
    """Firestore client bound to the configured database id."""
    settings = get_settings()
    return firestore.client(app=get_firebase_app(), database_id=settings.firestore_database)
