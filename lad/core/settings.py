"""
Environment settings module.

This module declares every environment variable the application reads,
using Pydantic for validation. Settings are loaded from the process
environment and an optional ``.env`` file with type conversion applied,
then handed to the configuration pipeline as a read-only map.
"""

from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import EmailStr, Field, field_validator


class Settings(BaseSettings):
    """
    Application environment with validation and documentation.

    Defaults mirror a local development checkout so that an empty
    environment still yields a runnable configuration.
    """

    # Core Settings
    ENVIRONMENT: str = Field(
        default="development",
        description="Deployment environment (development, test, production)"
    )
    APP_NAME: str = Field(default="Lad", description="Application display name")

    # Server Settings
    WEB_PROTOCOL: str = Field(default="http", description="Protocol of the web server")
    WEB_HOST: str = Field(default="localhost", description="Host of the web server")
    WEB_PORT: int = Field(default=3000, description="Port of the web server")
    WEB_URL: str = Field(default="http://localhost:3000", description="Public URL of the web server")
    API_PROTOCOL: str = Field(default="http", description="Protocol of the API server")
    API_HOST: str = Field(default="localhost", description="Host of the API server")
    API_PORT: int = Field(default=4000, description="Port of the API server")
    API_URL: str = Field(default="http://localhost:4000", description="Public URL of the API server")
    WEB_REQUEST_TIMEOUT_MS: int = Field(default=10000, description="Web request timeout in milliseconds")
    API_REQUEST_TIMEOUT_MS: int = Field(default=10000, description="API request timeout in milliseconds")
    TRUST_PROXY: bool = Field(default=False, description="Trust X-Forwarded-* headers")
    LIVERELOAD_PORT: int = Field(default=35729, description="Port used by the livereload server")

    # App Settings
    CONTACT_REQUEST_MAX_LENGTH: int = Field(
        default=300,
        description="Maximum length of a contact form message"
    )
    COOKIES_KEY: str = Field(default="lad.sid", description="Name of the session cookie")
    SESSION_KEYS: Annotated[List[str], NoDecode] = Field(
        default=["changeme"],
        description="Comma separated keys used to sign session cookies"
    )
    SHOW_STACK: bool = Field(default=True, description="Include stack traces in log output")
    GOOGLE_ANALYTICS: Optional[str] = Field(default=None, description="Google Analytics tracking id")
    GOOGLE_TRANSLATE_KEY: Optional[str] = Field(default=None, description="Google Translate API key")
    IS_CACTI_ENABLED: bool = Field(default=False, description="Enable Cacti backups")

    # Email Settings
    EMAIL_DEFAULT_FROM: EmailStr = Field(
        default="support@example.com",
        description="Default sender address for outgoing mail"
    )
    SEND_EMAIL: bool = Field(default=False, description="Deliver outgoing mail over the network")
    MAIL_SERVICE: str = Field(default="postmark", description="Name of the mail delivery service")
    MAIL_API_TOKEN: Optional[str] = Field(default=None, description="Mail delivery service API token")

    # Database and Jobs
    DATABASE_URL: str = Field(default="mongodb://localhost:27017/lad_development", description="Database URL")
    DATABASE_DEBUG: bool = Field(default=False, description="Log database queries")
    JOBS_MAX_CONCURRENCY: int = Field(default=20, description="Maximum concurrently running jobs")
    JOBS_COLLECTION_NAME: str = Field(default="jobs", description="Collection used by the job scheduler")
    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis URL")

    # Object Storage
    STORAGE_URL: Optional[str] = Field(default=None, description="Object storage project URL")
    STORAGE_KEY: Optional[str] = Field(default=None, description="Object storage service key")
    STORAGE_BUCKET: str = Field(default="lad", description="Bucket receiving uploaded assets")
    CDN_DOMAIN: Optional[str] = Field(default=None, description="CDN domain fronting the bucket")

    # Authentication
    AUTH_LOCAL_ENABLED: bool = Field(default=True, description="Enable email and password login")
    AUTH_FACEBOOK_ENABLED: bool = Field(default=False, description="Enable Facebook login")
    AUTH_TWITTER_ENABLED: bool = Field(default=False, description="Enable Twitter login")
    AUTH_GOOGLE_ENABLED: bool = Field(default=False, description="Enable Google login")
    AUTH_GITHUB_ENABLED: bool = Field(default=False, description="Enable GitHub login")
    AUTH_LINKEDIN_ENABLED: bool = Field(default=False, description="Enable LinkedIn login")
    AUTH_INSTAGRAM_ENABLED: bool = Field(default=False, description="Enable Instagram login")
    AUTH_STRIPE_ENABLED: bool = Field(default=False, description="Enable Stripe login")
    GOOGLE_CLIENT_ID: Optional[str] = Field(default=None, description="Google OAuth client id")
    GOOGLE_CLIENT_SECRET: Optional[str] = Field(default=None, description="Google OAuth client secret")

    # Stripe Settings
    STRIPE_SECRET_KEY: Optional[str] = Field(default=None, description="Stripe secret API key")
    STRIPE_PUBLISHABLE_KEY: Optional[str] = Field(default=None, description="Stripe publishable key")

    @field_validator("SESSION_KEYS", mode="before")
    @classmethod
    def assemble_session_keys(cls, v: str | List[str]) -> List[str]:
        """Split comma separated session keys."""
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
