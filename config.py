"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Sub-configs are composed onto AppSettings in a model_validator so each
concern can also be instantiated on its own (tests, scripts).
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "linklens"


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_issuer: str = "linklens"
    jwt_audience: str = "linklens.api"

    # RS256 keys (preferred)
    jwt_private_key: str = ""
    jwt_public_key: str = ""

    # HS256 fallback (used when RS256 keys are absent)
    jwt_secret: str = ""

    @property
    def use_rs256(self) -> bool:
        return bool(self.jwt_private_key and self.jwt_public_key)

    @property
    def algorithm(self) -> str:
        return "RS256" if self.use_rs256 else "HS256"

    @property
    def verification_key(self) -> str:
        if self.use_rs256:
            # Keys provided via env may carry literal \n sequences
            return self.jwt_public_key.replace("\\n", "\n")
        return self.jwt_secret


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    # Sampling rates (0.0–1.0)
    sample_rate_analytics: float = 0.20
    sample_rate_click: float = 0.05

    @property
    def is_production(self) -> bool:
        return self.env == "production"


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AnalyticsSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    top_n: int = Field(default=10, ge=1)
    recent_clicks_limit: int = Field(default=100, ge=0)

    # Fail the whole request on a stored referrer that is neither "Direct"
    # nor an absolute URL, instead of grouping it under "Direct".
    strict_referrers: bool = False


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "linklens"

    # CORS: all origins, credentials allowed
    cors_origins: list[str] = ["*"]

    # GeoIP database paths (configurable for self-hosters)
    geoip_city_db: str = "misc/GeoLite2-City.mmdb"
    geoip_asn_db: str = "misc/GeoLite2-ASN.mmdb"

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    jwt: Optional[JWTSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None
    analytics: Optional[AnalyticsSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.db is None:
            self.db = DatabaseSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        if self.analytics is None:
            self.analytics = AnalyticsSettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
