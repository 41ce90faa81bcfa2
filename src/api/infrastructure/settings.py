"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        FLEET_DB_HOST: Database host (default: localhost)
        FLEET_DB_PORT: Database port (default: 5432)
        FLEET_DB_DATABASE: Database name (default: fleet)
        FLEET_DB_USERNAME: Database user (default: fleet)
        FLEET_DB_PASSWORD: Database password (required in production)
        FLEET_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        FLEET_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="FLEET_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="fleet", description="Database name")
    username: str = Field(default="fleet", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class SupabaseSettings(BaseSettings):
    """Supabase project settings (identity provider and blob store).

    Environment variables:
        FLEET_SUPABASE_URL: Project URL
        FLEET_SUPABASE_SERVICE_ROLE_KEY: Service role key for admin operations
        FLEET_SUPABASE_ANON_KEY: Public key used for password sign-in
        FLEET_SUPABASE_DOCUMENTS_BUCKET: Private bucket for verification documents
        FLEET_SUPABASE_IMAGES_BUCKET: Public bucket for listing photos
        FLEET_SUPABASE_TIMEOUT_SECONDS: Per-call timeout (default: 15)
    """

    model_config = SettingsConfigDict(
        env_prefix="FLEET_SUPABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="http://localhost:54321", description="Project URL")
    service_role_key: SecretStr = Field(
        default=SecretStr(""),
        description="Service role key (bypasses the signups-disabled gate)",
    )
    anon_key: SecretStr = Field(
        default=SecretStr(""),
        description="Anonymous key used for end-user sign in",
    )
    documents_bucket: str = Field(
        default="sacco-docs",
        description="Bucket holding tenant verification documents",
    )
    images_bucket: str = Field(
        default="vehicle-images",
        description="Bucket holding listing photos",
    )
    timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for a single identity or storage call",
        gt=0,
        le=120,
    )


class SafetySettings(BaseSettings):
    """Image safety screening settings.

    Environment variables:
        FLEET_SAFETY_VISION_API_KEY: Google Cloud Vision API key
        FLEET_SAFETY_VISION_ENDPOINT: SafeSearch annotate endpoint
        FLEET_SAFETY_TIMEOUT_SECONDS: Per-image classification timeout (default: 10)
        FLEET_SAFETY_FAIL_OPEN: Accept images when the classifier is down (default: false)
        FLEET_ENVIRONMENT: Deployment environment (default: production)
    """

    model_config = SettingsConfigDict(
        env_prefix="FLEET_SAFETY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    vision_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google Cloud Vision API key",
    )
    vision_endpoint: str = Field(
        default="https://vision.googleapis.com/v1/images:annotate",
        description="Vision annotate endpoint",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for one classification call",
        gt=0,
        le=60,
    )
    fail_open: bool = Field(
        default=False,
        description="Development only: treat classifier outages as safe",
    )
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("FLEET_ENVIRONMENT", "environment"),
        description="Deployment environment name",
    )

    @model_validator(mode="after")
    def validate_fail_open(self) -> "SafetySettings":
        """Refuse the fail-open override in production."""
        if self.fail_open and self.environment.lower() in ("prod", "production"):
            raise ValueError(
                "fail_open cannot be enabled when environment is production"
            )
        return self


class MediaSettings(BaseSettings):
    """Listing media limits.

    Environment variables:
        FLEET_MEDIA_MAX_EXTERIOR_IMAGES: Exterior photo cap per listing (default: 4)
        FLEET_MEDIA_MAX_INTERIOR_IMAGES: Interior photo cap per listing (default: 4)
    """

    model_config = SettingsConfigDict(
        env_prefix="FLEET_MEDIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_exterior_images: int = Field(default=4, ge=0, le=20)
    max_interior_images: int = Field(default=4, ge=0, le=20)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Fleet Onboarding API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_supabase_settings() -> SupabaseSettings:
    """Get cached Supabase settings."""
    return SupabaseSettings()


@lru_cache
def get_safety_settings() -> SafetySettings:
    """Get cached safety screening settings."""
    return SafetySettings()


@lru_cache
def get_media_settings() -> MediaSettings:
    """Get cached media settings."""
    return MediaSettings()
