"""Configuration settings for the recap insight engine."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(default="")
    riot_region: str = Field(default="americas")
    riot_platform: str = Field(default="na1")
    riot_max_retries: int = Field(
        default=3, description="Retries on 429 before giving up on a request"
    )
    riot_request_timeout: float = Field(default=10.0)

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    season: str = Field(default="2025")

    # Cache Configuration
    match_cache_ttl: int = Field(
        default=604800,  # 7 days - match data is immutable
        description="TTL in seconds for normalized match records",
    )
    insight_cache_ttl: int = Field(
        default=3600, description="TTL in seconds for computed scene payloads"
    )
    cache_sweep_interval: float = Field(default=60.0)

    # Fetch Configuration
    fetch_batch_size: int = Field(default=10)
    fetch_batch_delay_ms: int = Field(default=100)

    # Heuristics
    gank_death_fraction: float = Field(
        default=0.35,
        description="Share of a laner's deaths attributed to jungle pressure",
    )
    death_timer_base_seconds: float = Field(default=15.0)
    death_timer_per_minute: float = Field(default=1.5)
    death_timer_cap_seconds: float = Field(default=60.0)
    lp_per_win: float = Field(default=20.0)
    lp_per_loss: float = Field(default=-18.0)
    growth_trend_threshold_pct: float = Field(default=10.0)

    @property
    def fetch_batch_delay(self) -> float:
        """Delay between fetch batches in seconds."""
        return self.fetch_batch_delay_ms / 1000

    @field_validator("gank_death_fraction")
    @classmethod
    def validate_gank_fraction(cls, v: float) -> float:
        """Reject fractions that cannot describe a share of deaths."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"gank_death_fraction must be within [0, 1], got {v}")
        return v

    @field_validator("riot_max_retries")
    @classmethod
    def validate_retry_budget(cls, v: int) -> int:
        """A negative retry budget is meaningless."""
        if v < 0:
            raise ValueError("riot_max_retries must not be negative")
        return v

    @field_validator("fetch_batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        """The fetch mapper needs at least one item per batch."""
        if v < 1:
            raise ValueError("fetch_batch_size must be at least 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
