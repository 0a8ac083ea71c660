"""
Configuration management using Pydantic Settings.
Supports environment-based configuration for the place-search library.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Literal, Optional
from enum import Enum

from placefinder.schemas.place import Coordinates


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PlacesSettings(BaseSettings):
    """Upstream places/geocoding provider configuration"""
    
    api_key: Optional[str] = Field(
        default=None,
        description="API key sent as a header (structured) or query parameter (legacy)"
    )
    provider: Literal["structured", "legacy"] = Field(default="structured")
    structured_base_url: str = Field(default="https://places.googleapis.com/v1")
    legacy_base_url: str = Field(default="https://maps.googleapis.com/maps/api/place")
    nearby_radius_m: int = Field(default=3000, ge=1, le=50000)
    photo_max_width_px: int = Field(default=400, ge=1, le=4800)
    max_reviews: int = Field(default=5, ge=1, le=20)
    timeout_seconds: Optional[float] = Field(
        default=10.0,
        description="Per-request timeout; None leaves requests unbounded"
    )
    
    # Penang, used when a query cannot be resolved
    fallback_lat: float = Field(default=5.4164, ge=-90.0, le=90.0)
    fallback_lng: float = Field(default=100.3327, ge=-180.0, le=180.0)
    
    @field_validator('provider', mode='before')
    @classmethod
    def normalize_provider(cls, v):
        """Accept provider names in any case"""
        if isinstance(v, str):
            return v.strip().lower()
        return v
    
    @property
    def fallback_coordinates(self) -> Coordinates:
        """Fixed location searched when resolution fails"""
        return Coordinates(lat=self.fallback_lat, lng=self.fallback_lng)
    
    model_config = {
        "env_prefix": "PLACES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main library settings"""
    
    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: Literal["json", "text"] = Field(default="json")
    
    places: PlacesSettings = Field(default_factory=PlacesSettings)
    
    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get library settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
