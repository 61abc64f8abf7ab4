from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    redis_url: str = "redis://localhost:6379"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Calibrated study area. Every demand/capacity constant in the
    # impact engine is tuned for this one location.
    area_name: str = "Kilimani, Nairobi"

    # Zoning rules for the study area
    zone_type: str = "R3 - High Density Residential"
    max_floors: int = 10
    max_units: int = 80
    required_documents: list[str] = [
        "LPDP Submission",
        "Traffic Impact Assessment",
    ]

    # Analysis cache lifetime (seconds)
    cache_ttl_seconds: int = 3600

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
