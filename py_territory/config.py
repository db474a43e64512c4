"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Map Generation Configuration
    default_grid_width: int = Field(default=32, description="Default grid width in cells")
    default_grid_height: int = Field(default=18, description="Default grid height in cells")
    default_zone_count: int = Field(default=10, ge=1, le=100, description="Default number of regions")
    default_seed: str = Field(default="", description="Default seed string")
    max_grid_width: int = Field(default=512, description="Max allowed grid width")
    max_grid_height: int = Field(default=512, description="Max allowed grid height")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
