"""Configuration for the calendar feed."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from calfeed.exceptions import ConfigurationError

try:
    from dotenv import load_dotenv
except ImportError:
    load_dotenv = None


class FeedConfig(BaseModel):
    """Feed configuration with Pydantic validation."""

    # Record store
    data_dir: Path = Field(default=Path("data"))
    fetch_workers: int = Field(default=2, ge=1)

    # Organization identity (PRODID, UID domain, calendar names)
    org_name: str = Field(default="Black Women Cultivating Change")
    org_short_name: str = Field(default="BWCC")
    org_domain: str = Field(default="bwcc.org")
    calendar_color: str = Field(default="#FFA500")

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="calfeed.log")

    @field_validator("org_domain", "org_name", "org_short_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Identity fields end up in UIDs and headers, so they can't be empty."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @classmethod
    def from_env(cls) -> "FeedConfig":
        """Load configuration from environment variables and .env file."""
        if load_dotenv is not None:
            load_dotenv()

        config_dict = {}

        if "CALFEED_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["CALFEED_DATA_DIR"])
        if "CALFEED_FETCH_WORKERS" in os.environ:
            try:
                config_dict["fetch_workers"] = int(os.environ["CALFEED_FETCH_WORKERS"])
            except ValueError:
                pass  # Keep default if invalid

        if "CALFEED_ORG_NAME" in os.environ:
            config_dict["org_name"] = os.environ["CALFEED_ORG_NAME"]
        if "CALFEED_ORG_SHORT_NAME" in os.environ:
            config_dict["org_short_name"] = os.environ["CALFEED_ORG_SHORT_NAME"]
        if "CALFEED_ORG_DOMAIN" in os.environ:
            config_dict["org_domain"] = os.environ["CALFEED_ORG_DOMAIN"]
        if "CALFEED_CALENDAR_COLOR" in os.environ:
            config_dict["calendar_color"] = os.environ["CALFEED_CALENDAR_COLOR"]

        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid feed configuration: {e}") from e
