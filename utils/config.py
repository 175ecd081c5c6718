"""Configuration management for the application."""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logger
logger = logging.getLogger(__name__)


class Config:
    """Application configuration."""

    # Outreach Service Configuration
    API_URL_BASE: str = os.getenv("API_URL_BASE", "").rstrip("/")
    GENERATE_ENDPOINT: str = os.getenv("GENERATE_ENDPOINT", "/generate-outreach")
    TEMPLATES_ENDPOINT: str = os.getenv("TEMPLATES_ENDPOINT", "/templates")

    # Email Configuration
    SUBJECT_LINE: str = os.getenv(
        "SUBJECT_LINE", "ReFED Catalytic Grant Fund: Minimizing Methane"
    )

    # Record Source Configuration
    TABLE_NAME: str = os.getenv("TABLE_NAME", "Outreach")
    RECORDS_FILE: str = os.getenv("RECORDS_FILE", "in/outreach.csv")

    # Application Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def templates_url(cls, base_url: Optional[str] = None) -> str:
        return (base_url or cls.API_URL_BASE).rstrip("/") + cls.TEMPLATES_ENDPOINT

    @classmethod
    def generate_url(cls, base_url: Optional[str] = None) -> str:
        return (base_url or cls.API_URL_BASE).rstrip("/") + cls.GENERATE_ENDPOINT

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is present."""
        required_keys = ["API_URL_BASE", "SUBJECT_LINE"]
        missing_keys = [key for key in required_keys if not getattr(cls, key)]

        if missing_keys:
            logger.error(
                f"Missing required environment variables: {', '.join(missing_keys)}"
            )
            return False

        return True
