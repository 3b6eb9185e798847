"""
Configuration management for the account-guard CLI.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

@dataclass
class Config:
    """Configuration settings for the account-guard CLI."""

    # Database settings
    database_url: str

    # Processing settings
    batch_size: int = 100
    error_limit: int = 1000

    # Duplicate check settings
    debounce_seconds: float = 0.5
    search_limit: int = 50

    # Logging settings
    log_level: str = 'INFO'

    # Output settings
    output_format: str = 'text'  # text, json

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If required environment variables are missing or malformed
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        database_url = os.getenv('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")

        try:
            return cls(
                database_url=database_url,
                batch_size=int(os.getenv('BATCH_SIZE', '100')),
                error_limit=int(os.getenv('ERROR_LIMIT', '1000')),
                debounce_seconds=float(os.getenv('DEBOUNCE_SECONDS', '0.5')),
                search_limit=int(os.getenv('SEARCH_LIMIT', '50')),
                log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
                output_format=os.getenv('OUTPUT_FORMAT', 'text').lower()
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}")

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid

        Raises:
            ValueError: If a setting is out of range
        """
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.error_limit <= 0:
            raise ValueError("error_limit must be positive")
        if self.search_limit <= 0:
            raise ValueError("search_limit must be positive")
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must not be negative")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")

        valid_formats = ['text', 'json']
        if self.output_format not in valid_formats:
            raise ValueError(f"output_format must be one of: {', '.join(valid_formats)}")

        return True
