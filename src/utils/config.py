# ========================
# src/utils/config.py
# ========================

"""
Configuration Management

Centralized configuration for the ETL pipeline with environment support.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class Config:
    """
    Configuration class for the ETL pipeline.
    Supports environment variables and default values.
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_dict (dict): Optional configuration overrides
        """
        # Input
        self.DEFAULT_INPUT_FILE = os.getenv('ETL_INPUT_FILE', 'data/input.csv')

        # Filtering
        self.MIN_FIELDS = int(os.getenv('ETL_MIN_FIELDS', '1'))

        # Load count classification thresholds
        self.LOAD_UPPER_BOUND = int(os.getenv('ETL_LOAD_UPPER_BOUND', '100'))
        self.LOAD_LOWER_BOUND = int(os.getenv('ETL_LOAD_LOWER_BOUND', '10'))

        # Logging Configuration
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        self.LOG_DIR = os.getenv('ETL_LOG_DIR', 'logs')
        self.LOG_FILE = os.getenv('ETL_LOG_FILE') or None

        # API Settings
        self.API_HOST = os.getenv('ETL_API_HOST', '0.0.0.0')
        self.API_PORT = int(os.getenv('ETL_API_PORT', '8000'))
        self.UPLOAD_DIR = os.getenv('ETL_UPLOAD_DIR', 'data/uploaded')

        # Override with provided config
        if config_dict:
            self._update_from_dict(config_dict)

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for key, value in config_dict.items():
            if hasattr(self, key.upper()):
                setattr(self, key.upper(), value)

    def ensure_directories(self) -> None:
        """Create the upload and log directories if they don't exist."""
        Path(self.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
        if self.LOG_FILE:
            Path(self.LOG_DIR).mkdir(parents=True, exist_ok=True)

    def validate_config(self) -> Dict[str, bool]:
        """
        Validate configuration values.

        Returns:
            dict: Validation results for each setting
        """
        validations = {}

        validations['load_bounds'] = 0 <= self.LOAD_LOWER_BOUND <= self.LOAD_UPPER_BOUND
        validations['api_port'] = 1000 <= self.API_PORT <= 65535
        validations['log_level'] = self.LOG_LEVEL.upper() in VALID_LOG_LEVELS

        return validations

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if not attr.startswith('_') and not callable(getattr(self, attr))
        }

    def save_to_file(self, file_path: str) -> None:
        """Save configuration to JSON file."""
        with open(file_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_from_file(cls, file_path: str) -> 'Config':
        """Load configuration from JSON file."""
        with open(file_path, 'r') as f:
            config_dict = json.load(f)
        return cls(config_dict)

    def __str__(self) -> str:
        """String representation of configuration."""
        lines = ["Configuration Settings:"]
        config_dict = self.to_dict()
        for key, value in sorted(config_dict.items()):
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)
