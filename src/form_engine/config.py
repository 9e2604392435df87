"""
Configuration module for the form engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormEngineConfig:
    """Configuration settings for the form engine."""

    # Remote submission endpoint
    submit_url: str = "http://localhost:9110/api/submissions"
    submit_timeout: float = 30.0

    # Development-time simulated endpoint
    simulated_latency: float = 1.0

    # Logging settings
    log_level: str = "INFO"
    log_file: str | None = None
    verbose_output: bool = False

    @classmethod
    def from_env(cls) -> "FormEngineConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            submit_url=os.getenv("FORM_ENGINE_SUBMIT_URL", _defaults.submit_url),
            submit_timeout=float(os.getenv("FORM_ENGINE_SUBMIT_TIMEOUT", str(_defaults.submit_timeout))),
            simulated_latency=float(os.getenv("FORM_ENGINE_SIMULATED_LATENCY", str(_defaults.simulated_latency))),
            log_level=os.getenv("FORM_ENGINE_LOG_LEVEL", _defaults.log_level).upper(),
            log_file=os.getenv("FORM_ENGINE_LOG_FILE") or _defaults.log_file,
            verbose_output=os.getenv("FORM_ENGINE_VERBOSE_OUTPUT", str(_defaults.verbose_output).lower()).lower() == "true",
        )


config = FormEngineConfig.from_env()


def get_config() -> FormEngineConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormEngineConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
