"""
SDK Configuration

All configurable parameters for decoding, contexts and reporting.
Values can be overridden from the environment (or a .env file).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SdkConfig:
    """Configuration shared by contexts, decoders and the daemon API."""

    # ========== Logging ==========
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

    # ========== Buffers ==========
    # Largest buffer a single handle may resolve to (bytes)
    max_buffer_size: int = 64 * 1024 * 1024

    # ========== Typed Values ==========
    # Require exactly one entry in every tagged value map
    strict_value_maps: bool = True

    # ========== Incidents ==========
    # Emit "data":{} for an empty data struct instead of omitting it
    report_empty_data: bool = True

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "SdkConfig":
        """Build a config from CHAINPROBE_* environment variables."""
        load_dotenv(dotenv_path)

        config = cls()
        config.log_level = os.getenv("CHAINPROBE_LOG_LEVEL", config.log_level).upper()

        max_size = os.getenv("CHAINPROBE_MAX_BUFFER_SIZE")
        if max_size:
            config.max_buffer_size = int(max_size)

        strict = os.getenv("CHAINPROBE_STRICT_VALUE_MAPS")
        if strict is not None:
            config.strict_value_maps = _env_bool(strict)

        return config


DEFAULT_CONFIG = SdkConfig()


def configure_logging(config: SdkConfig = DEFAULT_CONFIG) -> None:
    """Configure root logging for a module entry point."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=config.log_format,
    )
