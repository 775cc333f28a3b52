import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


def _read_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


@dataclass
class Config:
    DATASET_SIZE: int = 144
    RANDOM_SEED: Optional[int] = None
    TRAINING_DELAY: float = 1.5
    RETRAIN_DELAY: float = 2.0
    LOG_LEVEL: str = 'INFO'

    @classmethod
    def from_env(cls) -> 'Config':
        """Build a config from WASTEPREDICT_* environment variables"""
        config = cls(
            DATASET_SIZE=_read_int('WASTEPREDICT_DATASET_SIZE', 144),
            RANDOM_SEED=_read_int('WASTEPREDICT_RANDOM_SEED', None),
            TRAINING_DELAY=_read_float('WASTEPREDICT_TRAINING_DELAY', 1.5),
            RETRAIN_DELAY=_read_float('WASTEPREDICT_RETRAIN_DELAY', 2.0),
            LOG_LEVEL=os.getenv('WASTEPREDICT_LOG_LEVEL', 'INFO').upper(),
        )
        config.validate()
        return config

    def validate(self):
        """Validate config values"""
        if self.DATASET_SIZE < 0:
            raise ConfigurationError("DATASET_SIZE cannot be negative")
        if self.TRAINING_DELAY < 0 or self.RETRAIN_DELAY < 0:
            raise ConfigurationError("Delays cannot be negative")
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise ConfigurationError(f"Unknown log level: {self.LOG_LEVEL}")
