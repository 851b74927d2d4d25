import logging
import os

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False

    # Record store
    DATA_FILE: str = "./data.json"

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ALLOW_ORIGINS: str = "*"  # comma-separated

    # Password hashing (bcrypt cost factor)
    BCRYPT_ROUNDS: int = 10

    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("roshdman")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    problems = []
    data_dir = os.path.dirname(os.path.abspath(cfg.DATA_FILE))
    if not os.path.isdir(data_dir):
        problems.append(f"DATA_FILE directory does not exist: {data_dir}")
    if not 4 <= cfg.BCRYPT_ROUNDS <= 31:
        problems.append(f"BCRYPT_ROUNDS must be between 4 and 31, got {cfg.BCRYPT_ROUNDS}")

    if problems:
        message = "Invalid configuration: " + "; ".join(problems)
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)
        return False

    return True
