"""
Configuration settings for the playground.
Environment variables override defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8080
    TITLE: str = "Code Playground"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])

    # Storage
    DATA_DIR: str = "saved_projects"

    # Preview
    PREVIEW_DELAY: float = 1.0  # seconds

    def __post_init__(self) -> None:
        for key, spec in self.__dataclass_fields__.items():
            env_value = os.getenv(key)
            if env_value is None:
                continue
            if spec.type in (int, "int"):
                setattr(self, key, int(env_value))
            elif spec.type in (float, "float"):
                setattr(self, key, float(env_value))
            elif spec.type in (List[str], "List[str]"):
                setattr(self, key, [item.strip() for item in env_value.split(",") if item.strip()])
            else:
                setattr(self, key, env_value)


settings = Settings()
