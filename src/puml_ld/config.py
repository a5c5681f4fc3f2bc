"""
Service configuration, read from PUML_LD_* environment variables.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SHAPES_DIR = Path(__file__).parent / "shapes" / "definitions"


class ServiceConfig(BaseModel):
    """Settings of the HTTP service"""

    host: str = "0.0.0.0"
    port: int = Field(default=4567, ge=1, le=65535)
    shapes_dir: Path = DEFAULT_SHAPES_DIR
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Accept level names in any case"""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build the configuration from the environment, keeping defaults for unset variables"""
        values = {}
        for field_name in ("host", "port", "shapes_dir", "log_level", "log_dir"):
            value = os.environ.get(f"PUML_LD_{field_name.upper()}")
            if value:
                values[field_name] = value
        return cls(**values)
