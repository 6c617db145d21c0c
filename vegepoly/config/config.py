"""Configuration management."""

import logging
from typing import Dict, List, Optional

import structlog
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings

from .vegetation_settings import DEFAULT_VEGETATION_PARAMS, VegetationParams, get_default_vegetation_params


class Settings(BaseSettings):
    """
    Application settings pulled from environment variables.

    Built once at start-up and handed to whatever needs it. The sampler never
    reads settings; it takes its parameters as explicit arguments.
    """

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Sampling Configuration
    max_attempts: int = Field(default=30, ge=1, description="Candidates tried per active point")
    seed_attempts: int = Field(default=100, ge=1, description="Attempts to place the first point")
    random_seed: Optional[int] = Field(default=None, description="Base seed for reproducible batches")

    # Batch Configuration
    batch_workers: int = Field(default=1, ge=1, description="Worker threads used by the batch driver")

    _user_params: Dict[int, VegetationParams] = PrivateAttr(default_factory=dict)

    class Config:
        env_prefix = "VEGEPOLY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def params_for(self, vegetation_type: int) -> VegetationParams:
        """User override if one is set, otherwise the default preset."""
        if vegetation_type in self._user_params:
            return self._user_params[vegetation_type].model_copy()
        return get_default_vegetation_params(vegetation_type)

    def set_user_params(self, vegetation_type: int, params: VegetationParams) -> None:
        if vegetation_type < 1:
            raise ValueError(f"Invalid vegetation type: {vegetation_type}")
        self._user_params[vegetation_type] = params.model_copy(
            update={"vegetation_type": vegetation_type}
        )

    def remove_user_params(self, vegetation_type: int) -> Optional[VegetationParams]:
        return self._user_params.pop(vegetation_type, None)

    def reset_user_params(self) -> None:
        self._user_params.clear()

    def has_user_params(self, vegetation_type: int) -> bool:
        return vegetation_type in self._user_params

    def available_vegetation_types(self) -> List[int]:
        return sorted({int(t) for t in DEFAULT_VEGETATION_PARAMS} | set(self._user_params))


def configure_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging at the configured level."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")

    if settings.log_format == "plain":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
