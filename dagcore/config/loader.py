"""
Config Loader

Loads engine settings from YAML, with environment overrides for the service.
Every setting has a default, so the engines work without any config file.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)


class LayoutSettings(BaseModel):
    """Spacing used by the layered and grid layouts"""
    horizontal_spacing: float = Field(default=200.0, gt=0)
    vertical_spacing: float = Field(default=150.0, gt=0)
    grid_columns: int = Field(default=3, ge=1)
    grid_origin: float = Field(default=100.0, ge=0)


class ValidationSettings(BaseModel):
    """Thresholds used by the validator"""
    # Isolated nodes are only warned about once the graph has this many nodes
    isolated_warning_min_nodes: int = Field(default=2, ge=1)


class ServiceSettings(BaseModel):
    """HTTP service binding"""
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)


class EngineConfig(BaseModel):
    """Complete engine configuration"""
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Build config from the environment.

        Environment Variables:
            DAGCORE_CONFIG: Path to a YAML config file (optional)
            DAGCORE_HOST: Overrides service.host
            DAGCORE_PORT: Overrides service.port
        """
        config_path = os.getenv("DAGCORE_CONFIG")
        config = ConfigLoader(Path(config_path)).load() if config_path else cls()

        host = os.getenv("DAGCORE_HOST")
        port = os.getenv("DAGCORE_PORT")
        if host or port:
            service = config.service.model_dump()
            if host:
                service["host"] = host
            if port:
                service["port"] = port
            config = config.model_copy(update={"service": ServiceSettings(**service)})

        return config


class ConfigLoader:
    """
    Loads EngineConfig from a YAML file.

    Example file:
        layout:
          horizontal_spacing: 240
          vertical_spacing: 120
        validation:
          isolated_warning_min_nodes: 2
        service:
          port: 8080

    Example usage:
        config = ConfigLoader(Path("config/dagcore.yaml")).load()
        result = layout(nodes, edges, settings=config.layout)
    """

    def __init__(self, config_path: Path):
        """
        Initialize loader with config file path.

        Args:
            config_path: YAML file; a missing file yields default settings
        """
        self.config_path = config_path

    def load(self) -> EngineConfig:
        """
        Load and validate the config file.

        Returns:
            EngineConfig (defaults when the file does not exist)

        Raises:
            ValueError: If the file is not valid YAML or fails validation
        """
        if not self.config_path.exists():
            logger.info(f"No config file at {self.config_path}, using defaults")
            return EngineConfig()

        try:
            with open(self.config_path) as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse {self.config_path}: {e}")
            raise ValueError(f"Failed to parse {self.config_path}: {e}")

        if not isinstance(raw, dict):
            raise ValueError(
                f"Config file {self.config_path} must contain a mapping, "
                f"got {type(raw).__name__}"
            )

        try:
            config = EngineConfig(**raw)
        except ValidationError as e:
            logger.error(f"Invalid config in {self.config_path}: {e}")
            raise ValueError(f"Invalid config in {self.config_path}: {e}")

        logger.info(f"Loaded config from {self.config_path}")
        return config


def load_config(path: Optional[Path] = None) -> EngineConfig:
    if path is None:
        return EngineConfig.from_env()
    return ConfigLoader(path).load()
