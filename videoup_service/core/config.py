"""
Configuration management for the VideoUp Service.

This module handles all configuration settings including the HTTP listener,
payload storage backend and logging parameters.
"""

import json
import logging
from typing import Dict, Optional, Any
from dataclasses import dataclass, asdict
from pathlib import Path


@dataclass
class ServerConfig:
    """HTTP server configuration"""

    host: str = "0.0.0.0"
    port: int = 8080
    enable_api: bool = True
    public_base_url: Optional[str] = None  # Overrides the request-derived base of data URLs


@dataclass
class StorageConfig:
    """Payload storage configuration"""

    backend: str = "memory"  # "memory" or "filesystem"
    base_path: str = "video_data"  # Scratch directory for the filesystem backend
    chunk_size_bytes: int = 64 * 1024
    max_upload_size_mb: Optional[int] = None  # None = unlimited

    @property
    def max_upload_size_bytes(self) -> Optional[int]:
        if self.max_upload_size_mb is None:
            return None
        return self.max_upload_size_mb * 1024 * 1024


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = None


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.server = ServerConfig()
        self.storage = StorageConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if not config_path.exists():
            self.logger.info(f"Config file {config_path} not found, using defaults")
            return

        try:
            with open(config_path, "r") as f:
                config_data = json.load(f)

            if "server" in config_data:
                self.server = ServerConfig(**config_data["server"])

            if "storage" in config_data:
                self.storage = StorageConfig(**config_data["storage"])

            if "system" in config_data:
                self.system = SystemConfig(**config_data["system"])

            self.logger.info(f"Configuration loaded from {config_path}")

        except Exception as e:
            self.logger.error(f"Error loading config from {config_path}: {e}")
            self.server = ServerConfig()
            self.storage = StorageConfig()
            self.system = SystemConfig()

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"server": asdict(self.server), "storage": asdict(self.storage), "system": asdict(self.system)}
