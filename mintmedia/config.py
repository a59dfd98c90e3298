"""
Configuration management for mintmedia.

Handles loading, validation, and access to application configuration.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["MintMediaConfig"] = None


class ServerConfig(BaseModel):
    """Server configuration."""
    host: str = "0.0.0.0"
    port: int = 8420
    debug: bool = False
    log_level: str = "INFO"


class GatewayConfig(BaseModel):
    """Public HTTP gateways used for fallback URLs."""
    ipfs_host: str = "ipfs.io"
    arweave_host: str = "arweave.net"


class IPFSConfig(BaseModel):
    """Peer fetch configuration."""
    peer_fetch_enabled: bool = False  # Only true where the process can reach a peer node
    node_url: str = "http://127.0.0.1:5001"
    chunk_size: int = 65536


class ArweaveConfig(BaseModel):
    """Arweave HTTP API configuration."""
    api_url: str = "https://arweave.net"


class ResolutionConfig(BaseModel):
    """Resolution pipeline settings."""
    timeout_seconds: float = 10.0
    fallback_mime_type: str = "application/octet-stream"
    max_batch_size: int = 50


class PlaybackConfig(BaseModel):
    """Preview playback envelope."""
    fade_duration_ms: int = Field(default=2300, gt=0)
    fade_step_ms: int = Field(default=50, gt=0)
    initial_volume: float = 0.1
    peak_volume: float = 0.8
    default_start_time: float = 18.0  # seconds
    default_duration: float = 18.0  # seconds


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: str = "logs/mintmedia.log"
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class MintMediaConfig(BaseModel):
    """Main mintmedia configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    gateways: GatewayConfig = Field(default_factory=GatewayConfig)
    ipfs: IPFSConfig = Field(default_factory=IPFSConfig)
    arweave: ArweaveConfig = Field(default_factory=ArweaveConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> MintMediaConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        # Look for config.yaml in current directory or project root
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = MintMediaConfig(**config_data)
    return _config


def get_config() -> MintMediaConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> MintMediaConfig:
    """
    Reload configuration from disk.

    Returns:
        Freshly loaded configuration.
    """
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    # Map of environment variables to config paths
    env_map = {
        "MINTMEDIA_HOST": ("server", "host"),
        "MINTMEDIA_PORT": ("server", "port"),
        "MINTMEDIA_DEBUG": ("server", "debug"),
        "MINTMEDIA_IPFS_GATEWAY": ("gateways", "ipfs_host"),
        "MINTMEDIA_ARWEAVE_GATEWAY": ("gateways", "arweave_host"),
        "MINTMEDIA_PEER_FETCH_ENABLED": ("ipfs", "peer_fetch_enabled"),
        "MINTMEDIA_IPFS_NODE_URL": ("ipfs", "node_url"),
        "MINTMEDIA_RESOLUTION_TIMEOUT": ("resolution", "timeout_seconds"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    # Boolean
    if value.lower() in ("true", "1", "yes"):
        return True
    if value.lower() in ("false", "0", "no"):
        return False

    # Integer
    try:
        return int(value)
    except ValueError:
        pass

    # Float
    try:
        return float(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
