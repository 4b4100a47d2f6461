"""Configuration management for the Maps MCP server.

Every setting has a default, so the server runs without any configuration
file or environment variable.
"""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any, Union
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
import logging
from urllib.parse import urlparse

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

try:
    import tomli
    TOML_AVAILABLE = True
except ImportError:
    TOML_AVAILABLE = False


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ExecutorConfig(BaseModel):
    """Configuration for running osascript and open."""

    osascript_command: str = Field(default="osascript", description="AppleScript runner executable")
    open_command: str = Field(default="open", description="URL opener executable")
    max_output_bytes: int = Field(
        default=50 * 1024 * 1024, description="Maximum captured stdout per command"
    )
    command_timeout: Optional[float] = Field(
        default=None, description="Seconds to wait for a command to exit"
    )
    dry_run: bool = Field(default=False, description="Log commands instead of running them")

    @field_validator('osascript_command', 'open_command')
    @classmethod
    def validate_executable(cls, v: str) -> str:
        """Validate executables are not empty."""
        if not v or not v.strip():
            raise ValueError("Command cannot be empty")
        return v.strip()

    @field_validator('max_output_bytes')
    @classmethod
    def validate_max_output_bytes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_output_bytes must be positive")
        return v

    @field_validator('command_timeout')
    @classmethod
    def validate_command_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("command_timeout must be positive")
        return v


class MapsConfig(BaseModel):
    """Configuration for generated Maps URLs."""

    app_url_base: str = Field(default="maps://", description="Deep-link prefix")
    web_url_base: str = Field(default="https://maps.apple.com/", description="Web URL prefix")

    @field_validator('app_url_base')
    @classmethod
    def validate_app_url_base(cls, v: str) -> str:
        """Validate that the deep-link prefix carries a scheme."""
        if not urlparse(v).scheme:
            raise ValueError(f"Invalid app URL base (missing scheme): {v}")
        return v

    @field_validator('web_url_base')
    @classmethod
    def validate_web_url_base(cls, v: str) -> str:
        """Validate that the web prefix is an http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Invalid web URL base: {v}")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    executor: ExecutorConfig = Field(default_factory=ExecutorConfig, description="Executor configuration")
    maps: MapsConfig = Field(default_factory=MapsConfig, description="URL configuration")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger = logging.getLogger(__name__)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                if not YAML_AVAILABLE:
                    raise ImportError("PyYAML is required for YAML config files. Install with: pip install pyyaml")
                return yaml.safe_load(f) or {}

            elif config_path.suffix.lower() == '.toml':
                if not TOML_AVAILABLE:
                    raise ImportError("tomli is required for TOML config files. Install with: pip install tomli")
                return tomli.load(f.buffer)

            elif config_path.suffix.lower() == '.json':
                return json.load(f) or {}

            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    except Exception as e:
        logger.error(f"Failed to load config file {config_path}: {e}")
        raise


def find_config_file() -> Optional[Path]:
    """Find configuration file in standard locations."""
    search_paths = [
        Path.cwd() / "config.yaml",
        Path.cwd() / "config.yml",
        Path.cwd() / "config.toml",
        Path.cwd() / "config.json",
        Path.cwd() / ".maps-mcp.yaml",
        Path.cwd() / ".maps-mcp.yml",
        Path.cwd() / ".maps-mcp.toml",
        Path.cwd() / ".maps-mcp.json",
        Path.home() / ".config" / "maps-mcp" / "config.yaml",
        Path.home() / ".config" / "maps-mcp" / "config.yml",
        Path.home() / ".config" / "maps-mcp" / "config.toml",
        Path.home() / ".config" / "maps-mcp" / "config.json",
    ]

    for config_path in search_paths:
        if config_path.exists():
            return config_path

    return None


def merge_config(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dictionaries with override taking precedence."""
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def load_config(config_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load configuration from multiple sources with priority order.

    Priority (highest to lowest):
    1. Environment variables
    2. Specified config file (if provided)
    3. Auto-discovered config file
    4. Default values
    """
    logger = logging.getLogger(__name__)

    config_data = {}

    # 1. Load from config file (lowest priority)
    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            config_data = load_config_file(config_path)
            logger.info(f"Loaded configuration from: {config_path}")
        else:
            raise FileNotFoundError(f"Specified config file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path:
            config_data = load_config_file(config_path)
            logger.info(f"Auto-discovered configuration file: {config_path}")

    # 2. Load .env file (medium priority)
    load_dotenv()

    # 3. Override with environment variables (highest priority)
    env_config = {
        "executor": {
            "osascript_command": os.getenv("MAPS_MCP_OSASCRIPT_COMMAND"),
            "open_command": os.getenv("MAPS_MCP_OPEN_COMMAND"),
            "max_output_bytes": os.getenv("MAPS_MCP_MAX_OUTPUT_BYTES"),
            "command_timeout": os.getenv("MAPS_MCP_COMMAND_TIMEOUT"),
            "dry_run": os.getenv("MAPS_MCP_DRY_RUN"),
        },
        "maps": {
            "app_url_base": os.getenv("MAPS_MCP_APP_URL_BASE"),
            "web_url_base": os.getenv("MAPS_MCP_WEB_URL_BASE"),
        },
        "log_level": os.getenv("LOG_LEVEL"),
    }

    # Remove None values from env config
    def remove_none_values(d):
        if isinstance(d, dict):
            return {k: remove_none_values(v) for k, v in d.items() if v is not None}
        return d

    env_config = remove_none_values(env_config)

    final_config = merge_config(config_data, env_config)

    executor_data = dict(final_config.get("executor") or {})
    if "dry_run" in executor_data:
        executor_data["dry_run"] = _parse_bool(executor_data["dry_run"])
    if "max_output_bytes" in executor_data:
        executor_data["max_output_bytes"] = int(executor_data["max_output_bytes"])
    if executor_data.get("command_timeout") is not None:
        executor_data["command_timeout"] = float(executor_data["command_timeout"])

    return AppConfig(
        executor=ExecutorConfig(**executor_data),
        maps=MapsConfig(**(final_config.get("maps") or {})),
        log_level=final_config.get("log_level", "INFO"),
    )
