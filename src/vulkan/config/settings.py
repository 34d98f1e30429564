"""Dataclass-based Settings for Vulkan

Typed configuration loaded from the environment (and an optional .env file).
Built once at startup and handed to the application context.

Design principles:
- Single source of truth for all configuration
- Environment variable overrides with sensible defaults
- Invalid values fail at startup with a ConfigurationError
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Mapping, Optional

from vulkan.config.env_loader import EnvLoader, parse_bool, parse_int
from vulkan.exceptions import ConfigurationError

if TYPE_CHECKING:
    from vulkan.backup.config import BackupConfig
    from vulkan.status.models import ProbeTarget

ALLOWED_ENVS = {"DEV", "TEST", "PROD"}
# Spellings accepted for the env name, mapped to the canonical value
_ENV_ALIASES = {"DEVELOPMENT": "DEV", "PRODUCTION": "PROD"}


@dataclass
class ServerSettings:
    """Network server configuration

    Attributes:
        host: Server bind address (default: 0.0.0.0)
        port: HTTP port (default: 3000)
    """

    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls, env: Mapping[str, str], prefix: str = "VULKAN") -> "ServerSettings":
        """Environment variables: {prefix}_HOST, {prefix}_PORT"""
        return cls(
            host=env.get(f"{prefix}_HOST", "0.0.0.0"),
            port=parse_int(env.get(f"{prefix}_PORT"), f"{prefix}_PORT", 3000),
        )


@dataclass
class StorageSettings:
    """Data persistence configuration

    Attributes:
        data_dir: Directory holding the ledger CSV/JSON files and markdown notes
    """

    data_dir: Path = field(default_factory=lambda: Path.cwd() / "data")

    @classmethod
    def from_env(cls, env: Mapping[str, str], prefix: str = "VULKAN") -> "StorageSettings":
        """Environment variables: {prefix}_DATA_DIR"""
        data_dir = env.get(f"{prefix}_DATA_DIR")
        return cls(data_dir=Path(data_dir) if data_dir else Path.cwd() / "data")

    def ensure_directories(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of text
        log_file: Optional file to log to besides stdout
    """

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Mapping[str, str], prefix: str = "VULKAN") -> "LogSettings":
        """Environment variables: {prefix}_LOG_LEVEL, {prefix}_LOG_JSON, {prefix}_LOG_FILE"""
        return cls(
            level=env.get(f"{prefix}_LOG_LEVEL", "INFO").upper(),
            json_format=parse_bool(env.get(f"{prefix}_LOG_JSON"), f"{prefix}_LOG_JSON"),
            log_file=env.get(f"{prefix}_LOG_FILE") or None,
        )


@dataclass
class Settings:
    """Complete application settings

    Attributes:
        env: DEV, TEST or PROD; PROD is production mode (backups enabled)
        server: Network server settings
        storage: Data directory settings
        log: Logging settings
        api_key: Shared secret for the X-API-Key header
        status_self_name: Report key for this service in /status
        status_targets: Probe targets for /status
        backup: Backup configuration
        prefix: Environment variable prefix used
    """

    env: str = "DEV"
    server: ServerSettings = field(default_factory=ServerSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    log: LogSettings = field(default_factory=LogSettings)
    api_key: Optional[str] = None
    status_self_name: str = "vulkan"
    status_targets: List["ProbeTarget"] = field(default_factory=list)
    backup: Optional["BackupConfig"] = None
    prefix: str = "VULKAN"

    def __post_init__(self) -> None:
        self.env = _ENV_ALIASES.get(self.env.upper(), self.env.upper())
        self.validate()

    @property
    def is_production(self) -> bool:
        return self.env == "PROD"

    @classmethod
    def from_env(
        cls,
        prefix: str = "VULKAN",
        env_file: Optional[Path] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Load complete settings from environment variables

        Args:
            prefix: Environment variable prefix (default: VULKAN)
            env_file: Optional .env file (default: ./.env when present)
            overrides: Values taking precedence over the environment

        Environment variables:
            {prefix}_ENV: DEV, TEST or PROD (default: DEV)
            {prefix}_HOST / {prefix}_PORT: Server bind address
            {prefix}_DATA_DIR: Data directory
            {prefix}_API_KEY: API key for vault and notes routes
            {prefix}_LOG_LEVEL / {prefix}_LOG_JSON / {prefix}_LOG_FILE: Logging
            {prefix}_STATUS_NAME: Name of this service in /status
            {prefix}_STATUS_TARGETS: JSON list of probe targets
            {prefix}_BACKUP_*: See BackupConfig.from_env
        """
        from vulkan.backup.config import BackupConfig
        from vulkan.status.targets import load_targets

        env = EnvLoader(env_file).load(overrides)
        env_name = env.get(f"{prefix}_ENV", "DEV")
        storage = StorageSettings.from_env(env, prefix)
        production = _ENV_ALIASES.get(env_name.upper(), env_name.upper()) == "PROD"

        return cls(
            env=env_name,
            server=ServerSettings.from_env(env, prefix),
            storage=storage,
            log=LogSettings.from_env(env, prefix),
            api_key=env.get(f"{prefix}_API_KEY") or None,
            status_self_name=env.get(f"{prefix}_STATUS_NAME", "vulkan"),
            status_targets=load_targets(env.get(f"{prefix}_STATUS_TARGETS")),
            backup=BackupConfig.from_env(
                env, production=production, data_dir=storage.data_dir, prefix=prefix
            ),
            prefix=prefix,
        )

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If settings are invalid
        """
        if self.env not in ALLOWED_ENVS:
            raise ConfigurationError(
                code="INVALID_ENV",
                message=f"Invalid environment '{self.env}'. Expected one of {sorted(ALLOWED_ENVS)}.",
            )
        if self.log.level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigurationError(
                code="INVALID_LOG_LEVEL",
                message=f"Invalid log level '{self.log.level}'",
            )
        if self.is_production and not self.api_key:
            raise ConfigurationError(
                code="MISSING_API_KEY",
                message=f"{self.prefix}_API_KEY is required in production",
            )


# Settings cache per prefix
_global_settings: dict[str, Settings] = {}


def get_settings(prefix: str = "VULKAN", reload: bool = False) -> Settings:
    """Get or create the settings instance for a given prefix"""
    if prefix not in _global_settings or reload:
        _global_settings[prefix] = Settings.from_env(prefix=prefix)
    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset cached settings (primarily for testing)"""
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
