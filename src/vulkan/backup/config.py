"""Backup configuration for Vulkan

The backup mirrors the data directory into a git working tree and pushes it
to a remote. Settings come from VULKAN_BACKUP_* environment variables.
"""

import tempfile
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from vulkan.config.env_loader import parse_bool
from vulkan.exceptions import ConfigurationError

CREDENTIAL_SSH = "ssh"
CREDENTIAL_TOKEN = "token"
CREDENTIAL_NONE = "none"

DEFAULT_BACKUP_DIR = Path("/app/data-backup")
DEFAULT_SSH_KEY_PATH = Path(tempfile.gettempdir()) / "vulkan-backup-ssh-key"


class BackupConfig(BaseModel):
    """Backup configuration with environment variable overrides"""

    enabled: bool = Field(
        default=False,
        description="Production mode: backups run only when enabled"
    )

    # Directories
    source_dir: Path = Field(
        default=Path("data"),
        description="Live data directory (read-only for the backup)"
    )
    backup_dir: Path = Field(
        default=DEFAULT_BACKUP_DIR,
        description="Git working tree the data is copied into"
    )

    # Remote repository
    repo_url: Optional[str] = Field(
        default=None,
        description="Remote repository URL; without it backups stay local"
    )
    remote_name: str = Field(
        default="origin",
        description="Name of the configured remote"
    )

    # Commit identity
    author_name: Optional[str] = Field(default=None, description="Commit author name")
    author_email: Optional[str] = Field(default=None, description="Commit author email")

    # Credentials (one mechanism per deployment)
    credential: Optional[str] = Field(
        default=None,
        description="ssh, token or none; detected from the secrets when unset"
    )
    ssh_key: Optional[str] = Field(
        default=None,
        description="SSH private key material",
        repr=False,
    )
    ssh_key_path: Path = Field(
        default=DEFAULT_SSH_KEY_PATH,
        description="Where the SSH key is staged (mode 0600)"
    )
    token: Optional[str] = Field(
        default=None,
        description="Access token embedded in an https remote URL",
        repr=False,
    )

    @field_validator('credential')
    @classmethod
    def validate_credential(cls, v: Optional[str]) -> Optional[str]:
        """Validate credential mechanism name"""
        if v is None or v == "":
            return None
        valid = [CREDENTIAL_SSH, CREDENTIAL_TOKEN, CREDENTIAL_NONE]
        if v.lower() not in valid:
            raise ValueError(f"Credential must be one of: {', '.join(valid)}")
        return v.lower()

    @model_validator(mode='after')
    def resolve_credential(self) -> "BackupConfig":
        """Pick the credential mechanism when it was not set explicitly"""
        if self.credential is None:
            if self.ssh_key and self.token:
                raise ValueError(
                    "Both an SSH key and a token are configured; "
                    "set the credential mechanism explicitly"
                )
            if self.ssh_key:
                self.credential = CREDENTIAL_SSH
            elif self.token:
                self.credential = CREDENTIAL_TOKEN
            else:
                self.credential = CREDENTIAL_NONE

        if self.credential == CREDENTIAL_SSH and not self.ssh_key:
            raise ValueError("SSH credentials selected but no SSH key configured")
        if self.credential == CREDENTIAL_TOKEN and not self.token:
            raise ValueError("Token credentials selected but no token configured")
        return self

    @property
    def has_remote(self) -> bool:
        return bool(self.repo_url)

    @property
    def has_author(self) -> bool:
        return bool(self.author_name and self.author_email)

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str],
        production: bool,
        data_dir: Path,
        prefix: str = "VULKAN",
    ) -> "BackupConfig":
        """Create configuration from an environment mapping

        Args:
            env: Loaded environment (see EnvLoader)
            production: Whether the process runs in production mode
            data_dir: Live data directory, used when no source dir is set
            prefix: Environment variable prefix

        Environment variables ({prefix}_BACKUP_*):
            ENABLED, SOURCE_DIR, DIR, REPO_URL, REMOTE, AUTHOR_NAME,
            AUTHOR_EMAIL, CREDENTIAL, SSH_KEY, SSH_KEY_PATH, TOKEN

        Raises:
            ConfigurationError: If the values are inconsistent
        """
        env_prefix = f"{prefix}_BACKUP"

        def get(name: str) -> Optional[str]:
            value = env.get(f"{env_prefix}_{name}")
            return value if value else None

        try:
            return cls(
                # Production mode enables backups unless switched off explicitly
                enabled=production and parse_bool(get("ENABLED"), f"{env_prefix}_ENABLED", True),
                source_dir=Path(get("SOURCE_DIR") or data_dir),
                backup_dir=Path(get("DIR") or DEFAULT_BACKUP_DIR),
                repo_url=get("REPO_URL"),
                remote_name=get("REMOTE") or "origin",
                author_name=get("AUTHOR_NAME"),
                author_email=get("AUTHOR_EMAIL"),
                credential=get("CREDENTIAL"),
                ssh_key=get("SSH_KEY"),
                ssh_key_path=Path(get("SSH_KEY_PATH") or DEFAULT_SSH_KEY_PATH),
                token=get("TOKEN"),
            )
        except ValueError as exc:
            # pydantic's ValidationError is a ValueError
            raise ConfigurationError(
                code="INVALID_BACKUP_CONFIG",
                message=f"Invalid backup configuration: {exc}",
            ) from exc
