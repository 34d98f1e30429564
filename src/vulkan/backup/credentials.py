"""Non-interactive git credentials for the backup remote.

One mechanism is chosen per deployment:
- SshKeyCredentials: key material staged to a fixed 0600 file and used
  through GIT_SSH_COMMAND
- TokenCredentials: access token embedded in the https remote URL
- NoCredentials: public remote, local-only backups, or ambient auth
"""

import os
import shlex
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict
from urllib.parse import urlsplit, urlunsplit

from vulkan.backup.config import CREDENTIAL_SSH, CREDENTIAL_TOKEN, BackupConfig
from vulkan.exceptions import ConfigurationError

# Never let git block on a username/password prompt
_BASE_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class Credentials(ABC):
    """How git authenticates against the backup remote."""

    name = "none"

    def prepare(self) -> None:
        """Stage any credential material on disk."""

    def cleanup(self) -> None:
        """Remove staged credential material."""

    def remote_url(self, url: str) -> str:
        """Remote URL as it should be configured in the repository."""
        return url

    @abstractmethod
    def git_env(self) -> Dict[str, str]:
        """Extra environment for every git invocation."""


class NoCredentials(Credentials):
    def git_env(self) -> Dict[str, str]:
        return dict(_BASE_ENV)


class SshKeyCredentials(Credentials):
    """Private key written to a fixed, owner-only file."""

    name = CREDENTIAL_SSH

    def __init__(self, key: str, key_path: Path):
        self._key = key
        self.key_path = Path(key_path)

    def prepare(self) -> None:
        self.key_path.parent.mkdir(parents=True, exist_ok=True)
        material = self._key if self._key.endswith("\n") else self._key + "\n"

        # Create with 0600 so the key is never readable by others, even briefly
        fd = os.open(self.key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(material)
        os.chmod(self.key_path, 0o600)

    def cleanup(self) -> None:
        self.key_path.unlink(missing_ok=True)

    def git_env(self) -> Dict[str, str]:
        env = dict(_BASE_ENV)
        env["GIT_SSH_COMMAND"] = (
            f"ssh -i {shlex.quote(str(self.key_path))} -o IdentitiesOnly=yes -o StrictHostKeyChecking=no"
        )
        return env


class TokenCredentials(Credentials):
    """Access token carried in the https remote URL."""

    name = CREDENTIAL_TOKEN

    def __init__(self, token: str, username: str = "x-access-token"):
        self._token = token
        self.username = username

    def remote_url(self, url: str) -> str:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            raise ConfigurationError(
                code="TOKEN_NEEDS_HTTPS",
                message="Token credentials require an http(s) remote URL",
                details={"scheme": parts.scheme},
            )
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
        netloc = f"{self.username}:{self._token}@{host}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

    def git_env(self) -> Dict[str, str]:
        return dict(_BASE_ENV)


def build_credentials(config: BackupConfig) -> Credentials:
    """Credentials for the mechanism selected in the config."""
    if config.credential == CREDENTIAL_SSH and config.ssh_key:
        return SshKeyCredentials(config.ssh_key, config.ssh_key_path)
    if config.credential == CREDENTIAL_TOKEN and config.token:
        return TokenCredentials(config.token)
    return NoCredentials()


def redact_url(url: str) -> str:
    """Strip userinfo (tokens) from a URL before it is logged."""
    parts = urlsplit(url)
    if not parts.username and not parts.password:
        return url
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))
