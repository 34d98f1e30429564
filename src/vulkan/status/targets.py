"""Loading probe targets from configuration.

Targets come from a JSON list, typically the VULKAN_STATUS_TARGETS variable:

    [
        {"name": "site", "kind": "http", "url": "https://example.com"},
        {"name": "mail", "kind": "http", "url": "https://mail.example.com", "timeout": 30},
        {"name": "postgres", "kind": "tcp", "host": "db", "port": 5432, "timeout": 2},
        {"name": "mailserver", "kind": "container", "container": "mailcow"}
    ]
"""

import json
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from vulkan.exceptions import ConfigurationError
from vulkan.status.models import ProbeTarget


def load_targets(raw: Optional[str]) -> List[ProbeTarget]:
    """Parse a JSON list of target definitions.

    Raises:
        ConfigurationError: malformed JSON, invalid target or duplicate name
    """
    if raw is None or not raw.strip():
        return []

    try:
        items: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            code="INVALID_STATUS_TARGETS",
            message=f"Status targets are not valid JSON: {exc}",
        ) from exc

    if not isinstance(items, list):
        raise ConfigurationError(
            code="INVALID_STATUS_TARGETS",
            message="Status targets must be a JSON list",
        )

    targets: List[ProbeTarget] = []
    seen = set()
    for index, item in enumerate(items):
        try:
            target = ProbeTarget.model_validate(item)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                code="INVALID_STATUS_TARGETS",
                message=f"Status target #{index} is invalid",
                details={"errors": exc.errors(include_url=False)},
            ) from exc

        if target.name in seen:
            raise ConfigurationError(
                code="DUPLICATE_STATUS_TARGET",
                message=f"Status target '{target.name}' is configured twice",
            )
        seen.add(target.name)
        targets.append(target)

    return targets
