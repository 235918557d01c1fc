"""Detection of overly broad workflow and job permissions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from ghaudit.audits import Confidence, Severity

logger = logging.getLogger(__name__)

# Subjective mapping of permissions to severities, when given `write` access.
KNOWN_PERMISSIONS: MappingProxyType[str, Severity] = MappingProxyType(
    {
        "actions": Severity.HIGH,
        "attestations": Severity.HIGH,
        "checks": Severity.MEDIUM,
        "contents": Severity.HIGH,
        "deployments": Severity.HIGH,
        "discussions": Severity.MEDIUM,
        "id-token": Severity.HIGH,
        "issues": Severity.HIGH,
        "packages": Severity.HIGH,
        "pages": Severity.HIGH,
        "pull-requests": Severity.HIGH,
        "repository-projects": Severity.MEDIUM,
        "security-events": Severity.MEDIUM,
        "statuses": Severity.LOW,
    }
)

_PERMISSION_LEVELS = frozenset({"read", "write", "none"})


def check_permissions(
    permissions: object, parent: object = None
) -> list[tuple[Severity, Confidence, str]]:
    """Return ``(severity, confidence, note)`` for each over-broad permission.

    ``permissions`` is a ``permissions:`` block as parsed from YAML: ``None``
    or ``"default"`` when absent, ``"read-all"``, ``"write-all"``, or a
    mapping of permission name to ``read``/``write``/``none``. ``parent`` is
    the enclosing workflow's block when checking a job, and ``None`` when
    checking the workflow itself.
    """
    if permissions is None or permissions == "default":
        return []
    if permissions == "read-all":
        return [(Severity.MEDIUM, Confidence.HIGH, "uses read-all permissions")]
    if permissions == "write-all":
        return [(Severity.HIGH, Confidence.HIGH, "uses write-all permissions")]
    if not isinstance(permissions, Mapping):
        raise ValueError(f"invalid permissions: {permissions!r}")

    for name, level in permissions.items():
        if level not in _PERMISSION_LEVELS:
            raise ValueError(f"invalid permission level for {name}: {level!r}")

    # Whether a job-level block is over-scoped can't be told in general.
    if parent is not None:
        return []

    results = []
    for name, level in permissions.items():
        if level != "write":
            continue
        severity = KNOWN_PERMISSIONS.get(name)
        if severity is None:
            logger.debug("unknown permission: %s", name)
            severity = Severity.UNKNOWN
        results.append(
            (
                severity,
                Confidence.HIGH,
                f"{name}: write is overly broad at the workflow level",
            )
        )
    return results