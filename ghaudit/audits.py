"""Audit metadata: identifiers, descriptions and the finding scales."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType


class Severity(enum.Enum):
    """How bad a finding is, if it is real."""

    UNKNOWN = "unknown"
    INFORMATIONAL = "informational"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Confidence(enum.Enum):
    """How sure an audit is that a finding is real."""

    UNKNOWN = "unknown"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Persona(enum.Enum):
    """The audience a finding is meant for; ``REGULAR`` is the default."""

    AUDITOR = "auditor"
    PEDANTIC = "pedantic"
    REGULAR = "regular"


@dataclass(frozen=True)
class AuditInfo:
    """The identity and short description of one audit."""

    ident: str
    desc: str

    @property
    def url(self) -> str:
        """The documentation anchor for this audit."""
        return f"audits#{self.ident}"


_DESCRIPTIONS: dict[str, str] = {
    "artipacked": "credential persistence through GitHub Actions artifacts",
    "cache-poisoning": (
        "runtime artifacts potentially vulnerable to a cache poisoning attack"
    ),
    "dangerous-triggers": "use of fundamentally insecure workflow trigger",
    "excessive-permissions": "overly broad workflow or job-level permissions",
    "github-env": "dangerous use of environment file",
    "hardcoded-container-credentials": (
        "hardcoded credential in GitHub Actions container configurations"
    ),
    "impostor-commit": "commit with no history in referenced repository",
    "insecure-commands": "execution of insecure workflow commands is enabled",
    "known-vulnerable-actions": "action has a known vulnerability",
    "ref-confusion": "git ref for action with ambiguous ref type",
    "secrets-inherit": "secrets unconditionally inherited by called workflow",
    "self-hosted-runner": "runs on a self-hosted runner",
    "template-injection": "code injection via template expansion",
    "unpinned-uses": "unpinned action reference",
    "use-trusted-publishing": "prefer trusted publishing for authentication",
}

AUDITS: MappingProxyType[str, AuditInfo] = MappingProxyType(
    {ident: AuditInfo(ident, desc) for ident, desc in _DESCRIPTIONS.items()}
)


def audit_info(ident: str) -> AuditInfo:
    """Return the metadata of the audit named ``ident``.

    Raises ``KeyError`` for an unknown audit.
    """
    try:
        return AUDITS[ident]
    except KeyError:
        raise KeyError(f"unknown audit: {ident}") from None