"""Detection of publishing steps that use manual credentials."""

from __future__ import annotations

from collections.abc import Mapping

USES_MANUAL_CREDENTIAL = (
    "uses a manually-configured credential instead of Trusted Publishing"
)

KNOWN_PYTHON_TP_INDICES = (
    "https://upload.pypi.org/legacy/",
    "https://test.pypi.org/legacy/",
)


def _env_str(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def pypi_publish_uses_manual_credentials(with_: Mapping[str, object]) -> bool:
    """Whether a PyPI publish step's ``with:`` block configures a password.

    When a repository URL is given, only the indices that support Trusted
    Publishing are flagged, to avoid false positives on third-party indices.
    """
    has_manual_credential = "password" in with_
    if "repository-url" in with_:
        repo_url = with_["repository-url"]
    elif "repository_url" in with_:
        repo_url = with_["repository_url"]
    else:
        return has_manual_credential
    return has_manual_credential and _env_str(repo_url) in KNOWN_PYTHON_TP_INDICES


def release_gem_uses_manual_credentials(with_: Mapping[str, object]) -> bool:
    """Whether a gem release step opts out of Trusted Publishing.

    Unset means the default, which is Trusted Publishing; anything but
    ``true`` means it is not used.
    """
    if "setup-trusted-publisher" not in with_:
        return False
    return _env_str(with_["setup-trusted-publisher"]) != "true"


def rubygems_credential_uses_manual_credentials(with_: Mapping[str, object]) -> bool:
    """Whether a RubyGems credential step is given an API token."""
    return "api-token" in with_