"""Workflow triggers: publishing triggers and fundamentally insecure triggers."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

PULL_REQUEST_TARGET_ANNOTATION = "pull_request_target is almost always used insecurely"
WORKFLOW_RUN_ANNOTATION = "workflow_run is almost always used insecurely"


class Toggle(enum.Enum):
    """Whether a control field turns a feature on or turns it off."""

    OPT_IN = "opt-in"
    OPT_OUT = "opt-out"


class ControlFieldType(enum.Enum):
    """The value type of a control field in a step's ``with:`` block."""

    BOOLEAN = "boolean"
    STRING = "string"


@dataclass(frozen=True)
class CacheAwareAction:
    """An action known to use a cache or to publish, with its control field.

    Actions without a control field (``toggle`` is ``None``) always have the
    behaviour; ``enabled_by_default`` then carries no meaning.
    """

    uses: str
    toggle: Toggle | None = None
    field: str | None = None
    field_type: ControlFieldType | None = None
    enabled_by_default: bool = True

    def __post_init__(self) -> None:
        parts = (self.toggle, self.field, self.field_type)
        if any(part is None for part in parts) and any(
            part is not None for part in parts
        ):
            raise ValueError(
                "toggle, field and field_type must be given together or not at all"
            )

    @property
    def configurable(self) -> bool:
        """Whether the behaviour can be controlled through ``with:``."""
        return self.toggle is not None


def _configurable(
    uses: str,
    toggle: Toggle,
    field: str,
    field_type: ControlFieldType,
    enabled_by_default: bool,
) -> CacheAwareAction:
    return CacheAwareAction(uses, toggle, field, field_type, enabled_by_default)


_IN, _OUT = Toggle.OPT_IN, Toggle.OPT_OUT
_BOOL, _STR = ControlFieldType.BOOLEAN, ControlFieldType.STRING

KNOWN_CACHE_AWARE_ACTIONS: tuple[CacheAwareAction, ...] = (
    _configurable("actions/cache", _OUT, "lookup-only", _BOOL, True),
    _configurable("actions/setup-java", _IN, "cache", _STR, False),
    _configurable("actions/setup-go", _IN, "cache", _BOOL, True),
    _configurable("actions/setup-node", _IN, "cache", _STR, False),
    _configurable("actions/setup-python", _IN, "cache", _STR, False),
    _configurable("actions/setup-dotnet", _IN, "cache", _BOOL, False),
    _configurable("astral-sh/setup-uv", _OUT, "enable-cache", _STR, True),
    _configurable("Swatinem/rust-cache", _OUT, "lookup-only", _BOOL, True),
    _configurable("ruby/setup-ruby", _IN, "bundler-cache", _BOOL, False),
    _configurable("PyO3/maturin-action", _IN, "sccache", _BOOL, False),
    _configurable("mlugg/setup-zig", _IN, "use-cache", _BOOL, True),
    _configurable("oven-sh/setup-bun", _OUT, "no-cache", _BOOL, True),
    _configurable(
        "DeterminateSystems/magic-nix-cache-action", _IN, "use-gha-cache", _BOOL, True
    ),
    _configurable("graalvm/setup-graalvm", _IN, "cache", _STR, False),
    _configurable("gradle/actions/setup-gradle", _OUT, "cache-disabled", _BOOL, True),
    _configurable("docker/setup-buildx-action", _IN, "cache-binary", _BOOL, True),
    _configurable(
        "actions-rust-lang/setup-rust-toolchain", _IN, "cache", _BOOL, True
    ),
    CacheAwareAction("Mozilla-Actions/sccache-action"),
    CacheAwareAction("nix-community/cache-nix-action"),
)

KNOWN_PUBLISHER_ACTIONS: tuple[CacheAwareAction, ...] = (
    # Public packages and/or binary distribution channels.
    CacheAwareAction("pypa/gh-action-pypi-publish"),
    CacheAwareAction("rubygems/release-gem"),
    CacheAwareAction("jreleaser/release-action"),
    CacheAwareAction("goreleaser/goreleaser-action"),
    # GitHub releases.
    CacheAwareAction("softprops/action-gh-release"),
    CacheAwareAction("release-drafter/release-drafter"),
    CacheAwareAction("googleapis/release-please-action"),
    # Container registries.
    _configurable("docker/build-push-action", _IN, "push", _BOOL, True),
    CacheAwareAction("redhat-actions/push-to-registry"),
    # Cloud and edge providers.
    CacheAwareAction("aws-actions/amazon-ecs-deploy-task-definition"),
    CacheAwareAction("aws-actions/aws-cloudformation-github-deploy"),
    CacheAwareAction("Azure/aci-deploy"),
    CacheAwareAction("Azure/container-apps-deploy-action"),
    CacheAwareAction("Azure/functions-action"),
    CacheAwareAction("Azure/sql-action"),
    CacheAwareAction("cloudflare/wrangler-action"),
    CacheAwareAction("google-github-actions/deploy-appengine"),
    CacheAwareAction("google-github-actions/deploy-cloudrun"),
    CacheAwareAction("google-github-actions/deploy-cloud-functions"),
)


def _event_names(trigger: object) -> list[str] | None:
    """Event names of a bare or list trigger; ``None`` for a mapping trigger."""
    if isinstance(trigger, str):
        return [trigger]
    if isinstance(trigger, Mapping):
        return None
    if isinstance(trigger, Sequence) and all(isinstance(e, str) for e in trigger):
        return list(trigger)
    raise ValueError(f"invalid workflow trigger: {trigger!r}")


def trigger_used_when_publishing_artifacts(trigger: object) -> bool:
    """Whether an ``on:`` value is one typically used to publish artifacts.

    That is a ``release`` event given as a bare event or in a list, or a
    ``push`` with tag filters or with a branch filter naming a release branch.
    """
    names = _event_names(trigger)
    if names is not None:
        return "release" in names

    assert isinstance(trigger, Mapping)
    push = trigger.get("push")
    if not isinstance(push, Mapping):
        return False

    pushing_new_tag = "tags" in push or "tags-ignore" in push
    branches = push.get("branches")
    pushing_to_release_branch = isinstance(branches, list) and any(
        "release" in str(branch).lower() for branch in branches
    )
    return pushing_new_tag or pushing_to_release_branch


def dangerous_triggers(trigger: object) -> list[str]:
    """Return an annotation for each fundamentally insecure event in ``trigger``.

    ``pull_request_target`` is reported before ``workflow_run``.
    """
    names = _event_names(trigger)
    present = set(names) if names is not None else set(trigger)  # type: ignore[arg-type]
    annotations = []
    if "pull_request_target" in present:
        annotations.append(PULL_REQUEST_TARGET_ANNOTATION)
    if "workflow_run" in present:
        annotations.append(WORKFLOW_RUN_ANNOTATION)
    return annotations