"""Runtime configuration: per-audit ignore rules."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ghaudit.yml"

_POSITIVE = re.compile(r"\+?[0-9]+")


class ConfigError(ValueError):
    """Raised for a malformed configuration or ignore rule."""


def _one_based(component: str, what: str) -> int:
    if _POSITIVE.fullmatch(component) is None or int(component) == 0:
        raise ConfigError(f"invalid {what} number component (must be 1-based)")
    return int(component)


@dataclass(frozen=True)
class WorkflowRule:
    """An ignore rule of the form ``file.yml[:line[:column]]``.

    ``line`` and ``column`` are 1-based.
    """

    filename: str
    line: int | None = None
    column: int | None = None

    @classmethod
    def parse(cls, text: str) -> WorkflowRule:
        """Parse a rule; raises ``ConfigError`` if it is malformed."""
        parts = text.rsplit(":", 2)
        filename = parts[0]
        if not filename.endswith((".yml", ".yaml")):
            raise ConfigError(f"invalid workflow filename: {filename}")

        line = _one_based(parts[1], "line") if len(parts) > 1 else None
        column = _one_based(parts[2], "column") if len(parts) > 2 else None
        return cls(filename, line, column)

    def matches(self, filename: str, line: int, column: int) -> bool:
        """Whether this rule covers a 1-based location in ``filename``."""
        if filename != self.filename:
            return False
        if self.line is None:
            return True
        return self.line == line and (self.column is None or self.column == column)


@dataclass
class Config:
    """Ignore rules, keyed by audit identifier."""

    rules: dict[str, tuple[WorkflowRule, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: object) -> Config:
        """Build a configuration from its parsed YAML form."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        if "rules" not in data:
            raise ConfigError("missing field `rules`")
        rules = data["rules"]
        if not isinstance(rules, Mapping):
            raise ConfigError("`rules` must be a mapping")

        parsed: dict[str, tuple[WorkflowRule, ...]] = {}
        for ident, rule_config in rules.items():
            if not isinstance(ident, str):
                raise ConfigError(f"audit name must be a string: {ident!r}")
            if not isinstance(rule_config, Mapping) or "ignore" not in rule_config:
                raise ConfigError(f"rules.{ident}: missing field `ignore`")
            ignore = rule_config["ignore"]
            if not isinstance(ignore, list):
                raise ConfigError(f"rules.{ident}.ignore must be a list")
            entries = []
            for entry in ignore:
                if not isinstance(entry, str):
                    raise ConfigError(f"rules.{ident}.ignore entries must be strings")
                entries.append(WorkflowRule.parse(entry))
            parsed[ident] = tuple(entries)
        return cls(parsed)

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read and parse a configuration file."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
        config = cls.from_mapping(data)
        logger.debug("loaded config: %r", config)
        return config

    @classmethod
    def discover(cls, cwd: str | Path | None = None) -> Config:
        """Load ``.github/<name>`` or ``<name>`` under ``cwd``, else the default."""
        base = Path.cwd() if cwd is None else Path(cwd)
        for candidate in (base / ".github" / CONFIG_FILENAME, base / CONFIG_FILENAME):
            if candidate.is_file():
                return cls.load(candidate)
        logger.debug("no config discovered; loading default")
        return cls()

    def ignores(
        self, ident: str, locations: Iterable[tuple[str, int, int]]
    ) -> bool:
        """Whether any ``(filename, line, column)`` location is ignored for ``ident``.

        Lines and columns are 1-based. A finding is ignored entirely if
        any one of its locations matches a rule.
        """
        rules = self.rules.get(ident)
        if not rules:
            return False
        return any(
            rule.matches(filename, line, column)
            for filename, line, column in locations
            for rule in rules
        )