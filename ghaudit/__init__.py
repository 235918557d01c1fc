"""Building blocks for auditing GitHub Actions workflows and actions."""

__version__ = "0.1.0"

__all__ = [
    "audits",
    "config",
    "expr",
    "github_env",
    "permissions",
    "template_injection",
    "triggers",
    "trusted_publishing",
]