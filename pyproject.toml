[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ghaudit"
version = "0.1.0"
description = "Building blocks for auditing GitHub Actions workflows and actions for security problems"
requires-python = ">=3.10"
keywords = ["github-actions", "security", "static-analysis", "ci", "audit", "expressions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Quality Assurance",
]
dependencies = ["pyyaml"]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ghaudit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
