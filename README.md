# ghaudit

Building blocks for auditing GitHub Actions workflows and composite actions
for common security problems: an expression-language parser, the checks
behind several audits, and per-audit ignore configuration.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `ghaudit.expr`: a parser for the GitHub Actions expression language
  (the text inside `${{ ... }}`). `parse(text)` returns an `Expr` tree made
  of `Number`, `String`, `Boolean`, `Null`, `Star`, `Call`, `Identifier`,
  `Index`, `Context`, `BinaryOp` (with a `BinOp` operator) and `UnaryOp`
  (with `UnOp.NOT`). `Expr.contexts()` lists the well-known contexts an
  expression reads; contexts hanging off a function call, such as
  `fromJSON(x).y`, are left out, but the call's arguments are searched.
  Malformed input raises `ExprParseError`, which records `text` and
  `position`.
- `ghaudit.audits`: the `Severity`, `Confidence` and `Persona` levels shared
  by the checks, the `AUDITS` mapping of audit identifiers to `AuditInfo`
  (identifier, description and a documentation anchor in `url`), and
  `audit_info(ident)`, which raises `KeyError` for an unknown audit.
- `ghaudit.config`: per-audit ignore rules. A `WorkflowRule` is written
  `file.yml`, `file.yml:LINE` or `file.yml:LINE:COL` (1-based; `.yaml`
  also accepted) and parsed by `WorkflowRule.parse`. `Config.from_mapping`
  builds a configuration from parsed YAML of the form
  `{"rules": {"<audit>": {"ignore": [...]}}}`, `Config.load(path)` reads a
  YAML file, and `Config.discover(cwd)` loads `.github/ghaudit.yml` or
  `ghaudit.yml` under `cwd` (the current directory by default), falling back
  to an empty configuration. `Config.ignores(ident, locations)` takes
  `(filename, line, column)` tuples and is true if any of them matches a
  rule. Malformed rules or files raise `ConfigError`.
- `ghaudit.permissions`: `check_permissions(permissions, parent)` returns
  `(severity, confidence, note)` for `read-all`, `write-all`, and, at the
  workflow level (`parent` is `None`), each permission granted `write`.
  Severities per permission are in `KNOWN_PERMISSIONS`.
- `ghaudit.template_injection`: `extract_expressions(text)` yields each
  `${{ ... }}` template, `expr_is_safe(expr)` tells whether an expression
  can only produce a literal, and `injectable_template_expressions(script,
  env_is_static, matrix_is_static)` returns `(expression, severity,
  confidence, persona)` for risky expansions. Contexts in `SAFE_CONTEXTS`
  and `secrets.*` are not reported.
- `ghaudit.trusted_publishing`: `pypi_publish_uses_manual_credentials`,
  `release_gem_uses_manual_credentials` and
  `rubygems_credential_uses_manual_credentials` inspect a step's `with:`
  mapping for credentials configured instead of Trusted Publishing.
- `ghaudit.triggers`: `KNOWN_CACHE_AWARE_ACTIONS` and
  `KNOWN_PUBLISHER_ACTIONS` as `CacheAwareAction` records (with `Toggle`
  and `ControlFieldType` for their control fields);
  `trigger_used_when_publishing_artifacts(trigger)` for an `on:` value that
  typically publishes artifacts; and `dangerous_triggers(trigger)`, which
  returns an annotation for `pull_request_target` and for `workflow_run`.
- `ghaudit.github_env`: `cmd_uses_github_env(script)` finds redirections
  into `%GITHUB_ENV%` / `%GITHUB_PATH%` in `cmd` scripts and returns each
  destination with its span.

## Example

```python
from ghaudit.expr import parse
from ghaudit.template_injection import expr_is_safe, injectable_template_expressions

expr = parse("github.event.issue.title || 'untitled'")
print(expr.contexts())      # ['github.event.issue.title']
print(expr_is_safe(expr))   # False

for finding in injectable_template_expressions("echo ${{ inputs.name }}"):
    print(finding)          # ('inputs.name', Severity.HIGH, Confidence.LOW, Persona.REGULAR)
```

```python
from ghaudit.config import Config, WorkflowRule

rule = WorkflowRule.parse("ci.yml:12:5")
print(rule.line, rule.column)  # 12 5

config = Config.from_mapping({"rules": {"template-injection": {"ignore": ["ci.yml:12"]}}})
print(config.ignores("template-injection", [("ci.yml", 12, 3)]))  # True
```

## What this package does not do

- It has no command-line program and no audit runner: it does not load
  workflow or action files, walk their jobs and steps, or print findings.
  The functions above work on values you have already extracted from
  parsed YAML.
- It makes no network requests, so checks that need the GitHub API
  (impostor commits, ref confusion, known vulnerable actions) are absent.
- `ghaudit.github_env` only understands `cmd` scripts; it does not parse
  bash or PowerShell.