from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from tailscale_client.config.env_aliases import env_var_for
from tailscale_client.config.settings import Settings
from tailscale_client.config.validate import (
    ConfigValidationError,
    ConfigValidationIssue,
    issues_from_pydantic_error,
    validate_settings,
)

DEFAULT_CONFIG_PATH = Path("config/config.yaml")
DOTENV_PATH = Path(".env")


def _fail(path: str | Path, message: str) -> ConfigValidationError:
    return ConfigValidationError([ConfigValidationIssue(str(path), message)])


def _config_file(config_path: str | Path | None) -> Path | None:
    """
    Pick the YAML file to read, or None when there is none.

    A path given as argument or via CONFIG_PATH has to exist. The default
    location is optional.
    """
    chosen = config_path if config_path is not None else os.environ.get("CONFIG_PATH")
    if chosen:
        path = Path(chosen)
        if not path.exists():
            raise _fail("CONFIG_PATH", f"Config file not found: {path}")
        return path
    return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise _fail(path, f"Unable to read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise _fail(path, f"Invalid YAML: {exc}") from exc

    if document is None:
        return {}
    if isinstance(document, dict):
        return document
    raise _fail(path, "YAML root must be a mapping/object")


def _with_env_hint(issue: ConfigValidationIssue) -> ConfigValidationIssue:
    env_name = env_var_for(issue.path)
    if not env_name or env_name in issue.message:
        return issue
    return ConfigValidationIssue(
        issue.path, f"{issue.message} Set `{env_name}` (or YAML `{issue.path}`)."
    )


def _hinted(issues: list[ConfigValidationIssue]) -> ConfigValidationError:
    return ConfigValidationError(_with_env_hint(issue) for issue in issues)


def load_settings(*, config_path: str | Path | None = None) -> Settings:
    """
    Load settings from .env, an optional YAML file and the environment, then validate.

    Environment variables win over YAML values and values already exported
    win over .env. Every problem found is reported at once in a
    ConfigValidationError.
    """
    if DOTENV_PATH.is_file():
        load_dotenv(dotenv_path=DOTENV_PATH, override=False)

    path = _config_file(config_path)
    yaml_data = _read_yaml(path) if path is not None else {}

    try:
        settings = Settings(**yaml_data)
    except ValidationError as exc:
        raise _hinted(issues_from_pydantic_error(exc)) from exc

    try:
        validate_settings(settings)
    except ConfigValidationError as exc:
        raise _hinted(exc.issues) from None
    return settings
