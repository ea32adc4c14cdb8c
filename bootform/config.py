import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

CONFIG_FILE_NAME = "bootform.yaml"

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    return Path.cwd() / CONFIG_FILE_NAME


def load_form_config() -> dict:
    """Load and parse bootform.yaml with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE_NAME} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class FormSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOTFORM_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Hidden field names
    csrf_field_name: str = "_token"
    method_field_name: str = "_method"

    # Session keys
    csrf_session_key: str = "_csrf_token"
    old_input_session_key: str = "_old_input"
    errors_session_key: str = "_errors"

    # Methods sent as POST with a hidden method field
    spoofed_methods: list[str] = ["DELETE", "PATCH", "PUT"]

    # Bootstrap classes
    inline_class: str = "form-inline"
    control_class: str = "form-control"
    file_control_class: str = "form-control-file"
    invalid_class: str = "is-invalid"
    group_class: str = "form-group"
    help_class: str = "form-text text-muted"
    feedback_class: str = "invalid-feedback"
    submit_class: str = "btn btn-primary"


@lru_cache
def get_settings() -> FormSettings:
    """Load settings from .env and bootform.yaml."""
    base_settings = FormSettings()

    try:
        form_config = load_form_config()
    except FileNotFoundError:
        return base_settings

    updates = {k: v for k, v in form_config.items() if k in FormSettings.model_fields}

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings
