import os


def get_settings_module() -> str:
    # APP_ENV chooses the settings module; default is development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def _optional_float(name: str):
    value = os.getenv(name, "").strip()
    return float(value) if value else None


def _optional_int(name: str, default):
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return int(value)
