import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; development when unset
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_weekdays(name: str, default: str = "6") -> tuple:
    """Comma separated weekday numbers (Monday=0 ... Sunday=6)."""
    raw = os.getenv(name, default)
    days = tuple(int(part) for part in raw.split(",") if part.strip())
    for day in days:
        if day < 0 or day > 6:
            raise ValueError(f"{name}: weekday out of range: {day}")
    return days
