from __future__ import annotations

import json
import re
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from domain.models import TrackerConfig, UserProfile

_REQUIRED_PROFILE_KEYS = {"name", "email"}
_KNOWN_CONFIG_KEYS = {"db_path", "collection", "display_timezone", "currency"}
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_COLLECTION_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


class FileSystemConfigProvider:
    """Reads config.json and profile.json from a config directory.

    config.json is optional; missing keys fall back to ``TrackerConfig``
    defaults. Every public method re-reads from disk so that edits to the
    JSON files take effect without restarting the app.
    """

    def __init__(self, config_dir: str) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def validate(self) -> list[str]:
        errors: list[str] = []
        config_path = self._config_dir / "config.json"
        profile_path = self._config_dir / "profile.json"

        if config_path.is_file():
            config_data = self._validate_json_file(config_path, set(), errors)
            if config_data is not None:
                errors.extend(self._validate_config_formats(config_data))

        profile_data = self._validate_json_file(profile_path, _REQUIRED_PROFILE_KEYS, errors)
        if profile_data is not None:
            errors.extend(self._validate_profile_formats(profile_data))

        return errors

    @staticmethod
    def _validate_config_formats(data: dict) -> list[str]:
        errors: list[str] = []
        unknown = set(data.keys()) - _KNOWN_CONFIG_KEYS
        if unknown:
            errors.append(f"config.json has unknown keys: {', '.join(sorted(unknown))}")

        db_path = data.get("db_path")
        if db_path is not None and (not isinstance(db_path, str) or not db_path.strip()):
            errors.append("db_path must be a non-empty string.")

        collection = data.get("collection")
        if collection is not None and not _COLLECTION_PATTERN.match(str(collection)):
            errors.append("collection may only contain letters, digits, '-' and '_'.")

        tz_name = data.get("display_timezone")
        if tz_name is not None:
            try:
                resolve_timezone(str(tz_name))
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(f"display_timezone '{tz_name}' is not a known time zone.")

        currency = data.get("currency")
        if currency is not None and not _CURRENCY_PATTERN.match(str(currency)):
            errors.append("currency must be a three-letter ISO code such as 'PHP'.")

        return errors

    @staticmethod
    def _validate_profile_formats(data: dict) -> list[str]:
        errors: list[str] = []
        name = data.get("name", "")
        if not name or name == "Your Full Name":
            errors.append("profile.json: name is a placeholder. Enter your real name.")

        email = data.get("email", "")
        if not _EMAIL_PATTERN.match(email):
            errors.append(f"profile.json: email '{email}' is not a valid email address.")
        elif email == "your@email.com":
            errors.append("profile.json: email is a placeholder. Enter your real email.")

        uid = data.get("uid")
        if uid is not None and (not isinstance(uid, str) or not uid.strip()):
            errors.append("profile.json: uid must be a non-empty string when set.")

        return errors

    def get_config(self) -> TrackerConfig:
        path = self._config_dir / "config.json"
        data = self._read_json("config.json") if path.is_file() else {}
        defaults = TrackerConfig()
        db_path = data.get("db_path", defaults.db_path)
        if db_path != ":memory:" and not Path(db_path).is_absolute():
            db_path = str(self._config_dir / db_path)
        return TrackerConfig(
            db_path=db_path,
            collection=data.get("collection", defaults.collection),
            display_timezone=data.get("display_timezone", defaults.display_timezone),
            currency=data.get("currency", defaults.currency),
        )

    def get_display_timezone(self) -> tzinfo:
        return resolve_timezone(self.get_config().display_timezone)

    def get_profile(self) -> UserProfile:
        data = self._read_json("profile.json")
        return UserProfile(
            full_name=data["name"],
            email=data["email"],
            uid=data.get("uid"),
            photo_url=data.get("photo_url"),
        )

    def get_session_path(self) -> Path:
        return self._config_dir / "session.json"

    # -- internal helpers ---------------------------------------------------

    def _read_json(self, filename: str) -> dict:
        path = self._config_dir / filename
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _validate_json_file(
        path: Path,
        required_keys: set[str],
        errors: list[str],
    ) -> dict | None:
        """Validate a JSON file exists and has required keys.

        Returns the parsed dict on success, or None if the file
        is missing or unparseable.
        """
        if not path.is_file():
            errors.append(f"Missing file: {path}")
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            errors.append(f"Cannot read {path}: {exc}")
            return None
        if not isinstance(data, dict):
            errors.append(f"{path.name} must contain a JSON object")
            return None
        missing = required_keys - set(data.keys())
        if missing:
            errors.append(f"{path.name} missing keys: {', '.join(sorted(missing))}")
            return None
        return data
