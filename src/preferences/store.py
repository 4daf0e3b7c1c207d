"""Local JSON-file storage for music preferences."""

import json
import threading
from pathlib import Path

from pydantic import ValidationError as SchemaValidationError

from src.config import PreferencesSettings, get_settings
from src.exceptions import ErrorCode, PreferencesError
from src.logging_config import get_logger
from src.preferences.models import MusicPreferences

logger = get_logger(__name__)


class PreferenceStore:
    """Keeps the latest music preferences per user in a JSON file.

    The file maps ``user_id`` to the serialized preferences. Saving a user's
    preferences replaces any earlier entry.
    """

    def __init__(self, settings: PreferencesSettings | None = None) -> None:
        self._settings = settings or get_settings().preferences
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._settings.storage_path

    def _read_all(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PreferencesError(
                f"Failed to read preferences: {e}",
                details={"path": str(self.path)},
            ) from e
        if not isinstance(data, dict):
            raise PreferencesError(
                "Preferences file is not a JSON object",
                details={"path": str(self.path)},
            )
        return data

    def save(self, preferences: MusicPreferences) -> None:
        """Persist preferences, replacing the user's previous entry.

        Raises:
            PreferencesError: If the file cannot be read or written.
        """
        with self._lock:
            data = self._read_all()
            data[preferences.user_id] = preferences.model_dump(mode="json")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
                tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
                tmp_path.replace(self.path)
            except OSError as e:
                raise PreferencesError(
                    f"Failed to write preferences: {e}",
                    details={"path": str(self.path)},
                ) from e

        logger.info("Saved music preferences", extra={"user_id": preferences.user_id})

    def get(self, user_id: str) -> MusicPreferences:
        """Load a user's preferences.

        Raises:
            PreferencesError: If none are stored or the entry is unreadable.
        """
        with self._lock:
            data = self._read_all()

        entry = data.get(user_id)
        if entry is None:
            raise PreferencesError(
                f"No preferences saved for user: {user_id}",
                code=ErrorCode.PREFERENCES_NOT_FOUND,
                details={"user_id": user_id},
            )
        try:
            return MusicPreferences.model_validate(entry)
        except SchemaValidationError as e:
            raise PreferencesError(
                f"Stored preferences are invalid: {e}",
                details={"user_id": user_id},
            ) from e
