from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = os.getenv("APP_NAME", "Attendance Dashboard")
DEFAULT_SETTINGS_DIR = Path(os.path.expanduser("~")) / ".attendance_dashboard"
DEFAULT_SETTINGS_FILENAME = "user_settings.json"
DEFAULT_API_URL = "https://web-production-0ea9f.up.railway.app"

DEFAULT_SETTINGS: Dict[str, Any] = {
	"api_url": DEFAULT_API_URL,
	"language": "en",
	"appearance_mode": "dark",
	"access_token": None,
}


@dataclass
class UserSettingsStore:
	"""Load and persist user-configurable preferences in a JSON file."""

	settings_dir: Path = field(default_factory=lambda: DEFAULT_SETTINGS_DIR)
	settings_filename: str = DEFAULT_SETTINGS_FILENAME
	_data: Dict[str, Any] = field(init=False, default_factory=dict)
	settings_file: Path = field(init=False)

	def __post_init__(self) -> None:
		self.settings_dir.mkdir(parents=True, exist_ok=True)
		self.settings_file = self.settings_dir / self.settings_filename
		self.reload()

	# ------------------------------------------------------------------
	# Public API
	# ------------------------------------------------------------------
	@property
	def data(self) -> Dict[str, Any]:
		return dict(self._data)

	def get(self, key: str, default: Any = None) -> Any:
		return self._data.get(key, default)

	def reload(self) -> None:
		combined = dict(DEFAULT_SETTINGS)
		combined.update(self._load_json(self.settings_file))

		api_url = combined.get("api_url") or DEFAULT_API_URL
		combined["api_url"] = str(api_url).strip().rstrip("/")
		self._data = combined

	def update(self, **kwargs: Any) -> Dict[str, Any]:
		new_data = dict(self._data)

		for key, value in kwargs.items():
			if key not in DEFAULT_SETTINGS:
				continue
			if key == "api_url" and value:
				value = str(value).strip().rstrip("/")
			new_data[key] = value

		self._data = new_data
		self._persist()
		return dict(self._data)

	def reset(self) -> Dict[str, Any]:
		return self.update(**DEFAULT_SETTINGS)

	# ------------------------------------------------------------------
	# Internal helpers
	# ------------------------------------------------------------------
	def _persist(self) -> None:
		with self.settings_file.open("w", encoding="utf-8") as handle:
			json.dump(self._data, handle, indent=2)

	@staticmethod
	def _load_json(path: Path) -> Dict[str, Any]:
		if not path.exists():
			return {}
		try:
			with path.open("r", encoding="utf-8") as handle:
				payload = json.load(handle)
		except (OSError, json.JSONDecodeError) as exc:
			logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
			return {}
		return payload if isinstance(payload, dict) else {}
