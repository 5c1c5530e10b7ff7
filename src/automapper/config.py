# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import json
import os.path
import threading
from collections.abc import Iterator
from typing import Any, MutableMapping

# Local Modules:
from .utils import getDataPath


DATA_DIRECTORY: str = getDataPath()
DEFAULTS: dict[str, Any] = {
	"logging_level": "INFO",
	"maps_directory": os.path.join(DATA_DIRECTORY, "maps"),
	"optimal_pathfinding": False,
	"max_search_iterations": 100000,
	"load_workers": 4,
}
POSITIVE_KEYS: frozenset[str] = frozenset(("max_search_iterations", "load_workers"))
CONFIG_TYPES: dict[str, tuple[type, ...]] = {
	"logging_level": (str, int),
	"maps_directory": (str,),
	"optimal_pathfinding": (bool,),
	"max_search_iterations": (int,),
	"load_workers": (int,),
}


class ConfigError(Exception):
	"""Implements the base class for Config exceptions."""


class Config(MutableMapping[str, Any]):
	"""
	Implements loading and saving of program configuration.

	Values missing from both the sample and user configuration files fall back to DEFAULTS.
	"""

	_configLock: threading.RLock = threading.RLock()

	def __init__(self, name: str = "automapper") -> None:
		"""
		Defines the constructor for the object.

		Args:
			name: The name of the configuration.
		"""
		super().__init__()
		self._name: str = name
		self._config: dict[str, Any] = dict()
		self.reload()

	@property
	def name(self) -> str:
		"""The name of the configuration."""
		return self._name

	def _parse(self, filename: str) -> dict[str, Any]:
		filename = os.path.join(DATA_DIRECTORY, filename)
		if not os.path.exists(filename):
			return {}
		elif os.path.isdir(filename):
			raise ConfigError(f"'{filename}' is a directory, not a file.")
		with self._configLock:
			try:
				with open(filename, "r", encoding="utf-8") as fileObj:
					return dict(json.load(fileObj))
			except IOError as e:  # pragma: no cover
				raise ConfigError(f"{e.strerror}: '{e.filename}'")
			except ValueError:
				raise ConfigError(f"Corrupted json file: {filename}")

	def _validate(self, values: dict[str, Any], filename: str) -> dict[str, Any]:
		for key, types in CONFIG_TYPES.items():
			if key in values and not isinstance(values[key], types):
				raise ConfigError(f"Invalid value for '{key}' in {filename}: {values[key]!r}")
			if key in POSITIVE_KEYS and key in values and values[key] < 1:
				raise ConfigError(f"Value for '{key}' in {filename} must be positive: {values[key]!r}")
		return values

	def reload(self) -> None:
		"""Reloads the configuration from disc."""
		self._config.clear()
		for filename in (f"{self.name}.json.sample", f"{self.name}.json"):
			self._config.update(self._validate(self._parse(filename), filename))

	def save(self) -> None:
		"""Saves the configuration to disc."""
		filename: str = os.path.join(DATA_DIRECTORY, f"{self.name}.json")
		with self._configLock:
			with open(filename, "w", encoding="utf-8", newline="\r\n") as fileObj:
				# Configuration should be stored using Windows style line endings (\r\n)
				# so the file can be viewed in Notepad.
				json.dump(self._config, fileObj, sort_keys=True, indent=2)

	def __getitem__(self, key: str) -> Any:
		if key not in self._config and key in DEFAULTS:
			return DEFAULTS[key]
		return self._config[key]

	def __setitem__(self, key: str, value: Any) -> None:
		self._config[key] = value

	def __delitem__(self, key: str) -> None:
		del self._config[key]

	def __iter__(self) -> Iterator[str]:
		return iter(self._config)

	def __len__(self) -> int:
		return len(self._config)
