# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from timeit import default_timer as defaultTimer
from typing import Optional, Union

# Local Modules:
from .roomdata.loader import MapError, ZoneInfo, loadAllZoneInfo, loadZone
from .roomdata.objects import Zone


logger: logging.Logger = logging.getLogger(__name__)


class ZoneStore(object):
	"""
	Holds the loaded zones, indexed by ID and by file name, plus the current zone.
	"""

	def __init__(self, zones: Optional[Iterable[Zone]] = None) -> None:
		self.zonesLock: threading.Lock = threading.Lock()
		self._zones: dict[str, Zone] = {}
		self._files: dict[str, Zone] = {}
		self._currentZone: Union[Zone, None] = None
		if zones is not None:
			self.replace(zones)

	def __iter__(self) -> Iterator[Zone]:
		return iter(tuple(self._zones.values()))

	def __len__(self) -> int:
		return len(self._zones)

	def __contains__(self, zoneID: object) -> bool:
		return zoneID in self._zones

	@property
	def currentZone(self) -> Union[Zone, None]:
		return self._currentZone

	@currentZone.setter
	def currentZone(self, value: Union[Zone, None]) -> None:
		if value is not self._currentZone:
			logger.debug(f"Current zone changed to {value!r}.")
		self._currentZone = value

	@currentZone.deleter
	def currentZone(self) -> None:
		self._currentZone = None

	def getZone(self, zoneID: Optional[str]) -> Union[Zone, None]:
		"""
		Retrieves a zone by ID.

		Args:
			zoneID: The zone ID.

		Returns:
			The zone, or None if not found.
		"""
		return self._zones.get(zoneID) if zoneID else None

	def getZoneForFile(self, fileName: Optional[str]) -> Union[Zone, None]:
		"""
		Retrieves a zone by the name of the file it was loaded from.

		Args:
			fileName: The file name, without directory.

		Returns:
			The zone, or None if not found.
		"""
		return self._files.get(fileName) if fileName else None

	def replace(self, zones: Iterable[Zone]) -> None:
		"""
		Replaces the contents of the store.

		The current zone is kept if a zone with the same ID is in the new contents.

		Args:
			zones: The new zones. When IDs collide, the first zone wins.
		"""
		newZones: dict[str, Zone] = {}
		newFiles: dict[str, Zone] = {}
		for zone in zones:
			if zone.id in newZones:
				logger.warning(f"Zone ID {zone.id} from '{zone.file}' already loaded from '{newZones[zone.id].file}'.")
				continue
			newZones[zone.id] = zone
			if zone.file:
				newFiles[zone.file] = zone
		with self.zonesLock:
			currentID: Union[str, None] = self._currentZone.id if self._currentZone is not None else None
			self._zones = newZones
			self._files = newFiles
			self.currentZone = newZones.get(currentID) if currentID is not None else None

	def reload(self, directory: str, workers: int = 4) -> list[MapError]:
		"""
		Loads every zone file in a directory, replacing the contents of the store.

		Files are parsed in parallel. Zones are merged in file name order once all have loaded.

		Args:
			directory: The directory containing the zone files.
			workers: The maximum number of files to parse at once.

		Returns:
			The errors encountered, one per file that failed to load.
		"""
		startTime: float = defaultTimer()
		logger.info(f"Loading zones from '{directory}'.")
		errors: list[MapError] = []
		catalog: list[ZoneInfo] = []
		for item in loadAllZoneInfo(directory):
			if isinstance(item, MapError):
				errors.append(item)
			else:
				catalog.append(item)
		results: list[Union[Zone, MapError]]
		with ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="ZoneLoader") as executor:
			results = list(executor.map(_loadZoneOrError, (info.file for info in catalog)))
		zones: list[Zone] = []
		for result in results:
			if isinstance(result, MapError):
				errors.append(result)
			else:
				zones.append(result)
		self.replace(zones)
		elapsedTime: float = defaultTimer() - startTime
		logger.info(f"{len(self)} zones loaded in {elapsedTime:.1f} seconds with {len(errors)} errors.")
		return errors


def _loadZoneOrError(path: str) -> Union[Zone, MapError]:
	try:
		return loadZone(path)
	except MapError as e:
		logger.warning(str(e))
		return e
