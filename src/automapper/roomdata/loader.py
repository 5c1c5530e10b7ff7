# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
import os
import os.path
from typing import NamedTuple, Union
from xml.etree import ElementTree

# Local Modules:
from ..typedef import ZONE_INFO_RESULT_TYPE
from ..utils import stripDescription
from .objects import DEFAULT_MOVE_COST, Arc, Label, Position, Room, Zone


ZONE_FILE_EXTENSION: str = ".xml"
ZONE_TAG: str = "zone"
ROOM_TAG: str = "node"
LABEL_TAG: str = "label"
DESCRIPTION_TAG: str = "description"
POSITION_TAG: str = "position"
ARC_TAG: str = "arc"
META_CHUNK_SIZE: int = 4096


logger: logging.Logger = logging.getLogger(__name__)


class MapError(Exception):
	"""Implements the base class for map loading exceptions."""

	def __init__(self, path: str, message: str) -> None:
		super().__init__(f"{message}: '{path}'")
		self.path: str = path


class MapFileNotFoundError(MapError):
	"""Raised when a zone file is missing or unreadable."""


class MapFormatError(MapError):
	"""Raised when a zone file is well formed XML without the required structure."""


class MapParseError(MapError):
	"""Raised when a zone file can't be parsed."""


class ZoneInfo(NamedTuple):
	"""The metadata of a zone file."""

	id: str
	name: str
	file: str


def _read(path: str) -> bytes:
	if not os.path.exists(path):
		raise MapFileNotFoundError(path, "File doesn't exist")
	elif os.path.isdir(path):
		raise MapFileNotFoundError(path, "Path is a directory, not a file")
	try:
		with open(path, "rb") as fileObj:
			return fileObj.read()
	except OSError as e:
		raise MapFileNotFoundError(path, f"Unable to read file ({e.strerror})") from e


def _requireAttribute(path: str, element: ElementTree.Element, attribute: str) -> str:
	value: Union[str, None] = element.get(attribute)
	if value is None:
		raise MapFormatError(path, f"<{element.tag}> element is missing the '{attribute}' attribute")
	return value


def _parsePosition(path: str, element: ElementTree.Element) -> Position:
	positionElement: Union[ElementTree.Element, None] = element.find(POSITION_TAG)
	if positionElement is None:
		return Position()
	try:
		return Position(*(int(_requireAttribute(path, positionElement, axis)) for axis in "xyz"))
	except ValueError as e:
		raise MapFormatError(path, f"Invalid position ({e})") from e


def _parseArc(path: str, element: ElementTree.Element) -> Arc:
	cost: str = element.get("cost", "")
	try:
		moveCost: int = int(cost) if cost else DEFAULT_MOVE_COST
	except ValueError as e:
		raise MapFormatError(path, f"Invalid arc cost ({e})") from e
	if moveCost < 0:
		raise MapFormatError(path, f"Negative arc cost ({moveCost})")
	return Arc(
		exit=element.get("exit", ""),
		move=element.get("move", ""),
		destination=element.get("destination", ""),
		hidden=element.get("hidden", "").lower() == "true",
		moveCost=moveCost,
	)


def _parseRoom(path: str, element: ElementTree.Element) -> Room:
	return Room(
		id=_requireAttribute(path, element, "id"),
		name=_requireAttribute(path, element, "name"),
		descriptions=[stripDescription(desc.text or "") for desc in element.findall(DESCRIPTION_TAG)],
		notes=element.get("note"),
		color=element.get("color"),
		position=_parsePosition(path, element),
		arcs=[_parseArc(path, arc) for arc in element.findall(ARC_TAG)],
	)


def _parseRoot(path: str, data: bytes) -> ElementTree.Element:
	try:
		root: ElementTree.Element = ElementTree.fromstring(data)
	except ElementTree.ParseError as e:
		raise MapParseError(path, f"Invalid XML ({e})") from e
	if root.tag != ZONE_TAG:
		raise MapFormatError(path, f"Expected a <{ZONE_TAG}> root element, found <{root.tag}>")
	return root


def loadZone(path: str) -> Zone:
	"""
	Loads a zone file into memory.

	Args:
		path: The location of the zone file.

	Returns:
		The loaded zone.

	Raises:
		MapFileNotFoundError: The file is missing or unreadable.
		MapParseError: The file isn't valid XML.
		MapFormatError: The XML doesn't describe a zone.
	"""
	root: ElementTree.Element = _parseRoot(path, _read(path))
	zone: Zone = Zone(
		_requireAttribute(path, root, "id"),
		_requireAttribute(path, root, "name"),
		os.path.basename(path),
	)
	for element in root.findall(ROOM_TAG):
		room: Room = _parseRoom(path, element)
		if room.id in zone:
			logger.warning(f"Duplicate room ID {room.id} in '{path}'. Lookups will return the last one.")
		zone.addRoom(room)
	zone.labels.extend(
		Label(element.get("text", ""), _parsePosition(path, element)) for element in root.findall(LABEL_TAG)
	)
	logger.debug(f"Loaded {len(zone)} rooms from '{path}'.")
	return zone


def loadZoneInfo(path: str) -> ZoneInfo:
	"""
	Loads only the metadata of a zone file.

	Parsing stops at the root element, so the rooms are never built.

	Args:
		path: The location of the zone file.

	Returns:
		The zone metadata.

	Raises:
		MapFileNotFoundError: The file is missing or unreadable.
		MapParseError: The file isn't valid XML.
		MapFormatError: The root element isn't a zone, or lacks an id or name.
	"""
	data: bytes = _read(path)
	parser: ElementTree.XMLPullParser = ElementTree.XMLPullParser(events=("start",))
	root: Union[ElementTree.Element, None] = None
	try:
		for offset in range(0, len(data), META_CHUNK_SIZE):
			parser.feed(data[offset : offset + META_CHUNK_SIZE])
			root = next((element for _, element in parser.read_events()), None)
			if root is not None:
				break
	except ElementTree.ParseError as e:
		raise MapParseError(path, f"Invalid XML ({e})") from e
	if root is None:
		raise MapParseError(path, "No root element")
	elif root.tag != ZONE_TAG:
		raise MapFormatError(path, f"Expected a <{ZONE_TAG}> root element, found <{root.tag}>")
	return ZoneInfo(_requireAttribute(path, root, "id"), _requireAttribute(path, root, "name"), path)


def listZoneFiles(directory: str) -> list[str]:
	"""
	Lists the zone files in a directory.

	Args:
		directory: The directory to be searched.

	Returns:
		The paths of the zone files, sorted by file name.
	"""
	with os.scandir(directory) as entries:
		return sorted(
			entry.path for entry in entries if entry.is_file() and entry.name.endswith(ZONE_FILE_EXTENSION)
		)


def loadAllZoneInfo(directory: str) -> list[ZONE_INFO_RESULT_TYPE]:
	"""
	Loads the metadata of every zone file in a directory.

	A failure to load one file never prevents the others from loading.

	Args:
		directory: The directory containing the zone files.

	Returns:
		One item per zone file: the metadata, or the error raised while loading it.
	"""
	try:
		paths: list[str] = listZoneFiles(directory)
	except OSError as e:
		return [MapFileNotFoundError(directory, f"Unable to list directory ({e.strerror})")]
	results: list[ZONE_INFO_RESULT_TYPE] = []
	for path in paths:
		try:
			results.append(loadZoneInfo(path))
		except MapError as e:  # NOQA: PERF203
			logger.warning(str(e))
			results.append(e)
	return results
