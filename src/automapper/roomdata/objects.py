# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import math
import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple, Optional, Union

# Local Modules:
from ..typedef import BOUNDS_TYPE, COORDINATES_TYPE, REGEX_MATCH, REGEX_PATTERN
from ..utils import stripDescription


CARDINAL_DIRECTIONS: tuple[str, ...] = (
	"north",
	"south",
	"east",
	"west",
	"northeast",
	"northwest",
	"southeast",
	"southwest",
	"out",
	"up",
	"down",
)
DEFAULT_MOVE_COST: int = 1
TRANSFER_MARKER: str = ".xml"
TRANSFER_FILE_REGEX: REGEX_PATTERN = re.compile(r"(?P<file>[^\s|]+\.xml)")


class PathReconstructionError(RuntimeError):
	"""Raised when two consecutive rooms of a path are not linked by an arc."""


class Position(NamedTuple):
	"""
	A position on the map.

	Only x and y take part in distance calculations. z is cosmetic.
	"""

	x: int = 0
	y: int = 0
	z: int = 0

	def distanceTo(self, other: Position) -> int:
		"""
		Returns the straight-line distance between this position and another.

		Args:
			other: The other position.

		Returns:
			The Euclidean distance in the x-y plane, truncated to an integer.
		"""
		return int(math.hypot(other.x - self.x, other.y - self.y))


class Label(NamedTuple):
	"""A cosmetic text label placed on the map."""

	text: str
	position: Position


class Arc(object):
	"""
	A directed edge from a room.
	"""

	def __init__(
		self,
		exit: str = "",
		move: str = "",
		destination: str = "",
		hidden: bool = False,
		moveCost: int = DEFAULT_MOVE_COST,
	) -> None:
		self.exit: str = exit
		self.move: str = move
		self.destination: str = destination
		self.hidden: bool = hidden
		self.moveCost: int = moveCost

	def __repr__(self) -> str:
		return f"Arc(exit={self.exit!r}, move={self.move!r}, destination={self.destination!r})"

	@property
	def hasDestination(self) -> bool:
		"""True if the arc leads to a known room."""
		return bool(self.destination)

	@property
	def destinationValue(self) -> int:
		"""The destination as an integer, or 0 if it isn't numeric."""
		try:
			return int(self.destination)
		except ValueError:
			return 0


class Room(object):
	"""
	A room.
	"""

	def __init__(
		self,
		id: str,
		name: str = "",
		descriptions: Optional[Iterable[str]] = None,
		notes: Optional[str] = None,
		color: Optional[str] = None,
		position: Optional[Position] = None,
		arcs: Optional[Iterable[Arc]] = None,
	) -> None:
		self.id: str = id
		self.name: str = name
		self.descriptions: list[str] = list(descriptions) if descriptions is not None else []
		self.notes: Optional[str] = notes
		self.color: Optional[str] = color
		self.position: Position = position if position is not None else Position()
		self.arcs: list[Arc] = list(arcs) if arcs is not None else []

	def __repr__(self) -> str:
		return f"Room(id={self.id!r}, name={self.name!r})"

	@property
	def coordinates(self) -> COORDINATES_TYPE:
		"""The room coordinates as an (x, y, z) tuple."""
		return (self.position.x, self.position.y, self.position.z)

	@property
	def isTransfer(self) -> bool:
		"""True if the notes reference another zone file."""
		return self.notes is not None and TRANSFER_MARKER in self.notes

	@property
	def transferFile(self) -> Union[str, None]:
		"""The file name of the zone this room leads to, or None."""
		if not self.isTransfer:
			return None
		match: REGEX_MATCH = TRANSFER_FILE_REGEX.search(self.notes or "")
		return match.group("file") if match is not None else None

	@property
	def filteredArcs(self) -> list[Arc]:
		"""The arcs with a known destination, sorted by the numeric value of the destination."""
		return sorted((arc for arc in self.arcs if arc.hasDestination), key=lambda arc: arc.destinationValue)

	@property
	def info(self) -> str:
		"""A summery of the room info."""
		output: list[str] = []
		output.append(f"ID: '{self.id}'")
		output.append(f"Name: '{self.name}'")
		output.append("Descriptions:")
		for description in self.descriptions:
			output.append("-" * 5)
			output.extend(description.splitlines())
		output.append("-" * 5)
		output.append(f"Note: '{self.notes or ''}'")
		output.append(f"Color: '{self.color or ''}'")
		output.append(f"Coordinates (X, Y, Z): '{self.position.x}', '{self.position.y}', '{self.position.z}'")
		output.append("Arcs:")
		for arc in self.arcs:
			output.append("-" * 5)
			output.append(f"Exit: '{arc.exit}'")
			output.append(f"Move: '{arc.move}'")
			output.append(f"Destination: '{arc.destination}'")
			output.append(f"Hidden: '{arc.hidden}'")
		return "\n".join(output)

	def arcTo(self, destination: str) -> Union[Arc, None]:
		"""
		Returns the first arc leading to a room.

		Args:
			destination: The ID of the destination room.

		Returns:
			The arc, or None if no arc leads to the destination.
		"""
		for arc in self.arcs:
			if arc.destination == destination:
				return arc
		return None

	def cardinalExits(self) -> list[str]:
		"""Returns the exit labels of the cardinal arcs, sorted."""
		return sorted(arc.exit for arc in self.arcs if arc.exit in CARDINAL_DIRECTIONS)

	def nonCardinalArcs(self) -> list[Arc]:
		"""Returns the portal arcs (those whose exit is not a cardinal direction), in declared order."""
		return [arc for arc in self.arcs if arc.exit not in CARDINAL_DIRECTIONS]

	def matchesExits(self, exits: Iterable[str]) -> bool:
		"""
		Determines if the cardinal exits of the room are exactly the observed exits.

		Args:
			exits: The observed exit labels, in any order.

		Returns:
			True if both sets of cardinal exits are equal, False otherwise.
		"""
		return self.cardinalExits() == sorted(exits)

	def hasMatchingDescription(self, description: str) -> bool:
		"""
		Determines if any stored description is a prefix of an observed description.

		Args:
			description: The observed description.

		Returns:
			True if a stored description matches, False otherwise.
		"""
		candidate: str = stripDescription(description)
		return any(candidate.startswith(desc) for desc in self.descriptions)

	def matches(self, name: str, description: str, exits: Sequence[str], ignoreTransfers: bool = False) -> bool:
		"""
		Determines if the room matches observed text.

		Args:
			name: The observed room name.
			description: The observed room description.
			exits: The observed exits. If empty, exits are not compared.
			ignoreTransfers: Never match a transfer room if True.

		Returns:
			True if the room matches, False otherwise.
		"""
		if ignoreTransfers and self.isTransfer:
			return False
		elif exits and not self.matchesExits(exits):
			return False
		return self.name == name and self.hasMatchingDescription(description)


class Zone(object):
	"""
	A map graph loaded from a single file.
	"""

	def __init__(self, id: str, name: str, file: str = "") -> None:
		self.id: str = id
		self.name: str = name
		self.file: str = file
		self.rooms: list[Room] = []
		self.labels: list[Label] = []
		self._roomIndex: dict[str, Room] = {}

	def __repr__(self) -> str:
		return f"Zone(id={self.id!r}, name={self.name!r}, file={self.file!r})"

	def __len__(self) -> int:
		return len(self.rooms)

	def __contains__(self, roomID: object) -> bool:
		return roomID in self._roomIndex

	def addRoom(self, room: Room) -> None:
		"""
		Appends a room to the zone.

		Args:
			room: The room to be added.
		"""
		self.rooms.append(room)
		self._roomIndex[room.id] = room

	def getRoom(self, roomID: Optional[str]) -> Union[Room, None]:
		"""
		Retrieves a room by ID.

		Args:
			roomID: The room ID. None and empty strings never match.

		Returns:
			The room, or None if not found.
		"""
		if not roomID:
			return None
		return self._roomIndex.get(roomID)

	def roomsWithNote(self, note: str) -> list[Room]:
		"""
		Finds rooms whose notes contain a segment starting with the given text.

		Notes are split on '|', and the comparison is case insensitive.

		Args:
			note: The text to search for.

		Returns:
			The matching rooms, in declared order.
		"""
		note = note.lower()
		return [
			room
			for room in self.rooms
			if room.notes and any(segment.startswith(note) for segment in room.notes.lower().split("|"))
		]

	def getMoves(self, roomIDs: Sequence[str]) -> list[str]:
		"""
		Converts a path of room IDs into movement commands.

		Args:
			roomIDs: The IDs of the rooms along the path, in order.

		Returns:
			The move of each arc along the path.

		Raises:
			PathReconstructionError: Two consecutive rooms are not linked.
		"""
		moves: list[str] = []
		for current, following in zip(roomIDs, roomIDs[1:]):
			room: Union[Room, None] = self.getRoom(current)
			arc: Union[Arc, None] = room.arcTo(following) if room is not None else None
			if arc is None:
				raise PathReconstructionError(f"No arc from room {current} to room {following} in zone {self.id}.")
			moves.append(arc.move)
		return moves

	def bounds(self) -> BOUNDS_TYPE:
		"""
		Calculates the extent of the zone.

		Returns:
			The minimum x, minimum y, maximum x, and maximum y of all room positions.
		"""
		if not self.rooms:
			return (0, 0, 0, 0)
		xs: list[int] = [room.position.x for room in self.rooms]
		ys: list[int] = [room.position.y for room in self.rooms]
		return (min(xs), min(ys), max(xs), max(ys))
