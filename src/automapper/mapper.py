# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional, Union

# Third-party Modules:
from rapidfuzz import fuzz

# Local Modules:
from . import cfg
from .pathfinder import Pathfinder
from .resolver import ResolvedRoom, RoomResolver
from .roomdata.loader import MapError
from .roomdata.objects import Room, Zone
from .utils import quoteCommands
from .zones import ZoneStore


OBSCURED_EXITS_TEXT: str = "obscured by a thick fog"
PATH_COMMAND: str = ".automapper"


logger: logging.Logger = logging.getLogger(__name__)


class Host(ABC):
	"""The application hosting the mapper, which owns the variables and the command line."""

	@abstractmethod
	def get(self, variable: str) -> str:
		"""Returns the value of a variable, or an empty string if it isn't set."""

	@abstractmethod
	def set(self, variable: str, value: str) -> None:
		"""Sets a variable."""

	@abstractmethod
	def send(self, text: str) -> None:
		"""Sends a command for the host to process."""


class AutoMapper(object):
	"""
	Keeps the host's location variables in step with the rooms the player walks through.
	"""

	def __init__(
		self,
		host: Host,
		store: Optional[ZoneStore] = None,
		pathfinder: Optional[Pathfinder] = None,
	) -> None:
		self.host: Host = host
		self.store: ZoneStore = store if store is not None else ZoneStore()
		self.resolver: RoomResolver = RoomResolver(self.store)
		self.pathfinder: Pathfinder = (
			pathfinder
			if pathfinder is not None
			else Pathfinder(
				optimal=bool(cfg.get("optimal_pathfinding")),
				maxIterations=int(cfg.get("max_search_iterations")),
			)
		)
		self.isObscured: bool = False

	@property
	def currentRoom(self) -> Union[Room, None]:
		"""The room in the host's roomid variable, looked up in the current zone."""
		zone: Union[Zone, None] = self.store.currentZone
		return zone.getRoom(self.host.get("roomid")) if zone is not None else None

	def reload(self, directory: Optional[str] = None) -> list[MapError]:
		"""
		Reloads all zones.

		Args:
			directory: The directory containing the zone files. Defaults to the configured maps directory.

		Returns:
			The errors encountered while loading.
		"""
		if directory is None:
			directory = str(cfg.get("maps_directory"))
		errors: list[MapError] = self.store.reload(directory, workers=int(cfg.get("load_workers")))
		for error in errors:
			logger.error(f"An error occurred loading map: {error}")
		zone: Union[Zone, None] = self.store.getZone(self.host.get("zoneid"))
		if zone is not None:
			self.store.currentZone = zone
		return errors

	def publish(self, resolved: ResolvedRoom) -> None:
		"""
		Sets the host's location variables from a resolved room.

		Args:
			resolved: The room and zone to publish.
		"""
		room: Room = resolved.room
		self.host.set("zoneid", resolved.zone.id)
		self.host.set("zonename", resolved.zone.name)
		self.host.set("roomid", room.id)
		self.host.set("roomname", room.name)
		self.host.set("roomnote", room.notes or "")
		self.host.set("roomcolor", room.color or "")
		self.host.set("roomportals", "|".join(arc.move for arc in room.nonCardinalArcs()))

	def onRoom(self, name: str, description: str, exits: Sequence[str] = ()) -> Union[ResolvedRoom, None]:
		"""
		Handles the player arriving in a room.

		Args:
			name: The room name sent by the game.
			description: The room description sent by the game.
			exits: The exits sent by the game.

		Returns:
			The resolved room, or None if no room matches. The host variables are left
			untouched when nothing matches.
		"""
		resolved: Union[ResolvedRoom, None] = self.resolver.resolve(
			name.strip(),
			description,
			exits,
			previousRoomID=self.host.get("roomid"),
		)
		if resolved is not None:
			self.publish(resolved)
		return resolved

	def resetLocation(self, name: str, description: str, exits: Sequence[str] = ()) -> Union[ResolvedRoom, None]:
		"""
		Finds the player's location without relying on the previous room.

		Args:
			name: The room name sent by the game.
			description: The room description sent by the game.
			exits: The exits sent by the game.

		Returns:
			The resolved room, or None if no room matches.
		"""
		resolved: Union[ResolvedRoom, None] = self.resolver.resolve(name.strip(), description, exits)
		if resolved is not None:
			self.publish(resolved)
		return resolved

	def variableChanged(self, variable: str, value: str) -> None:
		"""
		Reacts to a host variable being changed.

		Args:
			variable: The name of the variable.
			value: The new value.
		"""
		if variable == "roomexits":
			self.isObscured = bool(value) and OBSCURED_EXITS_TEXT in value
			self.host.set("roomobscured", "1" if self.isObscured else "0")
		elif variable == "zoneid":
			zone: Union[Zone, None] = self.store.currentZone
			if zone is None or zone.id != value:
				logger.info(f"Zone changed to {value}.")
				self.store.currentZone = self.store.getZone(value)

	def mappedExits(self) -> str:
		"""
		Describes the exits of the current room that the game doesn't list.

		Returns:
			The portal moves, and the cardinal exits when the game's exit list is obscured.
		"""
		room: Union[Room, None] = self.currentRoom
		if room is None:
			return ""
		output: list[str] = []
		if self.isObscured and room.cardinalExits():
			output.append(f"Mapped directions: {', '.join(room.cardinalExits())}")
		portals: list[str] = [arc.move for arc in room.nonCardinalArcs()]
		if portals:
			output.append(f"Mapped exits: {', '.join(portals)}")
		return "\n".join(output)

	def findDestination(self, text: str) -> Union[Room, None]:
		"""
		Finds a room in the current zone by note or by ID.

		When several rooms have a matching note, the last one wins.

		Args:
			text: A note prefix or a room ID.

		Returns:
			The room, or None if not found.
		"""
		zone: Union[Zone, None] = self.store.currentZone
		text = text.strip()
		if zone is None or not text:
			return None
		matches: list[Room] = zone.roomsWithNote(text)
		for match in matches:
			logger.info(f"[AutoMapper]: {match.id} {match.notes}")
		if matches:
			return matches[-1]
		room: Union[Room, None] = zone.getRoom(text)
		if room is None:
			notes: set[str] = {
				segment for other in zone.rooms if other.notes for segment in other.notes.split("|") if segment
			}
			similar: list[str] = sorted(notes, key=lambda note: fuzz.ratio(note.lower(), text.lower()), reverse=True)
			logger.info(f"Unknown destination. Did you mean {', '.join(similar[0:4])}?")
		return room

	def goto(self, destination: str) -> list[str]:
		"""
		Walks the player to a room in the current zone.

		Args:
			destination: A note prefix or a room ID.

		Returns:
			The movement commands sent to the host.
		"""
		zone: Union[Zone, None] = self.store.currentZone
		startID: str = self.host.get("roomid")
		if zone is None or not startID:
			logger.info("The mapper has no location. Please move to a mapped room then try again.")
			return []
		room: Union[Room, None] = self.findDestination(destination)
		if room is None:
			return []
		elif room.id == startID:
			logger.info("You are already there!")
			return []
		moves: list[str] = self.pathfinder.findPath(startID, room.id, zone)
		if not moves:
			logger.info("No routes found.")
			return []
		self.host.send(f"{PATH_COMMAND} {quoteCommands(moves)}")
		return moves
