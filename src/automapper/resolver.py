# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from collections.abc import Sequence
from typing import NamedTuple, Optional, Union

# Local Modules:
from .roomdata.objects import Room, Zone
from .zones import ZoneStore


logger: logging.Logger = logging.getLogger(__name__)


class ResolvedRoom(NamedTuple):
	"""A room matched from observed text, and the zone it was found in."""

	room: Room
	zone: Zone


def findRoom(
	zone: Zone,
	name: str,
	description: str,
	exits: Sequence[str] = (),
	ignoreTransfers: bool = False,
) -> Union[Room, None]:
	"""
	Scans a zone for the first room matching observed text.

	Args:
		zone: The zone to be searched.
		name: The observed room name.
		description: The observed room description.
		exits: The observed exits. If empty, exits are not compared.
		ignoreTransfers: Skip transfer rooms if True.

	Returns:
		The first matching room in declared order, or None.
	"""
	for room in zone.rooms:
		if room.matches(name, description, exits, ignoreTransfers):
			return room
	return None


def findNeighbor(
	zone: Zone,
	previousRoomID: Optional[str],
	name: str,
	description: str,
	exits: Sequence[str] = (),
) -> Union[Room, None]:
	"""
	Finds a room matching observed text among the destinations of the previous room's arcs.

	Args:
		zone: The zone containing the previous room.
		previousRoomID: The ID of the room the player was last known to be in.
		name: The observed room name.
		description: The observed room description.
		exits: The observed exits. If empty, exits are not compared.

	Returns:
		The destination of the first arc, in declared order, that leads to a matching room, or None.
	"""
	previousRoom: Union[Room, None] = zone.getRoom(previousRoomID)
	if previousRoom is None:
		return None
	for arc in previousRoom.arcs:
		neighbor: Union[Room, None] = zone.getRoom(arc.destination)
		if neighbor is not None and neighbor.matches(name, description, exits):
			return neighbor
	return None


class RoomResolver(object):
	"""
	Determines which room the player is in from the text the game sends.
	"""

	def __init__(self, store: ZoneStore) -> None:
		self.store: ZoneStore = store

	def resolve(
		self,
		name: str,
		description: str,
		exits: Sequence[str] = (),
		previousRoomID: Optional[str] = None,
		zone: Optional[Zone] = None,
	) -> Union[ResolvedRoom, None]:
		"""
		Resolves observed text to a room.

		The neighbors of the previous room are tried first, then the rest of the zone,
		then every other zone in the store. If the matched room leads to another zone,
		the search is repeated in that zone. The store's current zone is updated to
		the zone of the result.

		Args:
			name: The observed room name.
			description: The observed room description.
			exits: The observed exits. If empty, exits are not compared.
			previousRoomID: The ID of the room the player was last known to be in.
			zone: The zone to search first. Defaults to the store's current zone.

		Returns:
			The matched room and its zone, or None if no zone contains a match.
		"""
		if zone is None:
			zone = self.store.currentZone
		result: Union[ResolvedRoom, None] = None
		room: Union[Room, None]
		if zone is not None:
			room = findNeighbor(zone, previousRoomID, name, description, exits)
			if room is None:
				room = findRoom(zone, name, description, exits, ignoreTransfers=True)
			if room is not None:
				result = ResolvedRoom(room, zone)
		if result is None:
			for otherZone in self.store:
				if otherZone is zone:
					continue
				room = findRoom(otherZone, name, description, exits, ignoreTransfers=True)
				if room is not None:
					logger.debug(f"Found room {room.id} in zone {otherZone.id} - {otherZone.name}.")
					result = ResolvedRoom(room, otherZone)
					break
		if result is None:
			logger.debug(f"No room matches {name!r}.")
			return None
		result = self.transfer(result, name, description)
		self.store.currentZone = result.zone
		return result

	def transfer(self, resolved: ResolvedRoom, name: str, description: str) -> ResolvedRoom:
		"""
		Follows a transfer room into the zone it references.

		Args:
			resolved: The room matched so far.
			name: The observed room name.
			description: The observed room description.

		Returns:
			The matching room in the referenced zone if there is one, otherwise the original result.
		"""
		fileName: Union[str, None] = resolved.room.transferFile
		if fileName is None:
			return resolved
		targetZone: Union[Zone, None] = self.store.getZoneForFile(fileName)
		if targetZone is None:
			logger.debug(f"Room {resolved.room.id} references unknown zone file '{fileName}'.")
			return resolved
		room: Union[Room, None] = findRoom(targetZone, name, description)
		if room is None:
			return resolved
		logger.debug(f"Transferred from zone {resolved.zone.id} to room {room.id} in zone {targetZone.id}.")
		return ResolvedRoom(room, targetZone)
