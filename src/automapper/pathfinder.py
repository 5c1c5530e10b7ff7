# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import heapq
import logging
from timeit import default_timer as defaultTimer
from typing import Optional, Union

# Local Modules:
from .roomdata.objects import PathReconstructionError, Room, Zone


DEFAULT_MAX_ITERATIONS: int = 100000


logger: logging.Logger = logging.getLogger(__name__)


__all__: list[str] = [
	"DEFAULT_MAX_ITERATIONS",
	"PathReconstructionError",
	"Pathfinder",
	"SearchRecord",
]


class SearchRecord(object):
	"""
	The search state of a room.

	Records live in a list owned by a single search. The parent is the index of
	another record in that list, or None for the start room.
	"""

	__slots__ = ("roomID", "parent", "g", "h")

	def __init__(self, roomID: str, parent: Optional[int] = None, g: int = 0, h: int = 0) -> None:
		self.roomID: str = roomID
		self.parent: Optional[int] = parent
		self.g: int = g
		self.h: int = h

	def __repr__(self) -> str:
		return f"SearchRecord(roomID={self.roomID!r}, parent={self.parent}, g={self.g}, h={self.h}, f={self.f})"

	@property
	def f(self) -> int:
		return self.g + self.h


def _roomOrder(roomID: str) -> tuple[int, str]:
	return (int(roomID) if roomID.isdecimal() else 0, roomID)


class Pathfinder(object):
	"""
	Finds routes between rooms of a zone.

	By default the search keeps the behaviour existing curated routes were built with:
	an open room's parent and cost are overwritten by every later expansion that reaches it,
	and the heuristic is measured from the room being expanded to the target.
	With optimal set, the search is ordered by route cost alone and a room is only re-parented
	through a cheaper route. Map positions are drawn coordinates rather than move costs, so no
	distance heuristic is applied, and the returned route has the lowest total move cost.
	"""

	def __init__(self, optimal: bool = False, maxIterations: int = DEFAULT_MAX_ITERATIONS) -> None:
		self.optimal: bool = optimal
		self.maxIterations: int = maxIterations

	def findRoute(self, startID: str, targetID: str, zone: Zone) -> list[str]:
		"""
		Finds the rooms along a route.

		Args:
			startID: The ID of the starting room.
			targetID: The ID of the target room.
			zone: The zone containing both rooms.

		Returns:
			The room IDs from start to target inclusive, or an empty list if there is no route.
		"""
		start: Union[Room, None] = zone.getRoom(startID)
		target: Union[Room, None] = zone.getRoom(targetID)
		if start is None or target is None:
			logger.debug(f"Unknown start ({startID}) or target ({targetID}) in zone {zone.id}.")
			return []
		startTime: float = defaultTimer()
		records: list[SearchRecord] = [SearchRecord(start.id)]
		# Room ID to record index, for open rooms only.
		opened: dict[str, int] = {start.id: 0}
		heap: list[tuple[int, tuple[int, str], int]] = [(0, _roomOrder(start.id), 0)]
		closed: set[str] = set()
		found: Union[int, None] = None
		iterations: int = 0
		while heap:
			f, _, index = heapq.heappop(heap)
			current: SearchRecord = records[index]
			if current.roomID in closed or f != current.f:
				# Superseded by a later relaxation of the same room.
				continue
			iterations += 1
			if iterations > self.maxIterations:
				logger.warning(f"Gave up searching for a route after {self.maxIterations} iterations.")
				return []
			logger.debug(f"Checking {current!r}.")
			del opened[current.roomID]
			closed.add(current.roomID)
			if current.roomID == target.id:
				found = index
				break
			room: Room = zone.getRoom(current.roomID)  # type: ignore[assignment]
			h: int = 0 if self.optimal else room.position.distanceTo(target.position)
			for arc in room.filteredArcs:
				neighbor: Union[Room, None] = zone.getRoom(arc.destination)
				if neighbor is None or neighbor.id in closed:
					continue
				g: int = current.g + arc.moveCost
				if neighbor.id in opened:
					record: SearchRecord = records[opened[neighbor.id]]
					if self.optimal and g >= record.g:
						continue
					record.parent = index
					record.g = g
					heapq.heappush(heap, (record.f, _roomOrder(neighbor.id), opened[neighbor.id]))
				else:
					records.append(SearchRecord(neighbor.id, index, g, h))
					opened[neighbor.id] = len(records) - 1
					heapq.heappush(heap, (records[-1].f, _roomOrder(neighbor.id), len(records) - 1))
		elapsedTime: float = defaultTimer() - startTime
		logger.debug(f"Checked {iterations} rooms in {elapsedTime:.4f} seconds.")
		if found is None:
			logger.debug(f"No route from {start.id} to {target.id} in zone {zone.id}.")
			return []
		route: list[str] = []
		step: Union[int, None] = found
		while step is not None:
			route.append(records[step].roomID)
			step = records[step].parent
		route.reverse()
		return route

	def findPath(self, startID: str, targetID: str, zone: Zone) -> list[str]:
		"""
		Finds the movement commands along a route.

		Args:
			startID: The ID of the starting room.
			targetID: The ID of the target room.
			zone: The zone containing both rooms.

		Returns:
			The move of each arc along the route, or an empty list if there is no route
			or the start is the target.

		Raises:
			PathReconstructionError: The route contains two consecutive rooms without an arc between them.
		"""
		return zone.getMoves(self.findRoute(startID, targetID, zone))
