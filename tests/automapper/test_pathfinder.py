# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from unittest import TestCase
from unittest.mock import patch

# Automapper Modules:
from automapper.pathfinder import Pathfinder, PathReconstructionError, SearchRecord
from automapper.roomdata.objects import Arc, Position, Room, Zone


def buildLinearZone() -> Zone:
	zone: Zone = Zone("1", "Linear")
	names: str = "ABCD"
	for index, name in enumerate(names):
		arcs: list[Arc] = []
		if index > 0:
			arcs.append(Arc("west", f"move_{name}{names[index - 1]}", names[index - 1]))
		if index < len(names) - 1:
			arcs.append(Arc("east", f"move_{name}{names[index + 1]}", names[index + 1]))
		zone.addRoom(Room(name, f"Room {name}", position=Position(index * 10, 0, 0), arcs=arcs))
	return zone


def buildDiamondZone() -> Zone:
	# Two routes from 1 to 4: through 2 costs 2, through 3 costs 6.
	zone: Zone = Zone("2", "Diamond")
	zone.addRoom(Room("1", "Start", arcs=[Arc("north", "to2", "2"), Arc("east", "to3", "3")]))
	zone.addRoom(Room("2", "Cheap", arcs=[Arc("east", "2to4", "4")]))
	zone.addRoom(Room("3", "Expensive", arcs=[Arc("north", "3to4", "4", moveCost=5)]))
	zone.addRoom(Room("4", "Target"))
	return zone


def buildPortalZone() -> Zone:
	# Rooms are drawn 20 units apart.
	# Five moves east reach the target, as do two moves through the portal.
	zone: Zone = Zone("3", "Portal")
	startArcs: list[Arc] = [Arc("east", "east", "2"), Arc("south", "south", "6")]
	zone.addRoom(Room("1", "Start", position=Position(0, 0, 0), arcs=startArcs))
	for roomID, nextID in zip("2345", "3457"):
		position: Position = Position((int(roomID) - 1) * 20, 0, 0)
		zone.addRoom(Room(roomID, "Road", position=position, arcs=[Arc("east", "east", nextID)]))
	zone.addRoom(Room("6", "Shrine", position=Position(0, 60, 0), arcs=[Arc("portal", "go portal", "7")]))
	zone.addRoom(Room("7", "Target", position=Position(100, 0, 0)))
	return zone


class TestSearchRecord(TestCase):
	def testF(self) -> None:
		record: SearchRecord = SearchRecord("1", None, g=3, h=4)
		self.assertEqual(record.f, 7)
		record.g = 10
		self.assertEqual(record.f, 14)
		self.assertIsNone(record.parent)


class TestPathfinder(TestCase):
	def setUp(self) -> None:
		logging.disable(logging.CRITICAL)
		self.pathfinder: Pathfinder = Pathfinder()
		self.zone: Zone = buildLinearZone()

	def tearDown(self) -> None:
		logging.disable(logging.NOTSET)

	def testLinear(self) -> None:
		self.assertEqual(self.pathfinder.findPath("A", "D", self.zone), ["move_AB", "move_BC", "move_CD"])
		self.assertEqual(self.pathfinder.findPath("D", "B", self.zone), ["move_DC", "move_CB"])
		self.assertEqual(self.pathfinder.findRoute("A", "D", self.zone), ["A", "B", "C", "D"])

	def testUnknownRooms(self) -> None:
		self.assertEqual(self.pathfinder.findPath("A", "missing", self.zone), [])
		self.assertEqual(self.pathfinder.findPath("missing", "A", self.zone), [])
		self.assertEqual(self.pathfinder.findPath("", "A", self.zone), [])

	def testStartIsTarget(self) -> None:
		self.assertEqual(self.pathfinder.findRoute("B", "B", self.zone), ["B"])
		self.assertEqual(self.pathfinder.findPath("B", "B", self.zone), [])

	def testDisconnected(self) -> None:
		self.zone.addRoom(Room("E", "Island", arcs=[Arc("west", "move_ED", "D")]))
		self.assertEqual(self.pathfinder.findPath("A", "E", self.zone), [])
		self.assertEqual(self.pathfinder.findPath("E", "A", self.zone), ["move_ED", "move_DC", "move_CB", "move_BA"])

	def testUnexploredArcsAreSkipped(self) -> None:
		zone: Zone = Zone("3", "Unexplored")
		zone.addRoom(
			Room("1", "Fork", arcs=[Arc("north", "north", ""), Arc("east", "east", "2"), Arc("up", "up", "9")])
		)
		zone.addRoom(Room("2", "End"))
		self.assertEqual(self.pathfinder.findPath("1", "2", zone), ["east"])
		self.assertEqual([arc.move for arc in zone.getRoom("1").filteredArcs], ["east", "up"])  # type: ignore[union-attr]

	def testLegacyRelaxation(self) -> None:
		# The open target is re-parented through the room expanded last, even though it costs more.
		self.assertEqual(Pathfinder().findPath("1", "4", buildDiamondZone()), ["to3", "3to4"])

	def testOptimalRelaxation(self) -> None:
		self.assertEqual(Pathfinder(optimal=True).findPath("1", "4", buildDiamondZone()), ["to2", "2to4"])

	def testOptimalIgnoresDrawnDistance(self) -> None:
		zone: Zone = buildPortalZone()
		self.assertEqual(Pathfinder(optimal=True).findPath("1", "7", zone), ["south", "go portal"])
		self.assertEqual(Pathfinder(optimal=True).findRoute("1", "7", zone), ["1", "6", "7"])
		# The default search follows the drawn distance toward the target.
		self.assertEqual(Pathfinder().findPath("1", "7", zone), ["east"] * 5)

	def testModesAgreeOnLinearZone(self) -> None:
		optimal: Pathfinder = Pathfinder(optimal=True)
		self.assertEqual(optimal.findPath("A", "D", self.zone), self.pathfinder.findPath("A", "D", self.zone))

	def testMoveCostSteersOptimalSearch(self) -> None:
		zone: Zone = buildDiamondZone()
		zone.getRoom("2").arcs[0].moveCost = 10  # type: ignore[union-attr]
		self.assertEqual(Pathfinder(optimal=True).findPath("1", "4", zone), ["to3", "3to4"])

	def testMaxIterations(self) -> None:
		pathfinder: Pathfinder = Pathfinder(maxIterations=2)
		self.assertEqual(pathfinder.findPath("A", "D", self.zone), [])
		self.assertEqual(pathfinder.findPath("A", "B", self.zone), ["move_AB"])

	def testReconstructionDefect(self) -> None:
		with patch.object(Pathfinder, "findRoute", return_value=["A", "D"]):
			with self.assertRaises(PathReconstructionError):
				self.pathfinder.findPath("A", "D", self.zone)
