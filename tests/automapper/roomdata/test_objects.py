# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
from unittest import TestCase

# Automapper Modules:
from automapper.roomdata.objects import (
	CARDINAL_DIRECTIONS,
	Arc,
	PathReconstructionError,
	Position,
	Room,
	Zone,
)


class TestPosition(TestCase):
	def testDefaults(self) -> None:
		self.assertEqual(Position(), (0, 0, 0))

	def testDistanceTo(self) -> None:
		self.assertEqual(Position(0, 0, 0).distanceTo(Position(3, 4, 0)), 5)
		# Truncated, not rounded.
		self.assertEqual(Position(0, 0, 0).distanceTo(Position(2, 2, 0)), 2)
		# Z is ignored.
		self.assertEqual(Position(0, 0, 0).distanceTo(Position(0, 0, 100)), 0)


class TestArc(TestCase):
	def testHasDestination(self) -> None:
		self.assertTrue(Arc("north", "north", "2").hasDestination)
		self.assertFalse(Arc("north", "north", "").hasDestination)

	def testDestinationValue(self) -> None:
		self.assertEqual(Arc(destination="42").destinationValue, 42)
		self.assertEqual(Arc(destination="B").destinationValue, 0)
		self.assertEqual(Arc(destination="").destinationValue, 0)

	def testMoveCost(self) -> None:
		self.assertEqual(Arc().moveCost, 1)
		self.assertEqual(Arc(moveCost=5).moveCost, 5)


class TestRoom(TestCase):
	def setUp(self) -> None:
		self.room: Room = Room(
			"1",
			"[Town Green]",
			descriptions=["You see a fountain"],
			arcs=[
				Arc("north", "north", "2"),
				Arc("east", "east", "3"),
				Arc("go", "go gate", "10"),
				Arc("climb", "climb wall", ""),
			],
		)

	def tearDown(self) -> None:
		del self.room

	def testDescriptionMatching(self) -> None:
		self.assertTrue(self.room.hasMatchingDescription("You see a fountain, sparkling."))
		self.assertTrue(self.room.hasMatchingDescription('You see a "fountain"; sparkling.'))
		self.assertFalse(self.room.hasMatchingDescription("A lovely fountain you see"))
		self.assertFalse(self.room.hasMatchingDescription("You see a"))

	def testExitMatching(self) -> None:
		self.assertEqual(self.room.cardinalExits(), ["east", "north"])
		self.assertTrue(self.room.matchesExits(["north", "east"]))
		self.assertTrue(self.room.matchesExits(["east", "north"]))
		self.assertFalse(self.room.matchesExits(["north"]))
		self.assertFalse(self.room.matchesExits(["north", "east", "go"]))

	def testNonCardinalArcs(self) -> None:
		self.assertEqual([arc.move for arc in self.room.nonCardinalArcs()], ["go gate", "climb wall"])
		self.assertIn("out", CARDINAL_DIRECTIONS)
		self.assertNotIn("go", CARDINAL_DIRECTIONS)

	def testMatches(self) -> None:
		description: str = "You see a fountain, sparkling."
		self.assertTrue(self.room.matches("[Town Green]", description, ["east", "north"]))
		self.assertTrue(self.room.matches("[Town Green]", description, []))
		self.assertFalse(self.room.matches("[Town Green]", description, ["north"]))
		self.assertFalse(self.room.matches("[Town Square]", description, []))
		self.assertFalse(self.room.matches("[Town Green]", "Somewhere else.", []))

	def testTransfer(self) -> None:
		self.assertFalse(self.room.isTransfer)
		self.assertIsNone(self.room.transferFile)
		self.assertTrue(self.room.matches("[Town Green]", "You see a fountain", [], ignoreTransfers=True))
		self.room.notes = "Go through the door. map2.xml"
		self.assertTrue(self.room.isTransfer)
		self.assertEqual(self.room.transferFile, "map2.xml")
		self.assertFalse(self.room.matches("[Town Green]", "You see a fountain", [], ignoreTransfers=True))
		self.assertTrue(self.room.matches("[Town Green]", "You see a fountain", [], ignoreTransfers=False))
		self.room.notes = "Map7_NTR.xml|North Gate"
		self.assertEqual(self.room.transferFile, "Map7_NTR.xml")
		self.room.notes = "Go through the door. map2"
		self.assertFalse(self.room.isTransfer)
		self.assertIsNone(self.room.transferFile)

	def testFilteredArcs(self) -> None:
		self.assertEqual([arc.destination for arc in self.room.filteredArcs], ["2", "3", "10"])

	def testArcTo(self) -> None:
		self.assertEqual(self.room.arcTo("3").move, "east")  # type: ignore[union-attr]
		self.assertIsNone(self.room.arcTo("4"))

	def testInfo(self) -> None:
		info: str = self.room.info
		self.assertIn("ID: '1'", info)
		self.assertIn("Name: '[Town Green]'", info)
		self.assertIn("Move: 'go gate'", info)


class TestZone(TestCase):
	def setUp(self) -> None:
		self.zone: Zone = Zone("1", "The Crossing", "Map1_Crossing.xml")
		self.zone.addRoom(Room("1", "A", notes="Bank|Teller", position=Position(-5, 2, 0), arcs=[Arc("east", "east", "2")]))
		self.zone.addRoom(Room("2", "B", notes="bakery", position=Position(10, -3, 1), arcs=[Arc("west", "west", "1")]))
		self.zone.addRoom(Room("3", "C", notes="teller"))

	def tearDown(self) -> None:
		del self.zone

	def testAddRoom(self) -> None:
		room: Room = Room("4", "D")
		self.zone.addRoom(room)
		self.assertIs(self.zone.rooms[-1], room)
		self.assertIs(self.zone.getRoom("4"), room)
		self.assertIn("4", self.zone)
		self.assertEqual(len(self.zone), 4)

	def testGetRoom(self) -> None:
		self.assertEqual(self.zone.getRoom("2").name, "B")  # type: ignore[union-attr]
		self.assertIsNone(self.zone.getRoom(""))
		self.assertIsNone(self.zone.getRoom(None))
		self.assertIsNone(self.zone.getRoom("missing"))

	def testRoomsWithNote(self) -> None:
		self.assertEqual([room.id for room in self.zone.roomsWithNote("ba")], ["1", "2"])
		self.assertEqual([room.id for room in self.zone.roomsWithNote("TELL")], ["1", "3"])
		self.assertEqual(self.zone.roomsWithNote("junk"), [])

	def testGetMoves(self) -> None:
		self.assertEqual(self.zone.getMoves(["1", "2", "1"]), ["east", "west"])
		self.assertEqual(self.zone.getMoves(["1"]), [])
		self.assertEqual(self.zone.getMoves([]), [])
		with self.assertRaises(PathReconstructionError):
			self.zone.getMoves(["1", "3"])
		with self.assertRaises(PathReconstructionError):
			self.zone.getMoves(["missing", "1"])

	def testBounds(self) -> None:
		self.assertEqual(self.zone.bounds(), (-5, -3, 10, 2))
		self.assertEqual(Zone("2", "Empty").bounds(), (0, 0, 0, 0))
