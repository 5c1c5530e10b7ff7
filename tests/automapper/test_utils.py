# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import os.path
from unittest import TestCase
from unittest.mock import Mock, patch

# Automapper Modules:
from automapper import utils


class TestUtils(TestCase):
	def test_getDataPath(self) -> None:
		subdirectory: tuple[str, ...] = ("level1", "level2")
		output: str = os.path.join(
			os.path.dirname(utils.__file__), os.path.pardir, os.path.pardir, utils.DATA_DIRECTORY, *subdirectory
		)
		with patch.dict(utils.os.environ, clear=True):
			self.assertEqual(utils.getDataPath(*subdirectory), os.path.realpath(output))
		with patch.dict(utils.os.environ, {utils.DATA_DIRECTORY_ENVIRONMENT_VARIABLE: os.path.realpath("elsewhere")}):
			self.assertEqual(utils.getDataPath("maps"), os.path.realpath(os.path.join("elsewhere", "maps")))

	@patch("automapper.utils.is_frozen", return_value=True)
	def test_getDataPathWhenFrozen(self, mockIsFrozen: Mock) -> None:
		output: str = os.path.join(os.path.dirname(utils.__file__), utils.DATA_DIRECTORY, "maps")
		with patch.dict(utils.os.environ, clear=True):
			self.assertEqual(utils.getDataPath("maps"), os.path.realpath(output))
		mockIsFrozen.assert_called_once_with()

	def test_stripDescription(self) -> None:
		self.assertEqual(utils.stripDescription('A "quoted"; text;'), "A quoted text")
		self.assertEqual(utils.stripDescription("Nothing to strip."), "Nothing to strip.")

	def test_quoteCommands(self) -> None:
		self.assertEqual(utils.quoteCommands(["north", "go gate", "up"]), 'north "go gate" up')
		self.assertEqual(utils.quoteCommands([]), "")

	def test_createSpeedWalk(self) -> None:
		self.assertEqual(utils.createSpeedWalk(["north", "north", "east", "north"]), "2north, east, north")
		self.assertEqual(utils.createSpeedWalk(["go gate"]), "go gate")
		self.assertEqual(utils.createSpeedWalk([]), "")
