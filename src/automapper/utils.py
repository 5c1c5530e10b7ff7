# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
import os
import os.path
from collections.abc import Iterable

# Third-party Modules:
from knickknacks.platforms import get_directory_path, is_frozen


DATA_DIRECTORY: str = "automapper_data"
DATA_DIRECTORY_ENVIRONMENT_VARIABLE: str = "AUTOMAPPER_DATA"
DESCRIPTION_STRIP_TABLE: dict[int, None] = str.maketrans("", "", "\";")


def getDataPath(*args: str) -> str:
	"""
	Retrieves the path of the data directory.

	The AUTOMAPPER_DATA environment variable takes precedence over the default location.
	A frozen program keeps its data beside the executable, otherwise beside the source tree.

	Args:
		*args: Positional arguments to be passed to os.join after the data path.

	Returns:
		The path.
	"""
	path: str = os.environ.get(DATA_DIRECTORY_ENVIRONMENT_VARIABLE, "")
	if not path:
		if is_frozen():
			path = get_directory_path(os.path.curdir, DATA_DIRECTORY)
		else:
			path = get_directory_path(os.path.pardir, os.path.pardir, DATA_DIRECTORY)
	return os.path.realpath(os.path.join(path, *args))


def stripDescription(text: str) -> str:
	"""
	Removes the characters which are never stored in room descriptions.

	Args:
		text: The text to be stripped.

	Returns:
		The text without double quotes or semicolons.
	"""
	return text.translate(DESCRIPTION_STRIP_TABLE)


def quoteCommands(commands: Iterable[str]) -> str:
	"""
	Joins movement commands into a single argument string.

	Commands containing spaces are wrapped in double quotes so they survive being split again.

	Args:
		commands: The movement commands.

	Returns:
		The joined commands.
	"""
	return " ".join(f'"{command}"' if " " in command else command for command in commands)


def createSpeedWalk(commands: Iterable[str]) -> str:
	"""
	Compresses consecutive duplicate commands into a speedwalk string.

	Args:
		commands: The movement commands.

	Returns:
		The commands separated by commas, with runs of the same command prefixed by a count.
	"""
	result: list[str] = []
	previous: str = ""
	count: int = 0
	for command in commands:
		if command == previous:
			count += 1
			continue
		if previous:
			result.append(f"{count}{previous}" if count > 1 else previous)
		previous = command
		count = 1
	if previous:
		result.append(f"{count}{previous}" if count > 1 else previous)
	return ", ".join(result)
