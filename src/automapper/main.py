# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
import sys
from collections.abc import Callable, Sequence
from typing import Optional, Union

# Third-party Modules:
import orjson
from tap import Tap

# Local Modules:
from . import __version__, cfg
from .pathfinder import Pathfinder
from .resolver import ResolvedRoom, RoomResolver
from .roomdata.loader import MapError, loadAllZoneInfo
from .roomdata.objects import PathReconstructionError, Zone
from .utils import createSpeedWalk
from .zones import ZoneStore


logger: logging.Logger = logging.getLogger(__name__)


def catalog(args: ArgumentParser) -> int:
	infos: list[dict[str, str]] = []
	failures: int = 0
	for item in loadAllZoneInfo(args.maps):
		if isinstance(item, MapError):
			failures += 1
			print(f"Error: {item}", file=sys.stderr)
		else:
			infos.append(item._asdict())
	if args.json:
		sys.stdout.write(orjson.dumps(infos, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE).decode("utf-8"))
	else:
		for info in infos:
			print(f"{info['id']}, {info['name']}, {info['file']}")
	return 1 if failures else 0


def loadStore(directory: str) -> ZoneStore:
	store: ZoneStore = ZoneStore()
	for error in store.reload(directory, workers=int(cfg.get("load_workers"))):
		print(f"Error: {error}", file=sys.stderr)
	return store


def path(args: ArgumentParser) -> int:
	store: ZoneStore = loadStore(args.maps)
	zone: Union[Zone, None] = store.getZone(args.zone)
	if zone is None:
		print(f"No zone with ID {args.zone}.", file=sys.stderr)
		return 1
	pathfinder: Pathfinder = Pathfinder(
		optimal=args.optimal or bool(cfg.get("optimal_pathfinding")),
		maxIterations=int(cfg.get("max_search_iterations")),
	)
	try:
		moves: list[str] = pathfinder.findPath(args.start, args.target, zone)
	except PathReconstructionError:
		logger.exception("Invalid route.")
		return 2
	if not moves:
		print("No routes found.")
		return 1
	print(createSpeedWalk(moves) if args.speedwalk else "\n".join(moves))
	return 0


def locate(args: ArgumentParser) -> int:
	store: ZoneStore = loadStore(args.maps)
	store.currentZone = store.getZone(args.zone)
	resolved: Union[ResolvedRoom, None] = RoomResolver(store).resolve(args.room_name, args.room_description, args.exits)
	if resolved is None:
		print("No matching room.")
		return 1
	print(f"Zone: '{resolved.zone.id}' ({resolved.zone.name})")
	print(resolved.room.info)
	return 0


class CatalogArguments(Tap):
	"""List the zone files."""

	json: bool = False
	"""Output the zone catalog as JSON."""


class PathArguments(Tap):
	"""Find a route between two rooms."""

	zone: str
	"""The zone ID."""
	start: str
	"""The starting room ID."""
	target: str
	"""The target room ID."""
	optimal: bool = False
	"""Find the route with the lowest cost instead of using the default search."""
	speedwalk: bool = False
	"""Compress repeated moves."""

	def configure(self) -> None:
		self.add_argument("zone")
		self.add_argument("start")
		self.add_argument("target")


class LocateArguments(Tap):
	"""Find a room from its text."""

	room_name: str
	"""The room name."""
	room_description: str
	"""The room description."""
	exits: list[str] = []
	"""The visible exits."""
	zone: Optional[str] = None
	"""The zone ID to search first."""

	def configure(self) -> None:
		self.add_argument("room_name", metavar="name")
		self.add_argument("room_description", metavar="description")
		self.add_argument("exits", metavar="exit")
		self.add_argument("-z", "--zone", metavar="id")


class ArgumentParser(Tap):
	"""Locate rooms and find routes in zone maps."""

	maps: str = str(cfg.get("maps_directory"))
	"""The directory containing the zone files."""

	def configure(self) -> None:
		version: str = (
			f"%(prog)s v{__version__} "
			+ f"(Python {'.'.join(str(i) for i in sys.version_info[:3])} {sys.version_info.releaselevel})"
		)
		self.add_argument(
			"-v",
			"--version",
			help="Print the program version as well as the Python version.",
			action="version",
			version=version,
		)
		self.add_argument("-m", "--maps", metavar="directory")
		self.add_subparsers(dest="command", required=True, metavar="command")
		self.add_subparser("catalog", CatalogArguments)
		self.add_subparser("path", PathArguments)
		self.add_subparser("locate", LocateArguments)


def buildParser() -> ArgumentParser:
	return ArgumentParser(prog="automapper")


COMMANDS: dict[str, Callable[[ArgumentParser], int]] = {
	"catalog": catalog,
	"path": path,
	"locate": locate,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
	args: ArgumentParser = buildParser().parse_args(argv)
	return COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
