# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from typing import TYPE_CHECKING, Union

# Third-party Modules:
from knickknacks.typedef import ReMatchType, RePatternType, TypeAlias


if TYPE_CHECKING:  # pragma: no cover
	# Prevent cyclic import.
	from .roomdata.loader import MapError, ZoneInfo


COORDINATES_TYPE: TypeAlias = tuple[int, int, int]
BOUNDS_TYPE: TypeAlias = tuple[int, int, int, int]
REGEX_MATCH: TypeAlias = ReMatchType
REGEX_PATTERN: TypeAlias = RePatternType
ZONE_INFO_RESULT_TYPE: TypeAlias = "Union[ZoneInfo, MapError]"


__all__: list[str] = [
	"BOUNDS_TYPE",
	"COORDINATES_TYPE",
	"REGEX_MATCH",
	"REGEX_PATTERN",
	"ZONE_INFO_RESULT_TYPE",
	"TypeAlias",
]
