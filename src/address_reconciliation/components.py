from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from .normalize import ABBREVIATIONS, clean_token

E = TypeVar("E", bound="AddressComponent")


class AddressComponent(str, Enum):
    """Closed value domain for one structured address element."""

    @classmethod
    def parse(cls: Type[E], text: Optional[str]) -> Optional[E]:
        """Resolve ``text`` by value, member name or abbreviation.

        Blank cells, null markers and unrecognized text all resolve to ``None``.
        """
        token = clean_token(text)
        if token is None:
            return None
        for member in cls:
            if token == member.value.upper() or token == member.name:
                return member
        expanded = ABBREVIATIONS.get(cls.__name__, {}).get(token)
        if expanded is None:
            return None
        return cls(expanded)


class StreetNamePreDirectional(AddressComponent):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    NORTHEAST = "Northeast"
    NORTHWEST = "Northwest"
    SOUTHEAST = "Southeast"
    SOUTHWEST = "Southwest"


class StreetNamePostType(AddressComponent):
    ALLEY = "Alley"
    AVENUE = "Avenue"
    BEND = "Bend"
    BOULEVARD = "Boulevard"
    CIRCLE = "Circle"
    COURT = "Court"
    COVE = "Cove"
    CREEK = "Creek"
    CREST = "Crest"
    DRIVE = "Drive"
    EXPRESSWAY = "Expressway"
    FREEWAY = "Freeway"
    GLEN = "Glen"
    HEIGHTS = "Heights"
    HIGHWAY = "Highway"
    HILL = "Hill"
    HOLLOW = "Hollow"
    LANE = "Lane"
    LOOP = "Loop"
    MEADOW = "Meadow"
    PARKWAY = "Parkway"
    PLACE = "Place"
    POINT = "Point"
    RIDGE = "Ridge"
    ROAD = "Road"
    RUN = "Run"
    SQUARE = "Square"
    STREET = "Street"
    TERRACE = "Terrace"
    TRAIL = "Trail"
    VIEW = "View"
    WAY = "Way"


class SubaddressType(AddressComponent):
    APARTMENT = "Apartment"
    BUILDING = "Building"
    FLOOR = "Floor"
    LOT = "Lot"
    OFFICE = "Office"
    PENTHOUSE = "Penthouse"
    ROOM = "Room"
    SPACE = "Space"
    SUITE = "Suite"
    TRAILER = "Trailer"
    UNIT = "Unit"


class AddressStatus(AddressComponent):
    ACTIVE = "Active"
    PENDING = "Pending"
    RETIRED = "Retired"
    TEMPORARY = "Temporary"
    VIRTUAL = "Virtual"
    OTHER = "Other"
