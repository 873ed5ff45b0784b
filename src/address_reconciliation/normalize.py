from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

US_STATE_NAMES: Dict[str, str] = {
    "ALABAMA": "AL",
    "ALASKA": "AK",
    "ARIZONA": "AZ",
    "ARKANSAS": "AR",
    "CALIFORNIA": "CA",
    "COLORADO": "CO",
    "CONNECTICUT": "CT",
    "DELAWARE": "DE",
    "FLORIDA": "FL",
    "GEORGIA": "GA",
    "HAWAII": "HI",
    "IDAHO": "ID",
    "ILLINOIS": "IL",
    "INDIANA": "IN",
    "IOWA": "IA",
    "KANSAS": "KS",
    "KENTUCKY": "KY",
    "LOUISIANA": "LA",
    "MAINE": "ME",
    "MARYLAND": "MD",
    "MASSACHUSETTS": "MA",
    "MICHIGAN": "MI",
    "MINNESOTA": "MN",
    "MISSISSIPPI": "MS",
    "MISSOURI": "MO",
    "MONTANA": "MT",
    "NEBRASKA": "NE",
    "NEVADA": "NV",
    "NEW HAMPSHIRE": "NH",
    "NEW JERSEY": "NJ",
    "NEW MEXICO": "NM",
    "NEW YORK": "NY",
    "NORTH CAROLINA": "NC",
    "NORTH DAKOTA": "ND",
    "OHIO": "OH",
    "OKLAHOMA": "OK",
    "OREGON": "OR",
    "PENNSYLVANIA": "PA",
    "RHODE ISLAND": "RI",
    "SOUTH CAROLINA": "SC",
    "SOUTH DAKOTA": "SD",
    "TENNESSEE": "TN",
    "TEXAS": "TX",
    "UTAH": "UT",
    "VERMONT": "VT",
    "VIRGINIA": "VA",
    "WASHINGTON": "WA",
    "WEST VIRGINIA": "WV",
    "WISCONSIN": "WI",
    "WYOMING": "WY",
    "DISTRICT OF COLUMBIA": "DC",
}

US_STATE_ABBREVIATIONS = set(US_STATE_NAMES.values())

# Values ArcGIS exports write into empty text fields.
NULL_MARKERS = {"", "<NULL>", "NULL", "NONE", "N/A"}

DIRECTIONAL_ABBREVIATIONS: Dict[str, str] = {
    "N": "North",
    "S": "South",
    "E": "East",
    "W": "West",
    "NE": "Northeast",
    "NW": "Northwest",
    "SE": "Southeast",
    "SW": "Southwest",
}

POST_TYPE_ABBREVIATIONS: Dict[str, str] = {
    "ALY": "Alley",
    "ALLY": "Alley",
    "AVE": "Avenue",
    "AV": "Avenue",
    "BND": "Bend",
    "BLVD": "Boulevard",
    "CIR": "Circle",
    "CT": "Court",
    "CV": "Cove",
    "CRK": "Creek",
    "CRST": "Crest",
    "DR": "Drive",
    "EXPY": "Expressway",
    "FWY": "Freeway",
    "GLN": "Glen",
    "HTS": "Heights",
    "HWY": "Highway",
    "HL": "Hill",
    "HOLW": "Hollow",
    "LN": "Lane",
    "LP": "Loop",
    "MDW": "Meadow",
    "PKWY": "Parkway",
    "PKY": "Parkway",
    "PL": "Place",
    "PT": "Point",
    "RD": "Road",
    "RDG": "Ridge",
    "RUN": "Run",
    "SQ": "Square",
    "ST": "Street",
    "TER": "Terrace",
    "TRL": "Trail",
    "VW": "View",
    "WY": "Way",
}

SUBADDRESS_TYPE_ABBREVIATIONS: Dict[str, str] = {
    "APT": "Apartment",
    "BLDG": "Building",
    "FL": "Floor",
    "FLR": "Floor",
    "LOT": "Lot",
    "OFC": "Office",
    "PH": "Penthouse",
    "RM": "Room",
    "SPC": "Space",
    "SP": "Space",
    "STE": "Suite",
    "TRLR": "Trailer",
    "UNIT": "Unit",
    "#": "Unit",
}

STATUS_ABBREVIATIONS: Dict[str, str] = {
    "CURRENT": "Active",
    "PROPOSED": "Pending",
    "TEMP": "Temporary",
    "INACTIVE": "Retired",
}

ABBREVIATIONS: Dict[str, Mapping[str, str]] = {
    "StreetNamePreDirectional": DIRECTIONAL_ABBREVIATIONS,
    "StreetNamePostType": POST_TYPE_ABBREVIATIONS,
    "SubaddressType": SUBADDRESS_TYPE_ABBREVIATIONS,
    "AddressStatus": STATUS_ABBREVIATIONS,
}

ZIP_CODE_PATTERN = re.compile(r"^(\d{5})(?:-?\d{4})?$")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Collapse whitespace and map blank or null-marker cells to ``None``."""
    if value is None:
        return None
    text = " ".join(str(value).split())
    if text.upper() in NULL_MARKERS:
        return None
    return text


def clean_token(value: Optional[str]) -> Optional[str]:
    text = clean_text(value)
    if text is None:
        return None
    return text.rstrip(".").upper()


def normalize_name(value: Optional[str]) -> Optional[str]:
    text = clean_text(value)
    if text is None:
        return None
    return text.upper()


def normalize_state(token: Optional[str]) -> Optional[str]:
    """Return the USPS code for a state, accepting codes or full names."""
    name = normalize_name(token)
    if name is None or name in US_STATE_ABBREVIATIONS:
        return name
    return US_STATE_NAMES.get(name, name)


def canonicalize_zip(value: Optional[str]) -> Optional[int]:
    text = clean_text(value)
    if text is None:
        return None
    match = ZIP_CODE_PATTERN.match(text)
    if match:
        return int(match.group(1))
    return None


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse integer cells, accepting the ``12.0`` form spreadsheet exports produce."""
    text = clean_text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def parse_floor(value: Optional[str], zero_is_none: bool = False) -> Optional[int]:
    floor = parse_int(value)
    if zero_is_none and floor == 0:
        return None
    return floor


def parse_float(value: Optional[str]) -> Optional[float]:
    text = clean_text(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None
