from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .address import Address, ConversionError
from .components import (
    AddressStatus,
    StreetNamePostType,
    StreetNamePreDirectional,
    SubaddressType,
)
from .normalize import (
    canonicalize_zip,
    clean_text,
    normalize_name,
    normalize_state,
    parse_float,
    parse_floor,
    parse_int,
)


class SourceFormatError(ValueError):
    """A source row cannot be read at all (missing column or malformed value)."""

    def __init__(self, message: str, row_number: Optional[int] = None) -> None:
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)
        self.row_number = row_number


def _required_int(row: Mapping[str, str], column: str) -> int:
    value = parse_int(row.get(column))
    if value is None:
        raise SourceFormatError(f"{column} is not an integer: {row.get(column)!r}")
    return value


def _optional_zip(row: Mapping[str, str], column: str) -> Optional[int]:
    if clean_text(row.get(column)) is None:
        return None
    value = canonicalize_zip(row.get(column))
    if value is None:
        raise SourceFormatError(f"{column} is not a postal code: {row.get(column)!r}")
    return value


class AddressSource(ABC):
    """A source-specific record that can be converted to a canonical address."""

    object_id: int
    columns: Tuple[str, ...] = ()

    @classmethod
    @abstractmethod
    def from_row(cls, row: Mapping[str, str]) -> "AddressSource":
        raise NotImplementedError

    @abstractmethod
    def to_address(self) -> Address:
        """Return the canonical address or raise :class:`ConversionError`."""
        raise NotImplementedError


MANDATORY_FIELDS: Dict[str, str] = {
    "street_name": "street name",
    "street_name_post_type": "street name post type",
    "zip_code": "postal code",
    "postal_community": "postal community",
    "state_name": "state name",
    "status": "address status",
}


def _mandatory(record: AddressSource, field_name: str) -> Any:
    value = getattr(record, field_name)
    if value is None:
        raise ConversionError(f"record {record.object_id} has no {MANDATORY_FIELDS[field_name]}")
    return value


@dataclass(frozen=True)
class CityAddress(AddressSource):
    """Row of a municipal GIS address point export."""

    object_id: int
    address_number: int
    address_number_suffix: Optional[str]
    street_name_pre_directional: Optional[StreetNamePreDirectional]
    street_name: Optional[str]
    street_name_post_type: Optional[StreetNamePostType]
    subaddress_type: Optional[SubaddressType]
    subaddress_identifier: Optional[str]
    floor: Optional[int]
    building: Optional[str]
    zip_code: Optional[int]
    status: Optional[AddressStatus]
    postal_community: Optional[str]
    state_name: Optional[str]
    notes: Optional[str] = None
    global_id: Optional[str] = None
    last_edited_user: Optional[str] = None
    last_edited_date: Optional[str] = None

    columns = (
        "OID_",
        "Add_Number",
        "AddNum_Suf",
        "St_PreDir",
        "St_Name",
        "St_PosTyp",
        "SubaddressType",
        "SubaddressIdentifier",
        "Floor",
        "Building",
        "Post_Code",
        "STATUS",
        "Post_Comm",
        "StateName",
    )

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "CityAddress":
        return cls(
            object_id=_required_int(row, "OID_"),
            address_number=_required_int(row, "Add_Number"),
            address_number_suffix=clean_text(row.get("AddNum_Suf")),
            street_name_pre_directional=StreetNamePreDirectional.parse(row.get("St_PreDir")),
            street_name=normalize_name(row.get("St_Name")),
            street_name_post_type=StreetNamePostType.parse(row.get("St_PosTyp")),
            subaddress_type=SubaddressType.parse(row.get("SubaddressType")),
            subaddress_identifier=clean_text(row.get("SubaddressIdentifier")),
            floor=parse_floor(row.get("Floor")),
            building=clean_text(row.get("Building")),
            zip_code=_optional_zip(row, "Post_Code"),
            status=AddressStatus.parse(row.get("STATUS")),
            postal_community=normalize_name(row.get("Post_Comm")),
            state_name=normalize_state(row.get("StateName")),
            notes=clean_text(row.get("NOTES")),
            global_id=clean_text(row.get("GlobalID")),
            last_edited_user=clean_text(row.get("last_edited_user")),
            last_edited_date=clean_text(row.get("last_edited_date")),
        )

    def to_address(self) -> Address:
        return Address(
            address_number=self.address_number,
            address_number_suffix=self.address_number_suffix,
            street_name_pre_directional=self.street_name_pre_directional,
            street_name=_mandatory(self, "street_name"),
            street_name_post_type=_mandatory(self, "street_name_post_type"),
            subaddress_type=self.subaddress_type,
            subaddress_identifier=self.subaddress_identifier,
            floor=self.floor,
            building=self.building,
            zip_code=_mandatory(self, "zip_code"),
            postal_community=_mandatory(self, "postal_community"),
            state_name=_mandatory(self, "state_name"),
            status=_mandatory(self, "status"),
            object_id=self.object_id,
        )


@dataclass(frozen=True)
class CountyAddress(AddressSource):
    """Row of a county GIS export, which uses abbreviated component values."""

    object_id: int
    taxlot: Optional[str]
    address_number: int
    address_number_suffix: Optional[str]
    street_name_pre_directional: Optional[StreetNamePreDirectional]
    street_name: Optional[str]
    street_name_post_type: Optional[StreetNamePostType]
    subaddress_type: Optional[SubaddressType]
    subaddress_identifier: Optional[str]
    floor: Optional[int]
    complete_street_address: Optional[str]
    postal_community: Optional[str]
    zip_code: Optional[int]
    state_name: Optional[str]
    status: Optional[AddressStatus]
    point_x: Optional[float] = None
    point_y: Optional[float] = None

    columns = (
        "OID_",
        "stnum",
        "stnumsuf",
        "predir",
        "name",
        "type",
        "unit_type",
        "unit",
        "floor",
        "postcomm",
        "zip",
        "state",
        "status",
    )

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "CountyAddress":
        return cls(
            object_id=_required_int(row, "OID_"),
            taxlot=clean_text(row.get("taxlot")),
            address_number=_required_int(row, "stnum"),
            address_number_suffix=clean_text(row.get("stnumsuf")),
            street_name_pre_directional=StreetNamePreDirectional.parse(row.get("predir")),
            street_name=normalize_name(row.get("name")),
            street_name_post_type=StreetNamePostType.parse(row.get("type")),
            subaddress_type=SubaddressType.parse(row.get("unit_type")),
            subaddress_identifier=clean_text(row.get("unit")),
            floor=parse_floor(row.get("floor"), zero_is_none=True),
            complete_street_address=clean_text(row.get("address")),
            postal_community=normalize_name(row.get("postcomm")),
            zip_code=_optional_zip(row, "zip"),
            state_name=normalize_state(row.get("state")),
            status=AddressStatus.parse(row.get("status")),
            point_x=parse_float(row.get("point_x")),
            point_y=parse_float(row.get("point_y")),
        )

    def to_address(self) -> Address:
        return Address(
            address_number=self.address_number,
            address_number_suffix=self.address_number_suffix,
            street_name_pre_directional=self.street_name_pre_directional,
            street_name=_mandatory(self, "street_name"),
            street_name_post_type=_mandatory(self, "street_name_post_type"),
            subaddress_type=self.subaddress_type,
            subaddress_identifier=self.subaddress_identifier,
            floor=self.floor,
            building=None,
            zip_code=_mandatory(self, "zip_code"),
            postal_community=_mandatory(self, "postal_community"),
            state_name=_mandatory(self, "state_name"),
            status=_mandatory(self, "status"),
            object_id=self.object_id,
        )


SOURCE_TYPES: Dict[str, Type[AddressSource]] = {
    "city": CityAddress,
    "county": CountyAddress,
}
