"""Civic address reconciliation across GIS exports."""

from .address import (
    Address,
    AddressMatch,
    Addresses,
    ConversionError,
    Mismatch,
    MismatchKind,
    SupportsAddress,
    coincident,
)
from .components import AddressStatus, StreetNamePostType, StreetNamePreDirectional, SubaddressType
from .engine import AddressMatcher, EngineConfig, MatchRecord, MatchRecords, MatchStatus
from .sources import AddressSource, CityAddress, CountyAddress, SourceFormatError

__all__ = [
    "Address",
    "AddressMatch",
    "AddressMatcher",
    "AddressSource",
    "AddressStatus",
    "Addresses",
    "CityAddress",
    "ConversionError",
    "CountyAddress",
    "EngineConfig",
    "MatchRecord",
    "MatchRecords",
    "MatchStatus",
    "Mismatch",
    "MismatchKind",
    "SourceFormatError",
    "StreetNamePostType",
    "StreetNamePreDirectional",
    "SubaddressType",
    "SupportsAddress",
    "coincident",
]
