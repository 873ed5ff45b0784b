from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Optional, Protocol, Tuple

from .components import (
    AddressStatus,
    StreetNamePostType,
    StreetNamePreDirectional,
    SubaddressType,
)

logger = logging.getLogger(__name__)


class ConversionError(ValueError):
    """A source record lacks a field the canonical address requires."""


IdentityKey = Tuple[
    int,
    Optional[str],
    Optional[StreetNamePreDirectional],
    str,
    StreetNamePostType,
    Optional[str],
    int,
    str,
    str,
]


def _describe(value: object) -> str:
    if value is None:
        return "None"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class MismatchKind(Enum):
    SUBADDRESS_TYPE = "subaddress_type"
    FLOOR = "floor"
    BUILDING = "building"
    STATUS = "status"


@dataclass(frozen=True)
class Mismatch:
    """Disagreement on one secondary field between two coincident addresses."""

    kind: MismatchKind
    message: str

    @classmethod
    def between(cls, kind: MismatchKind, left: object, right: object) -> "Mismatch":
        return cls(kind=kind, message=f"{_describe(left)} not equal to {_describe(right)}")

    @classmethod
    def subaddress_type(
        cls, left: Optional[SubaddressType], right: Optional[SubaddressType]
    ) -> "Mismatch":
        return cls.between(MismatchKind.SUBADDRESS_TYPE, left, right)

    @classmethod
    def floor(cls, left: Optional[int], right: Optional[int]) -> "Mismatch":
        return cls.between(MismatchKind.FLOOR, left, right)

    @classmethod
    def building(cls, left: Optional[str], right: Optional[str]) -> "Mismatch":
        return cls.between(MismatchKind.BUILDING, left, right)

    @classmethod
    def status(cls, left: AddressStatus, right: AddressStatus) -> "Mismatch":
        return cls.between(MismatchKind.STATUS, left, right)


class AddressMatch(NamedTuple):
    """Outcome of a pairwise comparison; unpacks as ``(coincident, mismatches)``."""

    coincident: bool
    mismatches: Tuple[Mismatch, ...] = ()


@dataclass(frozen=True)
class Address:
    """Canonical, source-agnostic address used for every comparison.

    The nine identity fields decide whether two records describe the same
    physical unit. ``subaddress_type``, ``floor``, ``building`` and ``status``
    are secondary: they are only compared once identity agrees. ``object_id``
    never takes part in equality checks.
    """

    address_number: int
    street_name: str
    street_name_post_type: StreetNamePostType
    zip_code: int
    postal_community: str
    state_name: str
    status: AddressStatus
    object_id: int
    address_number_suffix: Optional[str] = None
    street_name_pre_directional: Optional[StreetNamePreDirectional] = None
    subaddress_type: Optional[SubaddressType] = None
    subaddress_identifier: Optional[str] = None
    floor: Optional[int] = None
    building: Optional[str] = None

    def to_address(self) -> "Address":
        return self

    def identity_key(self) -> IdentityKey:
        return (
            self.address_number,
            self.address_number_suffix,
            self.street_name_pre_directional,
            self.street_name,
            self.street_name_post_type,
            self.subaddress_identifier,
            self.zip_code,
            self.postal_community,
            self.state_name,
        )

    def coincident(self, other: "Address") -> AddressMatch:
        if self.identity_key() != other.identity_key():
            return AddressMatch(False)

        mismatches: List[Mismatch] = []
        if self.subaddress_type != other.subaddress_type:
            mismatches.append(Mismatch.subaddress_type(self.subaddress_type, other.subaddress_type))
        if self.floor != other.floor:
            mismatches.append(Mismatch.floor(self.floor, other.floor))
        if self.building != other.building:
            mismatches.append(Mismatch.building(self.building, other.building))
        if self.status != other.status:
            mismatches.append(Mismatch.status(self.status, other.status))
        return AddressMatch(True, tuple(mismatches))

    def complete_street_name(self) -> str:
        parts = [self.street_name, self.street_name_post_type.value]
        if self.street_name_pre_directional is not None:
            parts.insert(0, self.street_name_pre_directional.value)
        return " ".join(parts)

    def label(self) -> str:
        """Human-readable reconstruction of the address for reports."""
        number = str(self.address_number)
        if self.address_number_suffix is not None:
            number = f"{number} {self.address_number_suffix}"

        subaddress: Optional[str] = None
        if self.subaddress_identifier is not None:
            if self.subaddress_type is not None:
                subaddress = f"{self.subaddress_type.value} {self.subaddress_identifier}"
            else:
                subaddress = f"#{self.subaddress_identifier}"
        elif self.subaddress_type is not None:
            subaddress = self.subaddress_type.value

        if subaddress is None:
            return f"{number} {self.complete_street_name()}"
        return f"{number} {self.complete_street_name()} {subaddress}"


class SupportsAddress(Protocol):
    """Anything with an object id that converts, fallibly, to an :class:`Address`."""

    object_id: int

    def to_address(self) -> Address:
        ...


def coincident(left: Address, right: Address) -> AddressMatch:
    return left.coincident(right)


class Addresses:
    """Ordered collection of canonical addresses from one dataset."""

    def __init__(self, records: Iterable[Address] = ()) -> None:
        self._records: Tuple[Address, ...] = tuple(records)

    @classmethod
    def convert(cls, sources: Iterable[SupportsAddress]) -> "Addresses":
        """Convert source records, dropping those missing a mandatory field."""
        converted: List[Address] = []
        dropped = 0
        for source in sources:
            try:
                converted.append(source.to_address())
            except ConversionError as exc:
                dropped += 1
                logger.debug("Dropping record %s: %s", source.object_id, exc)
        if dropped:
            logger.info("%d records could not be converted and were dropped.", dropped)
        return cls(converted)

    def __iter__(self) -> Iterator[Address]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> Address:
        return self._records[index]

    @property
    def records(self) -> Tuple[Address, ...]:
        return self._records

    def filter(self, name: str) -> "Addresses":
        """Select addresses by a named predicate: ``duplicate`` or ``active``."""
        key = name.strip().lower()
        if key == "duplicate":
            counts = Counter(address.identity_key() for address in self._records)
            return Addresses(a for a in self._records if counts[a.identity_key()] > 1)
        if key == "active":
            return Addresses(a for a in self._records if a.status is AddressStatus.ACTIVE)
        raise ValueError(f"Unknown address filter: {name!r}")

    def street_names(self) -> Counter:
        return Counter(address.complete_street_name() for address in self._records)
