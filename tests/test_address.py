from dataclasses import replace

import pytest

from address_reconciliation.address import Addresses, ConversionError, MismatchKind, coincident
from address_reconciliation.components import (
    AddressStatus,
    StreetNamePostType,
    StreetNamePreDirectional,
    SubaddressType,
)

from conftest import build_address


def test_label_includes_suffix_and_subaddress():
    address = build_address(
        address_number_suffix="A",
        subaddress_type=SubaddressType.APARTMENT,
        subaddress_identifier="4",
    )
    assert address.label() == "123 A MAIN Street Apartment 4"


def test_label_omits_missing_subaddress(address):
    assert address.label() == "123 MAIN Street"


def test_label_includes_pre_directional():
    address = build_address(street_name_pre_directional=StreetNamePreDirectional.NORTH)
    assert address.label() == "123 North MAIN Street"


def test_label_uses_hash_when_subaddress_type_unknown():
    assert build_address(subaddress_identifier="4").label() == "123 MAIN Street #4"


def test_label_renders_subaddress_type_without_identifier():
    assert build_address(subaddress_type=SubaddressType.UNIT).label() == "123 MAIN Street Unit"


def test_coincident_is_reflexive(address):
    is_coincident, mismatches = coincident(address, address)
    assert is_coincident
    assert mismatches == ()


def test_object_id_does_not_affect_coincidence(address):
    assert coincident(address, build_address(object_id=99)) == (True, ())


@pytest.mark.parametrize(
    "field, value",
    [
        ("address_number", 124),
        ("address_number_suffix", "B"),
        ("street_name_pre_directional", StreetNamePreDirectional.SOUTH),
        ("street_name", "MAPLE"),
        ("street_name_post_type", StreetNamePostType.AVENUE),
        ("subaddress_identifier", "7"),
        ("zip_code", 97527),
        ("postal_community", "MERLIN"),
        ("state_name", "CA"),
    ],
)
def test_identity_field_difference_is_not_coincident(address, field, value):
    other = replace(address, **{field: value})
    assert coincident(address, other) == (False, ())
    assert coincident(other, address) == (False, ())


def test_secondary_fields_are_all_reported():
    left = build_address(subaddress_type=SubaddressType.APARTMENT, floor=2, building="A")
    right = build_address(
        object_id=2,
        subaddress_type=SubaddressType.SUITE,
        building="B",
        status=AddressStatus.RETIRED,
    )

    is_coincident, mismatches = left.coincident(right)

    assert is_coincident
    assert [m.kind for m in mismatches] == [
        MismatchKind.SUBADDRESS_TYPE,
        MismatchKind.FLOOR,
        MismatchKind.BUILDING,
        MismatchKind.STATUS,
    ]
    assert mismatches[0].message == "Apartment not equal to Suite"
    assert mismatches[1].message == "2 not equal to None"
    assert mismatches[3].message == "Active not equal to Retired"


def test_coincidence_is_symmetric():
    left = build_address(floor=1)
    right = build_address(status=AddressStatus.PENDING)

    forward = left.coincident(right)
    backward = right.coincident(left)

    assert forward.coincident == backward.coincident
    assert {m.kind for m in forward.mismatches} == {m.kind for m in backward.mismatches}


def test_filter_duplicate_keeps_coincident_addresses_in_order():
    first = build_address(object_id=1)
    other = build_address(object_id=2, address_number=200)
    second = build_address(object_id=3, status=AddressStatus.RETIRED)

    duplicates = Addresses([first, other, second]).filter("duplicate")

    assert [a.object_id for a in duplicates] == [1, 3]


def test_filter_active():
    addresses = Addresses(
        [build_address(object_id=1), build_address(object_id=2, status=AddressStatus.RETIRED)]
    )
    assert [a.object_id for a in addresses.filter("active")] == [1]


def test_filter_rejects_unknown_name(address):
    with pytest.raises(ValueError):
        Addresses([address]).filter("nearby")


class _Broken:
    object_id = 5

    def to_address(self):
        raise ConversionError("no post type")


def test_convert_drops_records_that_fail(address):
    addresses = Addresses.convert([address, _Broken()])
    assert len(addresses) == 1
    assert addresses[0] is address
