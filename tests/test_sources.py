import pytest

from address_reconciliation.address import ConversionError
from address_reconciliation.components import (
    AddressStatus,
    StreetNamePostType,
    StreetNamePreDirectional,
    SubaddressType,
)
from address_reconciliation.sources import CityAddress, CountyAddress, SourceFormatError


def city_row(**overrides):
    row = {
        "OID_": "10",
        "Add_Number": "123",
        "AddNum_Suf": "",
        "St_PreDir": "North",
        "St_Name": "Main",
        "St_PosTyp": "Street",
        "SubaddressType": "Apartment",
        "SubaddressIdentifier": "4",
        "Floor": "",
        "Building": "<Null>",
        "Post_Code": "97526",
        "STATUS": "Current",
        "Post_Comm": "Grants Pass",
        "StateName": "OR",
        "NOTES": "moved from parcel split",
    }
    row.update(overrides)
    return row


def county_row(**overrides):
    row = {
        "OID_": "20",
        "taxlot": "R123",
        "stnum": "123",
        "stnumsuf": "",
        "predir": "N",
        "name": "MAIN",
        "type": "ST",
        "unit_type": "APT",
        "unit": "4",
        "floor": "0",
        "address": "123 N MAIN ST APT 4",
        "postcomm": "GRANTS PASS",
        "zip": "97526",
        "state": "OR",
        "status": "Current",
        "point_x": "-123.33",
        "point_y": "42.43",
    }
    row.update(overrides)
    return row


@pytest.mark.parametrize(
    "enum_type, text, expected",
    [
        (StreetNamePostType, "ave", StreetNamePostType.AVENUE),
        (StreetNamePostType, "Avenue", StreetNamePostType.AVENUE),
        (StreetNamePostType, "ST.", StreetNamePostType.STREET),
        (StreetNamePreDirectional, "nw", StreetNamePreDirectional.NORTHWEST),
        (SubaddressType, "STE", SubaddressType.SUITE),
        (AddressStatus, "Current", AddressStatus.ACTIVE),
        (AddressStatus, "<Null>", None),
        (StreetNamePostType, "", None),
        (StreetNamePostType, "Boardwalkish", None),
    ],
)
def test_component_parse(enum_type, text, expected):
    assert enum_type.parse(text) is expected


def test_city_record_converts_to_canonical_address():
    record = CityAddress.from_row(city_row())
    address = record.to_address()

    assert record.notes == "moved from parcel split"
    assert address.object_id == 10
    assert address.street_name == "MAIN"
    assert address.street_name_pre_directional is StreetNamePreDirectional.NORTH
    assert address.building is None
    assert address.status is AddressStatus.ACTIVE
    assert address.label() == "123 North MAIN Street Apartment 4"


def test_county_record_decodes_abbreviations():
    address = CountyAddress.from_row(county_row()).to_address()

    assert address.street_name_post_type is StreetNamePostType.STREET
    assert address.subaddress_type is SubaddressType.APARTMENT
    assert address.floor is None
    assert address.building is None


def test_city_and_county_records_for_same_point_coincide():
    city = CityAddress.from_row(city_row()).to_address()
    county = CountyAddress.from_row(county_row()).to_address()

    assert city.coincident(county) == (True, ())


def test_county_record_without_post_type_fails_conversion():
    record = CountyAddress.from_row(county_row(type=""))

    assert record.street_name_post_type is None
    with pytest.raises(ConversionError):
        record.to_address()


def test_record_without_status_fails_conversion():
    with pytest.raises(ConversionError):
        CityAddress.from_row(city_row(STATUS="")).to_address()


def test_malformed_house_number_is_a_format_error():
    with pytest.raises(SourceFormatError):
        CountyAddress.from_row(county_row(stnum="12B"))


def test_spreadsheet_float_numbers_are_accepted():
    record = CityAddress.from_row(city_row(Add_Number="123.0", Floor="2.0"))
    assert record.address_number == 123
    assert record.floor == 2


def test_full_state_name_is_reduced_to_code():
    record = CityAddress.from_row(city_row(StateName="Oregon"))
    assert record.state_name == "OR"


@pytest.mark.parametrize(
    "record_type, row",
    [
        (CityAddress, city_row(St_Name="")),
        (CityAddress, city_row(Post_Comm="<Null>")),
        (CityAddress, city_row(StateName="")),
        (CityAddress, city_row(Post_Code="")),
        (CountyAddress, county_row(name="")),
        (CountyAddress, county_row(postcomm="")),
        (CountyAddress, county_row(state="<Null>")),
    ],
)
def test_blank_mandatory_text_loads_but_fails_conversion(record_type, row):
    record = record_type.from_row(row)

    with pytest.raises(ConversionError):
        record.to_address()


@pytest.mark.parametrize("text", ["97526", "97526-1234", "975261234", " 97526 "])
def test_zip_and_zip_plus_four_keep_five_digits(text):
    assert CountyAddress.from_row(county_row(zip=text)).zip_code == 97526


@pytest.mark.parametrize("text", ["123456", "9752", "97526-12", "ZIP97526"])
def test_malformed_postal_code_is_a_format_error(text):
    with pytest.raises(SourceFormatError):
        CityAddress.from_row(city_row(Post_Code=text))
