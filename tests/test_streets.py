from address_reconciliation.address import Addresses
from address_reconciliation.components import StreetNamePostType
from address_reconciliation.streets import orphan_streets

from conftest import build_address


def test_orphan_streets_reports_missing_names_with_suggestion():
    source = Addresses(
        [
            build_address(object_id=1),
            build_address(object_id=2, street_name="MAPLE"),
            build_address(object_id=3, address_number=7, street_name="MAPLE"),
            build_address(object_id=4, street_name="ZEPHYR", street_name_post_type=StreetNamePostType.WAY),
        ]
    )
    target = Addresses(
        [
            build_address(object_id=10),
            build_address(object_id=11, street_name="MAPEL"),
        ]
    )

    orphans = orphan_streets(source, target)

    assert [o.street for o in orphans] == ["MAPLE Street", "ZEPHYR Way"]
    assert orphans[0].address_count == 2
    assert orphans[0].suggestion == "MAPEL Street"
    assert orphans[1].suggestion is None


def test_orphan_streets_against_empty_target(address):
    orphans = orphan_streets(Addresses([address]), Addresses())
    assert [(o.street, o.suggestion) for o in orphans] == [("MAIN Street", None)]
