from __future__ import annotations

from dataclasses import replace

import pytest

from address_reconciliation.address import Address
from address_reconciliation.components import AddressStatus, StreetNamePostType

BASE_ADDRESS = Address(
    address_number=123,
    street_name="MAIN",
    street_name_post_type=StreetNamePostType.STREET,
    zip_code=97526,
    postal_community="GRANTS PASS",
    state_name="OR",
    status=AddressStatus.ACTIVE,
    object_id=1,
)


def build_address(**overrides) -> Address:
    return replace(BASE_ADDRESS, **overrides)


@pytest.fixture
def address() -> Address:
    return BASE_ADDRESS
