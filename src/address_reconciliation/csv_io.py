"""CSV read/write helpers for source datasets and match reports."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from .address import Address
from .engine import MatchRecord, MatchRecords, MatchStatus
from .sources import SOURCE_TYPES, AddressSource, SourceFormatError
from .streets import OrphanStreet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

MATCH_RECORD_COLUMNS = [
    "match_status",
    "address_label",
    "self_id",
    "other_id",
    "subaddress_type",
    "floor",
    "building",
    "status",
]

ADDRESS_COLUMNS = [
    "object_id",
    "address_label",
    "address_number",
    "address_number_suffix",
    "street_name_pre_directional",
    "street_name",
    "street_name_post_type",
    "subaddress_type",
    "subaddress_identifier",
    "floor",
    "building",
    "zip_code",
    "postal_community",
    "state_name",
    "status",
]

ORPHAN_STREET_COLUMNS = ["street", "address_count", "suggestion", "suggestion_score"]


def _read_text_frame(path: PathLike) -> pd.DataFrame:
    # Every cell stays text so adapters decide how blanks and numbers are parsed.
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def read_source(path: PathLike, source_type: str) -> List[AddressSource]:
    """Load a source dataset into adapter records.

    Raises:
        ValueError: ``source_type`` is not a known dataset tag.
        SourceFormatError: a required column is absent or a row is malformed.
        FileNotFoundError: ``path`` does not exist.
    """

    try:
        adapter = SOURCE_TYPES[source_type]
    except KeyError:
        raise ValueError(f"Unknown source type: {source_type!r}") from None

    df = _read_text_frame(path)
    missing_columns = [col for col in adapter.columns if col not in df.columns]
    if missing_columns:
        raise SourceFormatError(f"Missing required columns: {missing_columns}")

    records: List[AddressSource] = []
    # Row numbers count the header as line 1.
    for index, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            records.append(adapter.from_row(row))
        except SourceFormatError as exc:
            raise SourceFormatError(str(exc), row_number=index) from exc
    logger.info("Read %d %s records from %s.", len(records), source_type, path)
    return records


def _optional(value: Optional[object]) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def write_match_records(records: Iterable[MatchRecord], path: PathLike) -> None:
    rows = [
        {
            "match_status": record.match_status.value,
            "address_label": record.address_label,
            "self_id": record.self_id,
            "other_id": _optional(record.other_id),
            "subaddress_type": _optional(record.subaddress_type),
            "floor": _optional(record.floor),
            "building": _optional(record.building),
            "status": _optional(record.status),
        }
        for record in records
    ]
    pd.DataFrame(rows, columns=MATCH_RECORD_COLUMNS).to_csv(path, index=False)


def read_match_records(path: PathLike) -> MatchRecords:
    df = _read_text_frame(path)
    missing_columns = [col for col in MATCH_RECORD_COLUMNS if col not in df.columns]
    if missing_columns:
        raise SourceFormatError(f"Missing required columns: {missing_columns}")

    records: List[MatchRecord] = []
    for index, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            records.append(
                MatchRecord(
                    match_status=MatchStatus(row["match_status"]),
                    address_label=row["address_label"],
                    self_id=int(row["self_id"]),
                    other_id=int(row["other_id"]) if row["other_id"] else None,
                    subaddress_type=row["subaddress_type"] or None,
                    floor=row["floor"] or None,
                    building=row["building"] or None,
                    status=row["status"] or None,
                )
            )
        except ValueError as exc:
            raise SourceFormatError(str(exc), row_number=index) from exc
    return MatchRecords(records)


def write_addresses(addresses: Iterable[Address], path: PathLike) -> None:
    rows = []
    for address in addresses:
        row = {column: _optional(getattr(address, column, None)) for column in ADDRESS_COLUMNS}
        row["address_label"] = address.label()
        rows.append(row)
    pd.DataFrame(rows, columns=ADDRESS_COLUMNS).to_csv(path, index=False)


def write_orphan_streets(orphans: Iterable[OrphanStreet], path: PathLike) -> None:
    rows = [
        {
            "street": orphan.street,
            "address_count": orphan.address_count,
            "suggestion": _optional(orphan.suggestion),
            "suggestion_score": "" if orphan.suggestion_score is None else f"{orphan.suggestion_score:.1f}",
        }
        for orphan in orphans
    ]
    pd.DataFrame(rows, columns=ORPHAN_STREET_COLUMNS).to_csv(path, index=False)
