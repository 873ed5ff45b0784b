from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .address import Address, ConversionError, IdentityKey, MismatchKind, SupportsAddress

logger = logging.getLogger(__name__)


class MatchStatus(Enum):
    MATCHING = "Matching"
    DIVERGENT = "Divergent"
    MISSING = "Missing"


@dataclass(frozen=True)
class MatchRecord:
    """One classified outcome for one source address."""

    match_status: MatchStatus
    address_label: str
    self_id: int
    other_id: Optional[int] = None
    subaddress_type: Optional[str] = None
    floor: Optional[str] = None
    building: Optional[str] = None
    status: Optional[str] = None

    def mismatch(self, kind: MismatchKind) -> Optional[str]:
        return getattr(self, kind.value)


@dataclass
class EngineConfig:
    use_index: bool = True


def _convert(item: SupportsAddress) -> Optional[Address]:
    try:
        return item.to_address()
    except ConversionError as exc:
        logger.debug("Skipping candidate %s: %s", item.object_id, exc)
        return None


class CandidatePool:
    """Converted comparison addresses, optionally bucketed by identity key.

    Bucketing never changes results: coincidence is equality of identity
    keys, and each bucket keeps the original relative order of its members.
    """

    def __init__(self, candidates: Iterable[SupportsAddress], use_index: bool = True) -> None:
        converted = [_convert(item) for item in candidates]
        self.addresses: List[Address] = [a for a in converted if a is not None]
        self.skipped = len(converted) - len(self.addresses)
        self._index: Optional[Dict[IdentityKey, List[Address]]] = None
        if use_index:
            self._index = {}
            for address in self.addresses:
                self._index.setdefault(address.identity_key(), []).append(address)

    def __len__(self) -> int:
        return len(self.addresses)

    def candidates_for(self, address: Address) -> Sequence[Address]:
        if self._index is None:
            return self.addresses
        return self._index.get(address.identity_key(), ())


class AddressMatcher:
    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def match_record(
        self,
        source: SupportsAddress,
        candidates: Union[CandidatePool, Iterable[SupportsAddress]],
    ) -> List[MatchRecord]:
        """Classify one source address against a list of candidate records.

        Candidates that cannot be converted are ignored. The result holds one
        Matching record, one Divergent record per divergent candidate, or a
        single Missing record.
        """
        address = source.to_address()
        label = address.label()
        if isinstance(candidates, CandidatePool):
            pool = candidates
        else:
            pool = CandidatePool(candidates, use_index=False)

        records: List[MatchRecord] = []
        for other in pool.candidates_for(address):
            coincident, mismatches = address.coincident(other)
            if not coincident:
                continue
            if not mismatches:
                records.append(
                    MatchRecord(
                        match_status=MatchStatus.MATCHING,
                        address_label=label,
                        self_id=address.object_id,
                        other_id=other.object_id,
                    )
                )
                continue
            fields = {mismatch.kind.value: mismatch.message for mismatch in mismatches}
            records.append(
                MatchRecord(
                    match_status=MatchStatus.DIVERGENT,
                    address_label=label,
                    self_id=address.object_id,
                    other_id=other.object_id,
                    **fields,
                )
            )

        if not records:
            records.append(
                MatchRecord(
                    match_status=MatchStatus.MISSING,
                    address_label=label,
                    self_id=address.object_id,
                )
            )
        return records


Selector = Union[MatchStatus, str]


class MatchRecords:
    """Ordered classification results for one source dataset pass."""

    def __init__(self, records: Iterable[MatchRecord] = ()) -> None:
        self.records: List[MatchRecord] = list(records)

    @classmethod
    def compare(
        cls,
        sources: Iterable[SupportsAddress],
        candidates: Iterable[SupportsAddress],
        config: EngineConfig | None = None,
    ) -> "MatchRecords":
        matcher = AddressMatcher(config)
        pool = CandidatePool(candidates, use_index=matcher.config.use_index)
        logger.info("Comparison pool holds %d addresses (%d skipped).", len(pool), pool.skipped)

        records: List[MatchRecord] = []
        skipped = 0
        for source in sources:
            try:
                records.extend(matcher.match_record(source, pool))
            except ConversionError as exc:
                skipped += 1
                logger.debug("Skipping source %s: %s", source.object_id, exc)
        if skipped:
            logger.info("%d source records could not be converted and were skipped.", skipped)
        return cls(records)

    def __iter__(self) -> Iterator[MatchRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    def is_empty(self) -> bool:
        return not self.records

    def status_counts(self) -> Dict[MatchStatus, int]:
        counts = Counter(record.match_status for record in self.records)
        return {status: counts.get(status, 0) for status in MatchStatus}

    def filter(self, selector: Selector) -> "MatchRecords":
        """Keep records selected by status or by a named predicate.

        Names are a status (``matching``, ``divergent``, ``missing``), a
        secondary field (``subaddress_type``, ``floor``, ``building``,
        ``status``) to keep records where that field diverged, or
        ``duplicate`` for source addresses that produced several records.
        """
        if isinstance(selector, MatchStatus):
            return MatchRecords(r for r in self.records if r.match_status is selector)

        key = selector.strip().lower()
        for status in MatchStatus:
            if key == status.value.lower():
                return self.filter(status)
        for kind in MismatchKind:
            if key == kind.value:
                return MatchRecords(r for r in self.records if r.mismatch(kind) is not None)
        if key == "duplicate":
            counts = Counter(record.self_id for record in self.records)
            return MatchRecords(r for r in self.records if counts[r.self_id] > 1)
        raise ValueError(f"Unknown match record filter: {selector!r}")
