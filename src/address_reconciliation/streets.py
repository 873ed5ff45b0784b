from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rapidfuzz import fuzz, process

from .address import Addresses

DEFAULT_SUGGESTION_CUTOFF = 80.0


@dataclass(frozen=True)
class OrphanStreet:
    """A source street name with no counterpart in the target dataset."""

    street: str
    address_count: int
    suggestion: Optional[str] = None
    suggestion_score: Optional[float] = None


def orphan_streets(
    source: Addresses,
    target: Addresses,
    score_cutoff: float = DEFAULT_SUGGESTION_CUTOFF,
) -> List[OrphanStreet]:
    """List source street names that never appear in ``target``.

    Each orphan carries the closest target street name as a hint for the
    reviewer. The hint is report output only and never affects matching.
    """

    source_counts = source.street_names()
    known = sorted(target.street_names())
    known_set = set(known)

    orphans: List[OrphanStreet] = []
    for street in sorted(source_counts):
        if street in known_set:
            continue
        suggestion = None
        score = None
        if known:
            best = process.extractOne(
                street, known, scorer=fuzz.token_sort_ratio, score_cutoff=score_cutoff
            )
            if best is not None:
                suggestion, score = best[0], float(best[1])
        orphans.append(
            OrphanStreet(
                street=street,
                address_count=source_counts[street],
                suggestion=suggestion,
                suggestion_score=score,
            )
        )
    return orphans
