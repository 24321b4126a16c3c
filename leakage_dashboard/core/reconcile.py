"""
Reconciliation of normalized batches into live record collections.

Existing records keep their position and take the incoming record's fields;
records with new ids are appended in batch order. Ids never duplicate or
disappear. A replace flag swaps the whole collection for the batch.
"""

from typing import Dict, List, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)


def overlay(existing: R, incoming: R) -> R:
    """Shallow field merge; every incoming field wins, unset (None) included."""
    return existing.model_copy(update=dict(incoming))


def collapse_by_id(records: List[R]) -> Dict[str, R]:
    """Index a batch by id; a repeated id overlays the earlier record in its slot."""
    indexed: Dict[str, R] = {}
    for record in records:
        if record.id in indexed:
            indexed[record.id] = overlay(indexed[record.id], record)
        else:
            indexed[record.id] = record
    return indexed


def merge_records(current: List[R], incoming: List[R], replace: bool = False) -> List[R]:
    """
    Merge an incoming batch into the current collection by id.

    Args:
        current: Collection as currently displayed
        incoming: Freshly normalized batch
        replace: Discard current and keep exactly the incoming batch

    Returns:
        New ordered collection; inputs are not mutated
    """
    if replace:
        return list(collapse_by_id(incoming).values())

    if not incoming:
        return current

    pending = collapse_by_id(incoming)

    merged = []
    for record in current:
        update = pending.pop(record.id, None)
        merged.append(overlay(record, update) if update is not None else record)

    merged.extend(pending.values())
    return merged
