"""
Record store snapshot.

An ordered, immutable collection of CourseRecords. Mutations return a new
store, so an aggregate computed from one snapshot can never go stale
underneath its reader.
"""

from dataclasses import dataclass, field, replace

from ..errors import RecordNotFoundError
from .record import CourseRecord


@dataclass(frozen=True)
class RecordStore:
    """
    Ordered collection of course records.

    ID ASSIGNMENT:
    --------------
    next_id is always max(existing ids) + 1 (1 for an empty store), so ids
    only grow while records exist and an id is never reused by a live record.
    """
    records: tuple = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def next_id(self) -> int:
        return max((r.record_id for r in self.records), default=0) + 1

    def get(self, record_id: int) -> CourseRecord:
        for record in self.records:
            if record.record_id == record_id:
                return record
        raise RecordNotFoundError(f"No record with id {record_id}")

    def add(self, record: CourseRecord) -> "RecordStore":
        """Append a record under a freshly assigned id."""
        return RecordStore(self.records + (replace(record, record_id=self.next_id),))

    def extend(self, records) -> "RecordStore":
        """Append several records, each under a fresh id, keeping their order."""
        store = self
        for record in records:
            store = store.add(record)
        return store

    def update(self, record: CourseRecord) -> "RecordStore":
        """Replace the record with the same id, keeping its position."""
        self.get(record.record_id)
        return RecordStore(tuple(record if r.record_id == record.record_id else r for r in self.records))

    def delete(self, record_id: int) -> "RecordStore":
        self.get(record_id)
        return RecordStore(tuple(r for r in self.records if r.record_id != record_id))
