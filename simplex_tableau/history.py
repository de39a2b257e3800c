from .model import IterationRecord


class IterationHistory:
    """Append-only list of tableau snapshots, each owning its own storage"""

    def __init__(self):
        self._records = []

    def append(self, tableau, choice=None):
        record = IterationRecord(tableau.copy(pivot=tableau.pivot), choice)
        self._records.append(record)
        return record

    @property
    def last(self):
        return self._records[-1] if self._records else None

    def records(self):
        return tuple(self._records)

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(tuple(self._records))

    def __getitem__(self, index):
        return self._records[index]
