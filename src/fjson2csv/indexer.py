"""Field frequency indexing and column ordering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from .walker import Record


@dataclass
class FieldIndex:
    """Frequency table of field names across all indexed records."""

    counts: Dict[str, int] = field(default_factory=dict)
    records: int = 0

    def add(self, record: Record) -> None:
        """Count every field name of ``record`` once."""
        for key in record:
            self.counts[key] = self.counts.get(key, 0) + 1
        self.records += 1

    def column_order(self) -> Tuple[str, ...]:
        return column_order(self.counts)


def column_order(counts: Mapping[str, int]) -> Tuple[str, ...]:
    """Order field names by descending frequency, then alphabetically.

    Example:
        >>> column_order({"apples": 4, "angles": 4, "marbles": 12})
        ('marbles', 'angles', 'apples')
    """
    return tuple(sorted(counts, key=lambda name: (-counts[name], name)))


class IndexingVisitor:
    """Walk visitor that only tallies field names."""

    def __init__(self, index: FieldIndex):
        self.index = index

    def visit(self, record: Record) -> None:
        self.index.add(record)


class BufferingVisitor(IndexingVisitor):
    """Walk visitor that tallies field names and retains every record."""

    def __init__(self, index: FieldIndex, buffer: List[Record]):
        super().__init__(index)
        self.buffer = buffer

    def visit(self, record: Record) -> None:
        self.buffer.append(record)
        super().visit(record)


__all__ = ["BufferingVisitor", "FieldIndex", "IndexingVisitor", "column_order"]
