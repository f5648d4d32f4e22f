"""Column resolution table for activity export files.

Export formats drift between versions: header text gets renamed while the
numeric columns tend to stay put. Each logical field is therefore located
either by a header substring or by a fixed position, and the table is
configuration so a format change does not need a code change.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ColumnSpec:
    """Locate one logical field by ``header`` substring or fixed ``index``."""

    header: str | None = None
    index: int | None = None

    def __post_init__(self):
        if (self.header is None) == (self.index is None):
            raise ValueError("ColumnSpec needs exactly one of header or index")
        if self.index is not None and self.index < 0:
            raise ValueError(f"Column index must be non-negative, got {self.index}")

    @classmethod
    def from_config(cls, value: Any) -> ColumnSpec:
        """Build a spec from config: ``{"header": str}``, ``{"index": int}``, an int or a str."""
        if isinstance(value, ColumnSpec):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid column spec: {value!r}")
        if isinstance(value, int):
            return cls(index=value)
        if isinstance(value, str):
            return cls(header=value)
        if isinstance(value, Mapping):
            return cls(header=value.get("header"), index=value.get("index"))
        raise ValueError(f"Invalid column spec: {value!r}")

    def resolve(self, headers: Sequence[str]) -> int | None:
        if self.index is not None:
            return self.index
        for i, name in enumerate(headers):
            if self.header in name:
                return i
        return None


# Layout of the bulk "activities.csv" export. The numeric columns repeat
# header names used earlier in the row, so they are pinned by position.
DEFAULT_COLUMNS: dict[str, ColumnSpec] = {
    "id": ColumnSpec(header="Activity ID"),
    "date": ColumnSpec(header="Activity Date"),
    "name": ColumnSpec(header="Activity Name"),
    "type": ColumnSpec(header="Activity Type"),
    "elapsed_time": ColumnSpec(index=15),
    "moving_time": ColumnSpec(index=16),
    "distance": ColumnSpec(index=17),  # meters
    "elevation_gain": ColumnSpec(index=20),
    "max_heart_rate": ColumnSpec(index=30),
    "avg_heart_rate": ColumnSpec(index=31),
}


def build_columns(overrides: Mapping[str, Any] | None = None) -> dict[str, ColumnSpec]:
    """Return the default table with any configured fields replaced."""
    columns = dict(DEFAULT_COLUMNS)
    for field, value in (overrides or {}).items():
        if field not in DEFAULT_COLUMNS:
            raise ValueError(f"Unknown export column: {field}")
        columns[field] = ColumnSpec.from_config(value)
    return columns


def resolve_columns(headers: Sequence[str], columns: Mapping[str, ColumnSpec] | None = None) -> dict[str, int | None]:
    """Map each logical field to a column position, ``None`` when unresolved."""
    columns = columns or DEFAULT_COLUMNS
    return {field: spec.resolve(headers) for field, spec in columns.items()}
