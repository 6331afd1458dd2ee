from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import CatalogError


class FieldKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    CATEGORICAL = "categorical"
    ENUM = "enum"


@dataclass(frozen=True)
class Field:
    """
    One searchable column of a catalog, as described by the server.

    Fields:

    - name: unique key, also the request parameter name
    - title: human-readable label
    - kind: value domain (integer / float / categorical / enum)
    - units: optional units shown next to the title
    - top: pre-activated as a filter when the browser starts
    - display: column shown in the result table by default
    - enum_labels: index -> label for enum fields
    """

    name: str
    title: str
    kind: FieldKind
    units: Optional[str] = None
    description: Optional[str] = None
    top: bool = False
    display: bool = True
    enum_labels: Tuple[str, ...] = ()

    @property
    def is_numeric(self) -> bool:
        return self.kind in (FieldKind.INTEGER, FieldKind.FLOAT)

    @property
    def is_integer(self) -> bool:
        return self.kind is FieldKind.INTEGER

    @property
    def label(self) -> str:
        return f"{self.title} ({self.units})" if self.units else self.title

    def enum_label(self, key: Any) -> Any:
        """Return the enum label for key, or key itself if there is none."""
        if not self.enum_labels or isinstance(key, bool):
            return key
        try:
            idx = int(key)
        except (TypeError, ValueError):
            return key
        if 0 <= idx < len(self.enum_labels):
            return self.enum_labels[idx]
        return key

    def render(self, value: Any) -> Any:
        """Format a cell value for the result table."""
        if value is None:
            return value
        if self.kind is FieldKind.FLOAT:
            try:
                return f"{float(value):.8g}"
            except (TypeError, ValueError):
                return value
        if self.kind is FieldKind.ENUM:
            return self.enum_label(value)
        return value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Field:
        name = data.get("name")
        if not name:
            raise CatalogError(f"Field descriptor without a name: {data!r}")

        enum_labels = tuple(str(x) for x in (data.get("enum") or data.get("enum_labels") or ()))

        raw_kind = data.get("kind")
        if raw_kind is not None:
            try:
                kind = FieldKind(raw_kind)
            except ValueError:
                raise CatalogError(f"Field {name!r} has unknown kind {raw_kind!r}")
        elif enum_labels:
            kind = FieldKind.ENUM
        elif data.get("terms"):
            kind = FieldKind.CATEGORICAL
        elif data.get("base") == "i":
            kind = FieldKind.INTEGER
        else:
            kind = FieldKind.FLOAT

        return cls(
            name=str(name),
            title=str(data.get("title") or name),
            kind=kind,
            units=data.get("units") or None,
            description=data.get("descr") or data.get("description") or None,
            top=bool(data.get("top", False)),
            display=bool(data.get("disp", data.get("display", True))),
            enum_labels=enum_labels,
        )


@dataclass(frozen=True)
class Catalog:
    """
    Immutable description of a server-indexed catalog and its fields.
    Consumed read-only by the filter engine, the UI and the export views.
    """

    name: str
    fields: Tuple[Field, ...]
    uri: str = ""
    bulk: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        by_name: Dict[str, Field] = {}
        for f in self.fields:
            if f.name in by_name:
                raise CatalogError(f"Duplicate field {f.name!r} in catalog {self.name!r}")
            by_name[f.name] = f
        object.__setattr__(self, "_by_name", by_name)
        if not self.uri:
            object.__setattr__(self, "uri", "/" + self.name)

    def field(self, name: str) -> Optional[Field]:
        return self._by_name.get(name)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def top_fields(self) -> List[Field]:
        return [f for f in self.fields if f.top]

    def default_visible(self) -> List[str]:
        return [f.name for f in self.fields if f.display]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Catalog:
        name = data.get("name")
        if not name:
            raise CatalogError("Catalog descriptor without a name")
        return cls(
            name=str(name),
            fields=tuple(Field.from_dict(f) for f in data.get("fields", [])),
            uri=str(data.get("uri") or ""),
            bulk=tuple(data.get("bulk", ())),
        )
