from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from hybrid_rota.errors import ValidationError


@dataclass(frozen=True, slots=True)
class Person:
    """
    Someone on the rota. Identity is the (trimmed) name.
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ValidationError(f"Person name must be a string, got {self.name!r}.")
        trimmed = self.name.strip()
        if not trimmed:
            raise ValidationError("Person name must be non-empty.")
        object.__setattr__(self, "name", trimmed)

    def __str__(self) -> str:
        return self.name


def normalize_names(names: Iterable[Any]) -> list[str]:
    """
    Trim every entry, drop blanks and reject duplicates, keeping input order.
    """
    out: list[str] = []
    seen: set[str] = set()
    for raw in names:
        if isinstance(raw, Person):
            raw = raw.name
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise ValidationError(f"Names must be strings, got {raw!r}.")
        name = raw.strip()
        if not name:
            continue
        if name in seen:
            raise ValidationError(f"Duplicate name on the rota: {name!r}.")
        seen.add(name)
        out.append(name)
    return out


def people_from_names(names: Iterable[Any]) -> list[Person]:
    return [Person(name) for name in normalize_names(names)]


def people_from_json(path: str | Path) -> list[Person]:
    """
    Load people from a JSON file on disk.

    Files may contain a list of names, a list of `{"name": ...}` objects, or
    an object with a top-level `people`/`staff` array of either.
    """
    file_path = Path(path).expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("people_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"People JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, Mapping):
        entries = data.get("people") or data.get("staff")
        if entries is None:
            raise ValidationError(
                "JSON file must contain a list or a 'people'/'staff' key."
            )
    elif isinstance(data, Sequence) and not isinstance(data, str):
        entries = data
    else:
        raise ValidationError("JSON file must contain a list of people.")

    if isinstance(entries, (str, bytes, bytearray)):
        raise ValidationError("JSON file must contain a list of people.")

    names: list[Any] = []
    for raw in entries:
        if isinstance(raw, Mapping):
            if "name" not in raw:
                raise ValidationError(f"Person entry missing 'name' in {file_path}.")
            names.append(raw["name"])
        else:
            names.append(raw)

    return people_from_names(names)
