# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Probe locations (vantage points).

The registry is deployment configuration: an ordered, read-only sequence that
the probe engine iterates once per check. Result lists follow its order.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

from .errors import ConfigurationError

LOCATIONS_ENV = "REACHPROBE_LOCATIONS"


@dataclass(frozen=True)
class Location:
    display_name: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.display_name, "code": self.code}


DEFAULT_LOCATIONS: tuple[Location, ...] = (
    Location("Singapore (ASIA PACIFIC)", "SIN"),
    Location("Oregon (US WEST)", "PDX"),
    Location("N. Virginia (US EAST)", "IAD"),
    Location("Ireland (EU WEST)", "DUB"),
    Location("Sao Paulo (SA EAST)", "GRU"),
)


class LocationRegistry(Sequence[Location]):
    """Immutable ordered collection of probe locations."""

    def __init__(self, locations: Iterable[Location]):
        items = tuple(locations)
        if not items:
            raise ConfigurationError("Location registry must contain at least one location")
        seen: set[str] = set()
        for location in items:
            if not isinstance(location, Location):
                raise ConfigurationError(f"Not a Location: {location!r}")
            if location.code in seen:
                raise ConfigurationError(f"Duplicate location code: {location.code}")
            seen.add(location.code)
        self._locations = items

    @overload
    def __getitem__(self, index: int) -> Location: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Location, ...]: ...

    def __getitem__(self, index):
        return self._locations[index]

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def __repr__(self) -> str:
        return f"LocationRegistry({', '.join(loc.code for loc in self._locations)})"

    def codes(self) -> list[str]:
        return [loc.code for loc in self._locations]

    def by_code(self, code: str) -> Location:
        wanted = str(code or "").strip().upper()
        for location in self._locations:
            if location.code.upper() == wanted:
                return location
        raise KeyError(code)

    def to_list(self) -> list[dict[str, str]]:
        return [loc.to_dict() for loc in self._locations]


def parse_locations(raw: str) -> list[Location]:
    """
    Parse ``"Name=CODE;Name=CODE"`` into locations.

    Entries are separated by ``;`` (or newlines). Empty entries are skipped.
    """
    locations: list[Location] = []
    for entry in str(raw or "").replace("\n", ";").split(";"):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, code = entry.rpartition("=")
        name = name.strip()
        code = code.strip()
        if not sep or not name or not code:
            raise ConfigurationError(f"Invalid location entry {entry!r}; expected 'Name=CODE'")
        locations.append(Location(name, code.upper()))
    return locations


def load_location_registry() -> LocationRegistry:
    """Registry from REACHPROBE_LOCATIONS, falling back to the default locations."""
    raw = os.getenv(LOCATIONS_ENV)
    if raw and raw.strip():
        return LocationRegistry(parse_locations(raw))
    return LocationRegistry(DEFAULT_LOCATIONS)


__all__ = [
    "DEFAULT_LOCATIONS",
    "LOCATIONS_ENV",
    "Location",
    "LocationRegistry",
    "load_location_registry",
    "parse_locations",
]
