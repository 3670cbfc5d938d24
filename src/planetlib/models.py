from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from . import config
from .utils import primary_label, split_labels

Population = Union[int, str]
Diameter = Union[int, str, None]


@dataclass
class Page:
    results: list[dict[str, Any]]
    next: Optional[str] = None
    count: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Page":
        return cls(
            results=list(payload.get("results") or []),
            next=payload.get("next") or None,
            count=payload.get("count"),
        )


@dataclass
class Planet:
    """One catalog planet.

    Built from a raw remote record with its fields untouched; enrichment
    then normalizes population/diameter/edited and swaps resident URLs for
    display names in place.
    """

    name: str
    population: Population = config.UNKNOWN_POPULATION
    terrain: str = ""
    climate: str = ""
    diameter: Diameter = None
    edited: str = ""
    films: list[str] = field(default_factory=list)
    residents: list[str] = field(default_factory=list)
    url: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Planet":
        return cls(
            name=record["name"],
            population=record.get("population", config.UNKNOWN_POPULATION),
            terrain=record.get("terrain") or "",
            climate=record.get("climate") or "",
            diameter=record.get("diameter"),
            edited=record.get("edited") or "",
            films=list(record.get("films") or []),
            residents=list(record.get("residents") or []),
            url=record.get("url"),
        )

    @property
    def terrains(self) -> list[str]:
        return split_labels(self.terrain)

    @property
    def primary_climate(self) -> str:
        return primary_label(self.climate)

    @property
    def film_count(self) -> int:
        return len(self.films)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "population": self.population,
            "terrain": self.terrains,
            "climate": self.primary_climate,
            "diameter": self.diameter,
            "edited": self.edited,
            "film_count": self.film_count,
            "residents": list(self.residents),
        }
