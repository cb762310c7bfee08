"""Static geofence configuration: one campus zone plus department zones."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .model import GeofenceZone, GeoPoint

CAMPUS_ZONE = GeofenceZone(
    id="iit-guwahati",
    label="IIT Guwahati",
    center=GeoPoint(lat=26.1923, lng=91.6951),
    radius_meters=1200,
)

DEPARTMENT_RADIUS_METERS = 200

_DEPARTMENTS: Sequence[tuple[str, str, float, float]] = (
    ("Dept1", "Biosciences & Bioengineering", 26.18535, 91.69221),
    ("Dept2", "Chemical Engineering", 26.18507, 91.69082),
    ("Dept3", "Computer Science and Engineering", 26.18695, 91.69222),
    ("Dept4", "Civil Engineering", 26.18471, 91.69218),
    ("Dept5", "Mechanical Engineering", 26.18794, 91.69113),
    ("Dept6", "Physics", 26.18468, 91.69102),
    ("Dept7", "Design", 26.18772, 91.6922),
    ("Dept8", "Chemistry", 26.18592, 91.69238),
    ("Dept9", "Mathematics", 26.18695, 91.69083),
    ("Dept10", "Centre for Educational Technology", 26.18734, 91.69226),
    ("Dept11", "Center for Computer and Communication", 26.18928, 91.69296),
    ("Dept12", "Centre for Nanotechnology", 26.18682, 91.68906),
    ("Dept13", "Center for Environment", 26.18602, 91.69099),
    ("Dept14", "Centre for Energy", 26.18537, 91.6908),
    ("Dept15", "Humanities and Social Sciences", 26.18656, 91.69108),
    ("Dept16", "Research and Development", 26.18509, 91.68933),
    ("Dept17", "Electronics and Electrical Engineering", 26.18653, 91.68933),
    ("Dept18", "Centre for Linguistic Science and Technology", 26.18926, 91.69293),
    ("Dept19", "Technology Incubation Center", 26.19321, 91.70257),
    ("Dept20", "Industrial Interactions and Special Initiatives", 26.18509, 91.68933),
    ("Dept21", "Centre for Intelligent Cyber-Physical Systems", 26.18682, 91.68906),
    ("Dept22", "School of Agro and Rural Technology", 26.18730, 91.69267),
)

DEPARTMENT_ZONES: tuple[GeofenceZone, ...] = tuple(
    GeofenceZone(id=zone_id, label=label, center=GeoPoint(lat=lat, lng=lng), radius_meters=DEPARTMENT_RADIUS_METERS)
    for zone_id, label, lat, lng in _DEPARTMENTS
)


def _zone_from_mapping(raw: Mapping[str, Any]) -> GeofenceZone:
    center = raw["center"]
    return GeofenceZone(
        id=str(raw["id"]),
        label=str(raw["label"]),
        center=GeoPoint(lat=float(center["lat"]), lng=float(center["lng"])),
        radius_meters=float(raw.get("radius_meters", raw.get("radius"))),
    )


@dataclass(frozen=True)
class ZoneRegistry:
    """Process-wide geofence configuration. Not mutated at runtime."""

    campus: GeofenceZone
    departments: tuple[GeofenceZone, ...]

    @classmethod
    def default(cls) -> "ZoneRegistry":
        return cls(campus=CAMPUS_ZONE, departments=DEPARTMENT_ZONES)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ZoneRegistry":
        return cls(
            campus=_zone_from_mapping(data["campus"]),
            departments=tuple(_zone_from_mapping(d) for d in data.get("departments", [])),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "ZoneRegistry":
        with Path(path).open("r", encoding="utf-8") as f:
            return cls.from_mapping(json.load(f))

    def resolve(self, department: Optional[str]) -> Optional[GeofenceZone]:
        """Find a department zone by id, then by label.

        Unknown or malformed keys give None.
        """
        if not isinstance(department, str) or not department.strip():
            return None
        key = department.strip()
        for zone in self.departments:
            if zone.id == key:
                return zone
        for zone in self.departments:
            if zone.label == key:
                return zone
        return None
