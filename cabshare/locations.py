# Pickup / drop catalog. Fixed at startup, keyed by the number the user types.

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Location:
    id: int
    name: str
    glyph: str

    def label(self):
        return f"{self.glyph} {self.name}"


def _catalog(*entries):
    return MappingProxyType({str(loc.id): loc for loc in entries})


PICKUP_LOCATIONS = _catalog(
    Location(1, "Mangalore Airport (IXE)", "✈️"),
    Location(2, "Mangalore City", "🌆"),
    Location(3, "Mangalore Railway Station", "🚂"),
    Location(4, "KSRTC Bus Stand", "🚌"),
)

DROP_LOCATIONS = _catalog(
    Location(1, "Tiger Circle", "🐯"),
    Location(2, "MIT Main Gate", "🎓"),
    Location(3, "KMC", "🏥"),
    Location(4, "Manipal Bus Stand", "🚏"),
)


def lookup(catalog, key):
    """Return the Location registered under ``key`` or None."""
    if key is None:
        return None
    return catalog.get(key.strip())
