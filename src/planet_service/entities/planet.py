"""Planet domain entity."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class PlanetEntity:
    """A row of the ``planets`` table.

    Attributes:
        id: Primary key assigned by the store on insert (never reused)
        name: The planet's name
    """

    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Snapshot used as the cached representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanetEntity":
        """Rebuild an entity from a cached snapshot.

        Raises:
            KeyError: If a field is missing
            TypeError: If ``data`` is not a mapping
            ValueError: If ``id`` is not an integer
        """
        return cls(id=int(data["id"]), name=str(data["name"]))
