# skygap/stations/data_models.py
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class ReferenceStation:
    """A ground weather station used as the coverage baseline."""
    id: str
    name: str
    country: str
    latitude: float
    longitude: float
    elevation: float = 0.0
    state: str = ""
    active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceStation":
        return cls(
            id=str(data['id']),
            name=data.get('name') or "",
            country=data.get('country', ""),
            latitude=float(data['latitude']),
            longitude=float(data['longitude']),
            elevation=float(data.get('elevation') or 0.0),
            state=data.get('state', ""),
            active=bool(data.get('active', True))
        )
