import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Route:
    """路線（出発空港 → 到着空港、IATA 3レターコード）"""

    origin: str
    destination: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z]{3}$")

    def __post_init__(self) -> None:
        origin = self.origin.strip().upper()
        destination = self.destination.strip().upper()
        for code in (origin, destination):
            if not self.PATTERN.match(code):
                raise ValueError(f"Invalid IATA airport code: {code}")
        if origin == destination:
            raise ValueError("Origin and destination must differ")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "destination", destination)

    def __str__(self) -> str:
        return f"{self.origin}-{self.destination}"
