"""
cep_weather.domain.temperature

Temperature result model and unit conversion.

Responsibilities:
- Convert a Celsius reading into Fahrenheit and Kelvin (unrounded).
- Define the `{city, temp_C, temp_F, temp_K}` wire shape used by both services.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

FAHRENHEIT_MULTIPLIER = 1.8
FAHRENHEIT_BASE = 32
KELVIN_BASE = 273.15


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * FAHRENHEIT_MULTIPLIER + FAHRENHEIT_BASE


def celsius_to_kelvin(temp_c: float) -> float:
    return temp_c + KELVIN_BASE


class TemperatureResult(BaseModel):
    """
    Computed once per successful request from a single Celsius reading.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")

    @classmethod
    def from_celsius(cls, *, city: str, temp_c: float) -> TemperatureResult:
        return cls(
            city=city,
            temp_c=temp_c,
            temp_f=celsius_to_fahrenheit(temp_c),
            temp_k=celsius_to_kelvin(temp_c),
        )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


# --- Module Notes -----------------------------------------------------------
# Values are never rounded: JSON encoding uses the shortest float repr.
