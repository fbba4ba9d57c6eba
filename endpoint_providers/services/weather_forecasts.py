"""Weather Forecast Repository — in-memory forecast source for the demo endpoint.

Invariants:
    - get_next(n) returns exactly n forecasts, one per day starting tomorrow
    - temperature_c in [-20, 55), summary from SUMMARIES
"""

import random
from datetime import date, timedelta

from endpoint_providers.schemas.weather import WeatherForecast

SUMMARIES = (
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
)


class WeatherForecastRepository:
    """Generates forecasts; rng is injectable for deterministic tests."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def get_next(self, count: int) -> list[WeatherForecast]:
        today = date.today()
        return [
            WeatherForecast(
                date=today + timedelta(days=index),
                temperature_c=self._rng.randrange(-20, 55),
                summary=self._rng.choice(SUMMARIES),
            )
            for index in range(1, count + 1)
        ]
