"""Weather Forecast Endpoints — demo provider resolving its repository at construction.

Invariants:
    - GET /weatherforecast?count=N returns N forecasts (200)
    - count <= 0 returns 400 with an empty body (handled here, not by the middleware)
    - Repository resolved once, in __init__, from the injected ServiceProvider
"""

from fastapi import FastAPI, Response, status

from endpoint_providers.core.provider import BaseEndpointProvider
from endpoint_providers.core.service_container import ServiceProvider
from endpoint_providers.schemas.weather import WeatherForecast
from endpoint_providers.services.weather_forecasts import WeatherForecastRepository


class WeatherForecastEndpoints(BaseEndpointProvider):

    def __init__(self, provider: ServiceProvider):
        super().__init__(provider)
        self._repo = provider.get_required_service(WeatherForecastRepository)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route(
            "/weatherforecast",
            self.forecast_handler,
            methods=["GET"],
            name="GetWeatherForecast",
            response_model=list[WeatherForecast],
            tags=["weather"],
        )
        return app

    def forecast_handler(self, count: int):
        """Forecasts for the next `count` days."""
        if count <= 0:
            return Response(status_code=status.HTTP_400_BAD_REQUEST)
        return self._repo.get_next(count)
