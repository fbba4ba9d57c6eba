"""Weather Schemas — camelCase serialization and derived Fahrenheit."""

from datetime import date

from endpoint_providers.schemas.weather import WeatherForecast


def test_serializes_camel_case_with_fahrenheit():
    forecast = WeatherForecast(date=date(2026, 1, 2), temperature_c=20, summary="Mild")
    assert forecast.model_dump(by_alias=True, mode="json") == {
        "date": "2026-01-02",
        "temperatureC": 20,
        "summary": "Mild",
        "temperatureF": 67,
    }


def test_fahrenheit_truncates_toward_zero():
    assert WeatherForecast(date=date(2026, 1, 2), temperature_c=-20).temperature_f == -3
    assert WeatherForecast(date=date(2026, 1, 2), temperature_c=0).temperature_f == 32
