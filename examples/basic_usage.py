"""Basic usage of the Pirate Weather client and a running location service."""

import asyncio
import os

import httpx

from location_service import PirateWeatherClient
from location_service.models import SavedLocation

SERVICE_URL = os.environ.get("SERVICE_URL", "http://localhost:3002")


async def main() -> None:
    # Talk to Pirate Weather directly
    token = os.environ["PIRATE_WEATHER_TOKEN"]
    london = SavedLocation.default()
    async with PirateWeatherClient() as pw:
        weather = await pw.forecast(token, london.latitude, london.longitude)
    print("=== Pirate Weather ===")
    print(f"  {weather.currently.summary}, {weather.currently.temperature}°C ({weather.timezone})")

    # Read the service, then move it if we hold the admin token
    async with httpx.AsyncClient(base_url=SERVICE_URL) as client:
        resp = await client.get("/location")
        print(f"\n=== GET /location -> {resp.status_code} ===")
        print(f"  {resp.text[:200]}")

        auth = os.environ.get("AUTH_TOKEN")
        if not auth:
            return
        paris = SavedLocation(name="Paris", latLng=(48.8566, 2.3522))
        resp = await client.post(
            "/location",
            content=paris.to_json(),
            headers={"Authorization": auth, "Content-Type": "application/json"},
        )
        print(f"\n=== POST /location -> {resp.status_code} ===")


if __name__ == "__main__":
    asyncio.run(main())
