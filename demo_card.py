#!/usr/bin/env python3
import asyncio
import logging
from card import CardConfig, WallClockCard
from weather.providers import create_default_registry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def run():
    config = CardConfig.from_env()
    registry = create_default_registry()

    print("Available weather providers:")
    for provider in registry.get_all_providers():
        print(f"  {provider.id}: {provider.description}")

    card = WallClockCard(config, registry=registry)
    await card.connect()

    if card.weather_component.error:
        logger.error(f"Error getting weather: {card.weather_component.error}")

    print()
    for line in card.render():
        print(line)

    weather = card.weather_component.weather_data
    if weather and weather.attribution:
        print(f"\n{weather.attribution}")


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
