"""Basic example for total_connect_api."""

import asyncio
import logging

import aiohttp
from total_connect_api import (
    _LOGGER,
    ApiManager,
    ArmingState,
    ProtocolGeneration,
    TotalConnectError,
)


async def do_stuff(client):
    """Exercise some API functions."""
    location_id = await client.resolve_location()
    print("*** Location ***\n", location_id, client.topology)

    status = await client.get_status()
    print("*** Status ***\n", status.name, client.last_panel_state)


async def main():
    """Run Basic Total Connect example."""

    _LOGGER.setLevel(10)
    _LOGGER.addHandler(logging.StreamHandler())

    user = input("User: ")
    password = input("Password: ")
    legacy = input("Use legacy API [y/N]: ").strip().lower() == "y"
    async with aiohttp.ClientSession() as aiohttp_session:
        client = ApiManager(
            user,
            password,
            aiohttp_session,
            ProtocolGeneration.LEGACY if legacy else ProtocolGeneration.REST,
            max_poll_attempts=60,
        )

        try:
            await do_stuff(client)

            if input("Disarm now [y/N]: ").strip().lower() == "y":
                state = await client.arm_system(ArmingState.DISARMED)
                print("*** Disarm ***\n", state.name)

        except TotalConnectError as err:
            print(f"Error: {err.args}")


if __name__ == "__main__":
    asyncio.run(main())
