"""
Workflow: OTA Sync
==================
Pushes the hotel's room inventory to the OTA partner once, outside the
hourly schedule the gateway runs on its own.

USAGE:
    # Sync now
    uv run python -m workflows.ota_sync

    # Show the payload that would be pushed, without pushing
    uv run python -m workflows.ota_sync --dry-run
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio
import json

from loguru import logger

from infra.ota import OTAClient
from lib.hotel_api import HotelApiClient
from services.gateway import OTASyncService, build_ota_payload, load_config, setup_logging


async def run(dry_run: bool = False) -> bool:
    """Run one OTA sync. Returns True on success."""
    config = load_config()

    async with HotelApiClient(config.api_base_url, timeout=config.upstream_timeout) as hotel_client:
        if dry_run:
            hotel = await hotel_client.fetch_hotel()
            payload = build_ota_payload(hotel)
            logger.info(f"Dry run: would push {len(payload['rooms'])} rooms to {config.ota_endpoint}")
            print(json.dumps(payload, indent=2, default=str))
            return True

        ota_client = OTAClient(
            endpoint=config.ota_endpoint,
            api_key=config.ota_api_key,
            timeout=config.upstream_timeout,
        )
        try:
            result = await OTASyncService(hotel_client, ota_client).sync(trigger="cli")
        finally:
            await ota_client.close()

    if result.ok:
        logger.info("OTA sync complete")
    else:
        logger.error(f"OTA sync failed during {result.stage_failed.value}: {result.error}")
    return result.ok


def main():
    parser = argparse.ArgumentParser(description="Push room inventory to the OTA partner once")
    parser.add_argument("--dry-run", action="store_true", help="Print the payload instead of pushing it")
    args = parser.parse_args()

    setup_logging("INFO")

    ok = asyncio.run(run(dry_run=args.dry_run))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
