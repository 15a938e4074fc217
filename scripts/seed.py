"""CLI for loading profiles and hives from a JSON file into the local stores"""

import argparse
import asyncio
import json
from pathlib import Path

from loguru import logger

from hiver.config import settings
from hiver.domain.hive import Hive
from hiver.domain.profile import Profile
from hiver.hive_store.local import LocalHiveStore
from hiver.profile_store.local import LocalProfileStore


async def seed(
    data: dict,
    profile_store: LocalProfileStore,
    hive_store: LocalHiveStore,
) -> tuple[int, int]:
    """Add every profile and hive in data that the stores do not hold yet."""
    profiles = 0
    for profile_data in data.get("profiles", []):
        profile = Profile(**profile_data)
        if await profile_store.get_profile(profile.id) is None:
            await profile_store.add_profile(profile)
            profiles += 1

    hives = 0
    for hive_data in data.get("hives", []):
        hive = Hive(**hive_data)
        if await hive_store.get_hive(hive.id) is None:
            await hive_store.add_hive(hive)
            hives += 1

    return profiles, hives


def main(
    in_file: str,
    local_outfile_profile_store: str,
    local_outfile_hive_store: str,
) -> None:
    with open(in_file, "r") as f:
        data = json.load(f)

    profile_store = LocalProfileStore(filepath=Path(local_outfile_profile_store))
    hive_store = LocalHiveStore(filepath=Path(local_outfile_hive_store))

    profiles, hives = asyncio.run(seed(data, profile_store, hive_store))
    logger.info(f"Seeded {profiles} profiles and {hives} hives from {in_file}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--in-file", type=str, required=True, help="JSON file with 'profiles' and 'hives' lists"
    )
    parser.add_argument(
        "--outfile-profile-store",
        type=str,
        required=False,
        help="Local output profile store file",
        default=settings.local_profile_store_path,
    )
    parser.add_argument(
        "--outfile-hive-store",
        type=str,
        required=False,
        help="Local output hive store file",
        default=settings.local_hive_store_path,
    )

    args = parser.parse_args()

    main(
        in_file=args.in_file,
        local_outfile_profile_store=args.outfile_profile_store,
        local_outfile_hive_store=args.outfile_hive_store,
    )
