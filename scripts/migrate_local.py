"""
Local to cloud migration script.

Activates the store the way the application does and, when the cloud store
is active, pulls the local store into it.

Usage:
    python scripts/migrate_local.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

from trainlog.core.config import Settings
from trainlog.core.exceptions import FatalStoreError
from trainlog.core.flags import SQLFlagStore
from trainlog.core.logging import configure_logging
from trainlog.db.provider import ContainerProvider
from trainlog.sync.migration import MigrationState


async def main() -> int:
    config = Settings()
    configure_logging(config.LOG_LEVEL)
    flags = SQLFlagStore(config.defaults_path)
    provider = ContainerProvider.from_settings(config, flags)
    try:
        container = await provider.activate()
        print(f"Active store: {container.kind.value} ({container.location.url})")
        report = await provider.migrate_local_store_to_cloud_if_needed()
    finally:
        provider.close()
        flags.close()

    print(f"Migration state: {report.state.value}")
    if report.state is MigrationState.DONE:
        print(f"  workouts copied:  {report.workouts}")
        print(f"  favorites copied: {report.favorites}")
        print(f"  settings copied:  {'yes' if report.settings else 'no'}")
    if report.state is MigrationState.FAILED:
        print(f"  failed step: {report.failed_step}")
        print(f"  error: {report.error}")
        return 1
    return 0


if __name__ == "__main__":
    print("=" * 50)
    print("TrainLog Local to Cloud Migration")
    print("=" * 50)
    print()

    try:
        sys.exit(asyncio.run(main()))
    except FatalStoreError as e:
        print()
        print("=" * 50)
        print("ERROR: No usable store!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
