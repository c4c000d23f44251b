"""Example usage of the async blob client."""

import asyncio
import json
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from registry_blob_client import (
    BlobClient,
    HTTPStatusError,
    ImageConfig,
    RegistryError,
    calculate_digest,
)

# Set up logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


async def main():
    """Upload a config blob unless present, then read it back."""
    registry_url = "http://localhost:15000"
    repository = "examples/blobs"

    config_data = json.dumps({"architecture": "amd64", "os": "linux"}).encode("utf-8")
    digest = calculate_digest(config_data)

    try:
        async with BlobClient(registry_url) as client:
            if not await client.check_connectivity():
                logger.error(f"Registry at {registry_url} is not reachable")
                return

            if await client.check_blob_exists(repository, digest):
                logger.info(f"Blob {digest[:19]} already present, skipping upload")
            else:
                await client.upload_blob(repository, config_data, digest)
                logger.info(f"Uploaded {digest[:19]}")

            config = await client.get_config(repository, digest, ImageConfig)
            logger.info(f"Config: {config.os}/{config.architecture}")

            async with await client.download_blob(repository, digest) as stream:
                logger.info(f"Download status {stream.status}")

    except HTTPStatusError as e:
        logger.error(f"Registry answered {e.status}; blob state unknown")
    except RegistryError as e:
        logger.error(f"Registry error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
