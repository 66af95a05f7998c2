"""Seed the config store with alerter configs.

Reads a JSON file mapping alerter keys to configs, e.g.::

    {"ops-slack": {"type": "slack", "options": {"channel": "#ops"}}}

and writes each record under the configured alerter prefix.

Usage:
    python scripts/seed_alerter_configs.py configs.json [--redis-url URL]
"""

import argparse
import asyncio
import json
from pathlib import Path

from volt_common.config import get_settings
from volt_common.dal import DalClient
from volt_common.messaging.redis_client import RedisClient
from volt_common.models import AlerterConfig


async def main(path: Path, redis_url: str | None) -> None:
    """Write every config in *path* to the config store."""
    settings = get_settings()
    records = json.loads(path.read_text(encoding="utf-8"))

    redis = RedisClient(redis_url or settings.redis_url)
    await redis.connect()
    try:
        dal = DalClient(redis, prefix=settings.alerter_config_prefix)
        for key, raw in records.items():
            await dal.put_alerter_config(key, AlerterConfig.model_validate(raw))
            print(f"seeded {key}")
    finally:
        await redis.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path, help="JSON file of {key: config}")
    parser.add_argument("--redis-url", default=None)
    args = parser.parse_args()
    asyncio.run(main(args.path, args.redis_url))
