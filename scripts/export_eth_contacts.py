#!/usr/bin/env python3
"""Print contacts that have an ETH address or ENS name, one JSON object per line.

Reads the Neo4j contact source and the JSON preference file configured in .env
(NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD, ETHCONTACTS_PREFS_DIR). Run from repo root.
"""
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from ethcontacts.application import ContactService  # noqa: E402
from ethcontacts.infrastructure import (  # noqa: E402
    JsonFilePreferenceStore,
    Neo4jContactSource,
    Settings,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = Settings.from_env()
    driver = settings.neo4j_driver()
    try:
        service = ContactService(
            Neo4jContactSource(driver),
            JsonFilePreferenceStore(settings.prefs_dir, settings.prefs_namespace),
        )
        contacts = service.list_with_either_eth_field()
        for contact in contacts:
            print(json.dumps(asdict(contact), ensure_ascii=False))
        logger.info("Exported %d contact(s) with ETH data", len(contacts))
        return 0
    finally:
        driver.close()


if __name__ == "__main__":
    sys.exit(main())
