"""
Settings read from environment variables. Loads .env (repo root or cwd) with python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from neo4j import GraphDatabase

_REPO_ROOT = Path(__file__).resolve().parents[3]


def load_env() -> None:
    """Load the first .env found in the repo root or the current directory."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    prefs_dir: Path = Path(".ethcontacts")
    prefs_namespace: str = "contact_prefs"
    default_region: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        load_env()
        region = os.environ.get("ETHCONTACTS_DEFAULT_REGION", "").strip().upper()
        return cls(
            neo4j_uri=os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip(),
            neo4j_user=os.environ.get("NEO4J_USER", "neo4j").strip(),
            neo4j_password=os.environ.get("NEO4J_PASSWORD", "password").strip(),
            prefs_dir=Path(os.environ.get("ETHCONTACTS_PREFS_DIR", ".ethcontacts").strip()),
            prefs_namespace=os.environ.get("ETHCONTACTS_PREFS_NAMESPACE", "contact_prefs").strip()
            or "contact_prefs",
            default_region=region or None,
        )

    def neo4j_driver(self):
        return GraphDatabase.driver(self.neo4j_uri, auth=(self.neo4j_user, self.neo4j_password))
