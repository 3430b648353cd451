"""Application settings and configuration."""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(env_path)


@dataclass
class Settings:
    """Application configuration settings."""

    # Neo4j settings
    neo4j_uri: str
    neo4j_user: str
    neo4j_password: str
    neo4j_database: Optional[str] = None

    # Application settings
    log_level: str = "INFO"

    # Demo settings
    demo_actor: str = "Tom Hanks"
    demo_co_actor: str = "Meg Ryan"
    demo_limit: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            neo4j_uri=os.getenv("NEO4J_URI", "bolt://localhost:7687"),
            neo4j_user=os.getenv("NEO4J_USER", "neo4j"),
            neo4j_password=os.getenv("NEO4J_PASSWORD", "movietest"),
            neo4j_database=os.getenv("NEO4J_DATABASE") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            demo_actor=os.getenv("DEMO_ACTOR", "Tom Hanks"),
            demo_co_actor=os.getenv("DEMO_CO_ACTOR", "Meg Ryan"),
            demo_limit=int(os.getenv("DEMO_LIMIT", "10")),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
