"""Application settings and logging setup.

Settings come from environment variables, optionally loaded from a ``.env``
file. Business constants (room prices, capacities, tax and discount tiers)
live in the domain modules and are not configurable.
"""
import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    """Runtime configuration for the API process"""
    app_title: str = "Hotel Reservation API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8000, ge=1, le=65535)
    seed_route_graph: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_title=os.getenv("APP_TITLE", "Hotel Reservation API"),
            app_version=os.getenv("APP_VERSION", "1.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
            seed_route_graph=os.getenv("SEED_ROUTE_GRAPH", "true").lower() == "true",
        )


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


settings = Settings.from_env()
