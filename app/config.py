import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables only for local development
if os.path.exists(".env"):
    load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_DATA_FILE = os.path.join("data", "strings.json")


@dataclass
class Settings:
    """Runtime configuration for the String Analyzer Service."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    data_file: str = DEFAULT_DATA_FILE
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        port = os.getenv("PORT")
        try:
            port = int(port) if port else DEFAULT_PORT
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port!r}")

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            data_file=os.getenv("DATA_FILE", DEFAULT_DATA_FILE),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
