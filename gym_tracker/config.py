"""Configuration management for the gym tracker."""

import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv


# load environment variables from .env file
load_dotenv()

DEFAULT_STORE_KEY = "gymTrackerDataV1"


@dataclass(frozen=True)
class PathConfig:
    """File path configuration."""

    base_dir: Path
    data_dir: Path
    output_dir: Path

    @classmethod
    def default(cls) -> "PathConfig":
        """
        Create default path configuration.
        """
        base = Path(__file__).parent.parent
        return cls(
            base_dir=base,
            data_dir=base / "data",
            output_dir=base / "output",
        )

    @classmethod
    def from_env(cls) -> "PathConfig":
        """
        Create path configuration, honouring directory overrides
        from the environment.
        """
        default = cls.default()
        data_dir = os.getenv("GYM_TRACKER_DATA_DIR")
        output_dir = os.getenv("GYM_TRACKER_OUTPUT_DIR")

        return cls(
            base_dir=default.base_dir,
            data_dir=Path(data_dir).expanduser() if data_dir else default.data_dir,
            output_dir=(
                Path(output_dir).expanduser() if output_dir else default.output_dir
            ),
        )


@dataclass(frozen=True)
class AppConfig:
    """Application-wide configuration."""

    paths: PathConfig
    store_key: str = DEFAULT_STORE_KEY

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Load full application configuration.
        """
        return cls(
            paths=PathConfig.from_env(),
            store_key=os.getenv("GYM_TRACKER_STORE_KEY") or DEFAULT_STORE_KEY,
        )
