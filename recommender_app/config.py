"""Configuration helpers for the outfit recommender app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_SCORE_THRESHOLD = 40.0
DEFAULT_TEMPERATURE_SENSITIVITY = 2.5


def _as_bool(value: object) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class RecommenderConfig:
    """Configuration values for the recommender app.

    Engine tunables live next to the collaborator settings so a deployment can
    move the acceptance threshold without touching code.
    """

    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    weather_api_key: Optional[str] = None
    default_location: Optional[str] = None
    wardrobe_db_path: Optional[str] = None
    parallel_categories: bool = False
    default_temperature_sensitivity: float = DEFAULT_TEMPERATURE_SENSITIVITY
    environment: str | None = None

    def __post_init__(self) -> None:
        if self.score_threshold < 0:
            raise ValueError(f"score_threshold must not be negative, got {self.score_threshold}")
        if not 0.0 <= self.default_temperature_sensitivity <= 5.0:
            raise ValueError(
                "default_temperature_sensitivity must be between 0 and 5, "
                f"got {self.default_temperature_sensitivity}"
            )

    @classmethod
    def from_env(cls) -> "RecommenderConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("RECOMMENDER_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        threshold = get_value("score_threshold", str(DEFAULT_SCORE_THRESHOLD))
        sensitivity = get_value("default_temperature_sensitivity", str(DEFAULT_TEMPERATURE_SENSITIVITY))

        return cls(
            score_threshold=float(threshold or DEFAULT_SCORE_THRESHOLD),
            weather_api_key=get_value("openweather_api_key"),
            default_location=get_value("default_location"),
            wardrobe_db_path=get_value("wardrobe_db_path"),
            parallel_categories=_as_bool(get_value("parallel_categories", "false")),
            default_temperature_sensitivity=float(sensitivity or DEFAULT_TEMPERATURE_SENSITIVITY),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
