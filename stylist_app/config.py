"""Configuration helpers for the closet stylist app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from logic.outfit_assembler import AssemblerSettings


@dataclass
class StylistConfig:
    """Configuration values for the stylist app.

    The assembler limits default to the values the mobile client was tuned
    against; ``random_seed`` pins candidate sampling for reproducible runs.
    """

    random_seed: Optional[int] = None
    max_attempts: int = 10
    per_pool_cap: int = 2
    strict_tier_cap: int = 3
    target_outfit_count: int = 5
    exhaustive_limit: int = 64
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is overridden key by key by environment variables.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLIST_CONFIG_DIR", "config/environments"))
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

        def get_int(key: str, default: int) -> int:
            raw = get_value(key)
            if raw in (None, ""):
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(f"Config value '{key}' must be an integer, got {raw!r}") from exc

        seed = get_value("stylist_random_seed")
        return cls(
            random_seed=int(seed) if seed not in (None, "") else None,
            max_attempts=get_int("stylist_max_attempts", 10),
            per_pool_cap=get_int("stylist_per_pool_cap", 2),
            strict_tier_cap=get_int("stylist_strict_tier_cap", 3),
            target_outfit_count=get_int("stylist_target_outfit_count", 5),
            exhaustive_limit=get_int("stylist_exhaustive_limit", 64),
            log_level=str(get_value("log_level", "INFO") or "INFO").upper(),
            environment=env_name,
        )

    def assembler_settings(self) -> AssemblerSettings:
        return AssemblerSettings(
            max_attempts=max(1, self.max_attempts),
            per_pool_cap=max(1, self.per_pool_cap),
            strict_tier_cap=max(0, self.strict_tier_cap),
            target_outfit_count=max(1, self.target_outfit_count),
            exhaustive_limit=max(0, self.exhaustive_limit),
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal flat ``key: value`` YAML file."""

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
