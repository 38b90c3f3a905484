# system/config.py
import json
import os
from pathlib import Path
from dataclasses import dataclass, fields

CONFIG_DIR = Path("data")  # Folder holding config.json and the API log

DEFAULTS = {
    "env": "dev",
    "debug": True,
    "timezone": "America/Sao_Paulo",
    "day_reset_hour": 4,
    "log_level": "INFO",
}

# Environment variable -> (config key, caster)
ENV_OVERRIDES = {
    "FLUIA_ENV": ("env", str),
    "FLUIA_DEBUG": ("debug", lambda v: v.lower() in ("true", "1", "yes")),
    "FLUIA_TIMEZONE": ("timezone", str),
    "FLUIA_DAY_RESET_HOUR": ("day_reset_hour", int),
    "FLUIA_LOG_LEVEL": ("log_level", lambda v: v.upper()),
}


@dataclass
class Config:
    data_dir: Path
    env: str = "dev"
    debug: bool = True
    timezone: str = "America/Sao_Paulo"
    day_reset_hour: int = 4  # Calendar day rolls over at 04:00 local time
    log_level: str = "INFO"

    @classmethod
    def load(cls, config_dir: Path = CONFIG_DIR) -> "Config":
        config_dir = Path(config_dir)
        cfg_path = config_dir / "config.json"

        # Missing or empty file: write defaults
        if not cfg_path.exists() or cfg_path.stat().st_size == 0:
            config_dir.mkdir(parents=True, exist_ok=True)
            with cfg_path.open("w", encoding="utf-8") as f:
                json.dump(DEFAULTS, f, indent=2)
            raw = dict(DEFAULTS)
        else:
            try:
                with cfg_path.open("r", encoding="utf-8") as f:
                    raw = json.load(f)
            except (json.JSONDecodeError, OSError):
                raw = dict(DEFAULTS)
                with cfg_path.open("w", encoding="utf-8") as f:
                    json.dump(raw, f, indent=2)

        raw = cls._apply_env(raw)
        known = {f.name for f in fields(cls)} - {"data_dir"}
        return cls(data_dir=config_dir, **{k: v for k, v in raw.items() if k in known})

    @staticmethod
    def _apply_env(raw: dict) -> dict:
        merged = dict(raw)
        for env_name, (key, cast) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is None or value == "":
                continue
            try:
                merged[key] = cast(value)
            except ValueError:
                # Keep the file value when the override is malformed
                continue
        return merged
