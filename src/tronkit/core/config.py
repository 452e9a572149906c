"""
The TronConfig class - immutable service configuration, loaded once at startup and passed to constructors
"""
import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tronkit.core.exceptions import ConfigError
from tronkit.core.formats import TRON, BALANCE

__all__ = ["TronConfig"]

ENV_PREFIX = "TRON_"


@dataclass(frozen=True)
class TronConfig:
    port: str = "9527"
    tron_api_url: str = "https://api.trongrid.io"
    tronscan_api_url: str = "https://apilist.tronscanapi.com"
    api_key: Optional[str] = None
    contract_address: str = TRON.USDT_CONTRACT
    contract_symbol: str = "USDT"
    decimals: int = 6
    trc10_token_id: str = "1002992"
    trc10_decimals: int = 0
    request_timeout: float = 10.0
    max_retries: int = 1
    retry_backoff: float = 0.5
    batch_limit: int = BALANCE.MAX_BATCH
    batch_workers: int = 4
    log_level: str = "INFO"

    def __post_init__(self):
        # --- Validation --- #
        if not str(self.port).isdigit():
            raise ConfigError(f"Port must be numeric: {self.port}")
        for name in ("decimals", "trc10_decimals"):
            value = getattr(self, name)
            if not 0 <= value <= BALANCE.MAX_DECIMALS:
                raise ConfigError(f"{name} must lie in [0, {BALANCE.MAX_DECIMALS}]: {value}")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        if self.max_retries < 0:
            raise ConfigError("max_retries cannot be negative")
        if self.retry_backoff < 0:
            raise ConfigError("retry_backoff cannot be negative")
        if not 1 <= self.batch_limit <= BALANCE.MAX_BATCH:
            raise ConfigError(f"batch_limit must lie in [1, {BALANCE.MAX_BATCH}]")
        if self.batch_workers < 1:
            raise ConfigError("batch_workers must be at least 1")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, values: dict) -> "TronConfig":
        """
        Build a config from a mapping of field names. Unknown keys are rejected, values are coerced to the field type.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = set(values) - set(known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs = {}
        for name, value in values.items():
            kwargs[name] = _coerce(name, known[name].type, value)
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path | str) -> "TronConfig":
        """
        Load a JSON config file, e.g. {"port": "9527", "tron_api_url": "https://api.trongrid.io"}
        """
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                values = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Unable to read config file {path}: {e}") from e
        if not isinstance(values, dict):
            raise ConfigError(f"Config file {path} must hold a JSON object")
        return cls.from_dict(values)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None, prefix: str = ENV_PREFIX) -> "TronConfig":
        """
        Read TRON_* variables (e.g. TRON_API_KEY, TRON_REQUEST_TIMEOUT). A .env file is loaded first if present;
        variables already set in the environment win.
        """
        load_dotenv(env_file)
        values = {}
        for f in fields(cls):
            raw = os.environ.get(prefix + f.name.upper())
            if raw is not None and raw != "":
                values[f.name] = raw
        return cls.from_dict(values)

    def with_overrides(self, **changes) -> "TronConfig":
        return replace(self, **changes)


def _coerce(name: str, field_type, value):
    if value is None:
        return None
    type_name = field_type if isinstance(field_type, str) else getattr(field_type, "__name__", str(field_type))
    try:
        if type_name == "int":
            if isinstance(value, bool):
                raise ValueError("boolean is not an integer")
            return int(value)
        if type_name == "float":
            return float(value)
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e
