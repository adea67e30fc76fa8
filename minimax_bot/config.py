# minimax_bot/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import logging
import os
import tomllib

logger = logging.getLogger(__name__)

# Centipawns. The king carries no material value.
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 300,
    "BISHOP": 300,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 0,
}

STRATEGY_FULL = "full"
STRATEGY_PRUNED = "pruned"
STRATEGY_MINIMAX = "minimax"
STRATEGIES = (STRATEGY_FULL, STRATEGY_PRUNED, STRATEGY_MINIMAX)


class ConfigError(ValueError):
    """Raised for configuration values the engine cannot run with."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class SearchConfig:
    depth: int = 5  # used when adaptive depth is off or no clock is given
    strategy: str = STRATEGY_FULL
    prune_k: int = 10  # moves kept from each end of the ranking
    adaptive_depth: bool = True
    opening_ms: int = 1000
    opening_depth: int = 3
    pressure_ratio: float = 0.95
    pressure_depth: int = 4
    default_depth: int = 5


@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "INFO"

    def validate(self) -> "Config":
        s = self.search
        if s.strategy not in STRATEGIES:
            raise ConfigError(f"unknown strategy {s.strategy!r}; expected one of {', '.join(STRATEGIES)}")
        for name in ("depth", "opening_depth", "pressure_depth", "default_depth", "prune_k"):
            value = getattr(s, name)
            if not _is_int(value):
                raise ConfigError(f"search.{name} must be an integer, got {value!r}")
            if value < 1:
                raise ConfigError(f"search.{name} must be >= 1, got {value}")
        if not _is_number(s.opening_ms):
            raise ConfigError(f"search.opening_ms must be a number, got {s.opening_ms!r}")
        if not _is_number(s.pressure_ratio):
            raise ConfigError(f"search.pressure_ratio must be a number, got {s.pressure_ratio!r}")
        if not 0 < s.pressure_ratio <= 1:
            raise ConfigError(f"search.pressure_ratio must be in (0, 1], got {s.pressure_ratio}")
        if not isinstance(s.adaptive_depth, bool):
            raise ConfigError(f"search.adaptive_depth must be true or false, got {s.adaptive_depth!r}")

        values = self.eval.piece_values
        missing = set(PIECE_VALUES) - set(values)
        if missing:
            raise ConfigError(f"eval.piece_values is missing {', '.join(sorted(missing))}")
        unknown = set(values) - set(PIECE_VALUES)
        if unknown:
            raise ConfigError(f"eval.piece_values has unknown pieces {', '.join(sorted(unknown))}")
        for name, value in values.items():
            if not _is_int(value):
                raise ConfigError(f"eval.piece_values.{name} must be an integer, got {value!r}")
        if not isinstance(self.log_level, str) or not isinstance(
                logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"unknown log_level {self.log_level!r}")
        return self

    @staticmethod
    def load_from_toml(path: str = "minimax_bot.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if not hasattr(target, k):
                    logger.warning("Ignoring unknown config key %s.%s in %s", section, k, path)
                    continue
                if k == "piece_values":
                    if not isinstance(v, dict):
                        raise ConfigError(f"eval.piece_values must be a table in {path}, got {v!r}")
                    v = {**target.piece_values, **{name.upper(): val for name, val in v.items()}}
                setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg


def load_config(path: Optional[str] = None) -> Config:
    """Load the TOML config (if present) and apply environment overrides."""
    cfg = Config.load_from_toml(path or os.environ.get("MINIMAX_BOT_CONFIG_TOML", "minimax_bot.toml"))
    depth = os.environ.get("MINIMAX_BOT_DEPTH")
    if depth:
        try:
            cfg.search.depth = int(depth)
        except ValueError:
            raise ConfigError(f"MINIMAX_BOT_DEPTH must be an integer, got {depth!r}") from None
        # An explicit depth means the caller wants it used as-is.
        cfg.search.adaptive_depth = False
    strategy = os.environ.get("MINIMAX_BOT_STRATEGY")
    if strategy:
        cfg.search.strategy = strategy
    return cfg.validate()
