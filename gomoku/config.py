# gomoku/config.py
from dataclasses import dataclass, field
from typing import Optional
import logging
import os
import sys
import tomllib  # python >=3.11; if not available use toml package

LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class UIConfig:
    app_name: str = "Gomoku"
    hover_opacity: float = 0.5
    poll_interval_ms: int = 50
    # False restores last-response-wins for overlapping requests
    discard_stale_responses: bool = True
    min_board_px: int = 360


@dataclass
class GatewayConfig:
    seed: Optional[int] = None  # seed for the random step picker


@dataclass
class Config:
    ui: UIConfig = field(default_factory=UIConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        # naive merge; unknown keys are ignored
        for section in ("ui", "gateway"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger."""
    level = (level or CONFIG.log_level).upper()
    root = logging.getLogger()
    if not any(getattr(h, "_gomoku", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        handler._gomoku = True
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("GOMOKU_CONFIG_TOML", "config.toml"))
# allow env override of the log level for quick debugging
if os.environ.get("GOMOKU_LOG_LEVEL"):
    CONFIG.log_level = os.environ["GOMOKU_LOG_LEVEL"]
