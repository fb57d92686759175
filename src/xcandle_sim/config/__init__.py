"""Config loading and freezing."""

from xcandle_sim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    read_config_lock,
    serialize_config,
    verify_config_lock,
)
from xcandle_sim.config.models import MonitoringConfig, SimulatorConfig

__all__ = [
    "MonitoringConfig",
    "SimulatorConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "read_config_lock",
    "serialize_config",
    "verify_config_lock",
]
