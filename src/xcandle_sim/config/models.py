"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass

from xcandle_sim.strategy.models import XCandleParams


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class SimulatorConfig:
    name: str
    version: str
    run_id_prefix: str
    strategy: XCandleParams = XCandleParams()
    monitoring: MonitoringConfig = MonitoringConfig()
