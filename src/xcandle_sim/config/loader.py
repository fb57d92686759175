"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from xcandle_sim.config.models import MonitoringConfig, SimulatorConfig
from xcandle_sim.strategy.models import XCandleParams


def load_config(path: str | Path) -> SimulatorConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    strategy = _parse_strategy(data.get("strategy") or {})
    monitoring = _parse_monitoring(data.get("monitoring") or {})

    return SimulatorConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        strategy=strategy,
        monitoring=monitoring,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    """Write a lock recording the file hash and the strategy it resolves to.

    The config is parsed first, so a file that would not load cannot be frozen.
    """
    path = Path(path)
    config = load_config(path)
    lock_path = _lock_path_for(path, lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": compute_config_hash(path),
        "name": config.name,
        "version": config.version,
        "strategy": serialize_config(config)["strategy"],
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def read_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> Optional[dict[str, Any]]:
    lock_path = _lock_path_for(Path(path), lock_path)
    if not lock_path.exists():
        return None
    return json.loads(lock_path.read_text(encoding="utf-8"))


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    payload = read_config_lock(path, lock_path)
    if payload is None:
        return False
    return payload.get("config_hash") == compute_config_hash(path)


def _lock_path_for(path: Path, lock_path: Optional[str | Path]) -> Path:
    if lock_path is None:
        return path.with_suffix(path.suffix + ".lock.json")
    return Path(lock_path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_strategy(data: dict[str, Any]) -> XCandleParams:
    if not isinstance(data, dict):
        raise ValueError("Invalid strategy: expected a mapping")
    return XCandleParams.from_dict(data)


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )


def serialize_config(config: SimulatorConfig) -> dict[str, Any]:
    payload = asdict(config)
    strategy = config.strategy
    for key in ("entry_window_start", "entry_window_end", "time_exit"):
        payload["strategy"][key] = getattr(strategy, key).strftime("%H:%M")
    return payload
