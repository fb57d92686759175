from datetime import time
from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from xcandle_sim.config import (
    freeze_config,
    load_config,
    read_config_lock,
    serialize_config,
    verify_config_lock,
)
from xcandle_sim.strategy import XCandleParams

SAMPLE = Path(__file__).resolve().parents[1] / "configs" / "xcandle_v1.yaml"


def test_load_config_sample():
    config = load_config(SAMPLE)
    assert config.name == "xcandle"
    assert config.version == "1"
    assert config.strategy.entry_window_end == time(11, 30)
    assert config.strategy.time_exit == time(14, 0)
    assert config.strategy.stop_lookback_bars == 3
    assert config.monitoring.audit_log_path == "runtime/audit.log"


def test_defaults_match_strategy(tmp_path):
    path = tmp_path / "minimal.yaml"
    path.write_text("name: minimal\nversion: 2\n", encoding="utf-8")

    config = load_config(path)

    assert config.run_id_prefix == "minimal"
    assert config.strategy == XCandleParams()


def test_missing_required_key(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("version: 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Missing required config key: name"):
        load_config(path)


def test_config_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_invalid_time_value(tmp_path):
    path = tmp_path / "bad_time.yaml"
    path.write_text('name: x\nversion: 1\nstrategy:\n  time_exit: "2pm"\n', encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid time_exit"):
        load_config(path)


def test_window_must_be_ordered():
    with pytest.raises(ValueError):
        XCandleParams.from_dict({"entry_window_start": "12:00", "entry_window_end": "11:30"})


def test_time_exit_before_window_end_is_rejected():
    with pytest.raises(ValueError, match="time_exit"):
        XCandleParams(time_exit=time(11, 0))
    XCandleParams(entry_window_end=time(14, 0), time_exit=time(14, 0))


def test_unknown_timezone_is_rejected(tmp_path):
    with pytest.raises(ValueError, match="Invalid timezone: Mars/Olympus"):
        XCandleParams(timezone="Mars/Olympus")

    path = tmp_path / "bad_tz.yaml"
    path.write_text("name: x\nversion: 1\nstrategy:\n  timezone: Nowhere/City\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid timezone"):
        load_config(path)


def test_serialize_config_renders_times():
    payload = serialize_config(load_config(SAMPLE))
    assert payload["strategy"]["entry_window_start"] == "00:00"
    assert payload["strategy"]["time_exit"] == "14:00"
    assert payload["strategy"]["timezone"] == "Europe/Berlin"


def test_freeze_and_verify(tmp_path):
    target = tmp_path / "xcandle_v1.yaml"
    target.write_text(SAMPLE.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    target.write_text(target.read_text(encoding="utf-8") + "\n# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)


def test_lock_records_resolved_strategy(tmp_path):
    target = tmp_path / "xcandle_v1.yaml"
    target.write_text(SAMPLE.read_text(encoding="utf-8"), encoding="utf-8")

    lock = read_config_lock(target, freeze_config(target))

    assert lock["name"] == "xcandle"
    assert lock["version"] == "1"
    assert lock["strategy"]["time_exit"] == "14:00"
    assert lock["strategy"]["stop_lookback_bars"] == 3
    assert read_config_lock(tmp_path / "missing.yaml") is None


def test_invalid_config_cannot_be_frozen(tmp_path):
    target = tmp_path / "broken.yaml"
    target.write_text('name: x\nversion: 1\nstrategy:\n  time_exit: "09:00"\n', encoding="utf-8")
    with pytest.raises(ValueError, match="time_exit"):
        freeze_config(target)
    assert not (tmp_path / "broken.yaml.lock.json").exists()
