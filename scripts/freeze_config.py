import sys
from pathlib import Path

from xcandle_sim.config import freeze_config, read_config_lock, verify_config_lock


def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("Usage: python scripts/freeze_config.py <config_path>")
    path = Path(sys.argv[1])
    lock_path = freeze_config(path)
    lock = read_config_lock(path, lock_path)
    ok = verify_config_lock(path, lock_path)
    status = "ok" if ok else "mismatch"
    print(f"Frozen {lock['name']} v{lock['version']}: {path} -> {lock_path} ({status})")
    for key, value in lock["strategy"].items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
