import os
from pathlib import Path
from threading import RLock


APP_NAME = "rooms_sections_strategy"
APP_VERSION = "0.1.0"
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE_PATH = PROJECT_ROOT / ".env"


def load_local_env(env_path: Path) -> None:
    if not env_path.exists():
        return

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]

        os.environ.setdefault(key, value)


load_local_env(ENV_FILE_PATH)


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_path(name: str, default: str) -> Path:
    raw = os.getenv(name, default)
    path = Path(raw)
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    if not value:
        return default
    return value


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


APP_DIR = Path(__file__).resolve().parent.parent
STRATEGY_LOG_ENABLED = env_bool("STRATEGY_LOG_ENABLED", True)
STRATEGY_LOG_PATH = env_path("STRATEGY_LOG_PATH", str(APP_DIR / "logs" / "operations.jsonl"))
STRATEGY_LOG_MAX_BYTES = env_int("STRATEGY_LOG_MAX_BYTES", 5 * 1024 * 1024)
STRATEGY_LOG_BACKUP_COUNT = max(1, env_int("STRATEGY_LOG_BACKUP_COUNT", 10))

# Short name the built-in strategy answers to besides its full element tag.
DEFAULT_STRATEGY_NAME = env_str("DEFAULT_STRATEGY_NAME", "rooms-sections")

log_lock = RLock()
