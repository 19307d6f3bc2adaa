import os
import re

from dotenv import find_dotenv, load_dotenv

from sms_categorizer.domain.sources import DEFAULT_ALLOWED_SOURCES, parse_list
from sms_categorizer.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

# Keys read from config.yaml; the process environment and .env always win.
CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_COLORS",
    "DATA_DIR",
    "DATABASE_URL",
    "VOCAB_PATH",
    "MODEL_PATH",
    "MAX_LEN",
    "MAX_WORKERS",
    "ALLOWED_SOURCES",
    "DIAGNOSTICS_BUFFER_SIZE",
    "HOST",
    "PORT",
)

_CONFIG_LINE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*:\s*(.*)$")
_QUOTED_VALUE = re.compile(r"""^(["'])((?:\\.|(?!\1).)*)\1\s*(?:#.*)?$""")
_SECRET_MARKERS = ("KEY", "TOKEN", "SECRET", "PASSWORD", "PASS", "AUTH", "PRIVATE")
_URL_CREDENTIALS = re.compile(r"://[^/@\s]+@")

_external_keys: frozenset[str] = frozenset()


def _config_dir() -> str | None:
    return os.getenv("CONFIG_DIR") or None


def _resolve_dotenv_path() -> str | None:
    config_dir = _config_dir()
    if config_dir and os.path.exists(os.path.join(config_dir, ".env")):
        return os.path.join(config_dir, ".env")
    return find_dotenv(usecwd=True) or None


def _resolve_config_path() -> str:
    config_dir = _config_dir()
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    nested = os.path.join(os.getcwd(), "config", CONFIG_FILENAME)
    if os.path.exists(nested):
        return nested
    return os.path.join(os.getcwd(), CONFIG_FILENAME)


def _parse_value(raw: str) -> str:
    quoted = _QUOTED_VALUE.match(raw)
    if quoted:
        quote, inner = quoted.groups()
        return inner.replace(f"\\{quote}", quote).replace("\\\\", "\\")
    if raw.startswith("#"):
        return ""
    # YAML comments need whitespace before the '#'
    return re.split(r"\s+#", raw, maxsplit=1)[0].strip()


def read_config_file(path: str | None) -> dict[str, str]:
    """Read flat ``KEY: value`` lines. Blank values and missing files yield nothing."""
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            match = _CONFIG_LINE.match(line.strip())
            if not match:
                continue
            key, raw = match.groups()
            value = _parse_value(raw.strip())
            if value:
                values[key] = value
    return values


def load_environment() -> None:
    """Apply .env, then fill still-unset keys from config.yaml."""
    global _external_keys

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)
    _external_keys = frozenset(os.environ)

    config_path = _resolve_config_path()
    file_values = read_config_file(config_path)
    if file_values:
        logger.debug("[ENV] Read %d keys from %s", len(file_values), config_path)
    for key in CONFIG_KEYS:
        if key in file_values:
            os.environ.setdefault(key, file_values[key])


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("[ENV] %s=%s is below %s, using default %s.", name, value, min_value, default)
        return default
    return value


def get_env_list(name: str, default: tuple[str, ...] = ()) -> list[str]:
    return parse_list(os.getenv(name)) or list(default)


def _mask_env_value(name: str, value: str) -> str:
    value = value.replace("\r", "\\r").replace("\n", "\\n")
    secret = any(marker in name.upper() for marker in _SECRET_MARKERS) or _URL_CREDENTIALS.search(value)
    if not secret:
        return value
    if len(value) <= 4:
        return "****"
    return f"{value[:2]}...{value[-2:]}"


def log_environment() -> None:
    logger.info("[ENV] Effective configuration (secrets masked):")
    for key in CONFIG_KEYS:
        raw = os.getenv(key)
        if raw is None:
            logger.info("[ENV] %s=<unset>", key)
            continue
        source = "env" if key in _external_keys else CONFIG_FILENAME
        logger.info("[ENV] %s=%s (%s)", key, _mask_env_value(key, raw), source)


# SSE headers to reduce proxy buffering and keep connections alive.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

DIAGNOSTICS_POLL_SECONDS = 0.5


load_environment()

DATA_DIR = os.getenv("DATA_DIR", ".")
LOG_DIR = os.getenv("LOG_DIR")

for _directory in (DATA_DIR, LOG_DIR, _config_dir()):
    if _directory and _directory not in {".", "./"}:
        os.makedirs(_directory, exist_ok=True)

DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{os.path.join(DATA_DIR, 'transactions.db')}"
VOCAB_PATH = os.getenv("VOCAB_PATH") or os.path.join(DATA_DIR, "vocab.txt")
MODEL_PATH = os.getenv("MODEL_PATH") or os.path.join(DATA_DIR, "sms_model.pkl")

MAX_LEN = get_env_int("MAX_LEN", 64, min_value=2)
MAX_WORKERS = get_env_int("MAX_WORKERS", 4, min_value=1)
DIAGNOSTICS_BUFFER_SIZE = get_env_int("DIAGNOSTICS_BUFFER_SIZE", 500, min_value=1)
ALLOWED_SOURCES = tuple(get_env_list("ALLOWED_SOURCES", DEFAULT_ALLOWED_SOURCES))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = get_env_int("PORT", 8000, min_value=1)
