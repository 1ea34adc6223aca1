import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env once, globally
load_dotenv()


def resolve_path(env_key: str, default: str) -> Path:
    """
    Resolve a file path from ENV.
    Relative paths are resolved against the current working directory,
    which is the project the editor is working on.
    """
    value = os.getenv(env_key, default)
    path = Path(value)

    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def env_flag(env_key: str, default: bool) -> bool:
    value = os.getenv(env_key)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


CONFIG_FILE_NAME = ".testconfig.json"
PIPE_FILE_NAME = ".tertestrial.tmp"

CONFIG_PATH = resolve_path("TERTESTRIAL_CONFIG_FILE", CONFIG_FILE_NAME)
PIPE_PATH   = resolve_path("TERTESTRIAL_PIPE", PIPE_FILE_NAME)

HTTP_HOST = os.getenv("TERTESTRIAL_HOST", "127.0.0.1")
HTTP_PORT = int(os.getenv("TERTESTRIAL_PORT", "8765"))

CLEAR_SCREEN = env_flag("TERTESTRIAL_CLEAR_SCREEN", True)
