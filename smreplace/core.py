from pathlib import Path

PROGRAM_NAME = "SMReplace"
VERSION = "0.1.0"

# Core paths
ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = ROOT / "settings.json"
LOG_DIR = ROOT / "logs"

DEFAULT_TABLE = "justinmetadata"
DEFAULT_COLUMN = "FilePath"


def banner() -> str:
    return f"{PROGRAM_NAME} v{VERSION}"
