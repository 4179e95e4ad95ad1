from pathlib import Path


BASE_DIR = Path.cwd()
LOGS_DIR = BASE_DIR / "logs"
PATH_TO_CONFIG = BASE_DIR / "config.yaml"
