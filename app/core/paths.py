from pathlib import Path

APP_PATH: Path = (Path(__file__).resolve().parent / '..').resolve()
ROOT_PATH: Path = APP_PATH.parent
