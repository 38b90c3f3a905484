# system/logger.py
from pathlib import Path
from datetime import datetime
from system.config import Config

class ApiLogger:
    def __init__(self, config: Config):
        self.config = config
        self.log_file = Path(config.data_dir) / "care_api.log"

    def log_request(self, route: str, payload: dict):
        keys = ",".join(sorted(payload.keys())) if isinstance(payload, dict) else "-"
        self._write(f"[REQUEST] route={route} keys={keys}")

    def log_response(self, route: str, response: dict):
        self._write(f"[RESPONSE] route={route} ok={response.get('ok')}")

    def log_exception(self, route: str, exc: Exception):
        self._write(f"[EXCEPTION] route={route} {exc!r}")

    def _write(self, line: str):
        ts = datetime.now().isoformat()
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{ts} {line}\n")
