from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, IO, Optional


class JsonlLogger:
    """Appends one JSON object per scenario event. A None path disables it."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._fh: Optional[IO[str]] = None
        if self._path:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self._path.open("a", encoding="utf-8")

    def log(self, event: str, **fields: Any) -> None:
        if self._fh is None:
            return
        row = {"event": event, "ts": datetime.now(timezone.utc).isoformat(), **fields}
        self._fh.write(json.dumps(row, sort_keys=True) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "JsonlLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
