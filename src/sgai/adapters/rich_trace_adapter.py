import json
from datetime import datetime, timezone
from typing import Any, Optional

from rich.console import Console


class RichTraceAdapter:
    """TracePort writing timestamped debug lines to stderr.

    JSON-serializable payloads are pretty-printed below the label.
    """

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console(stderr=True)

    def trace(self, label: str, data: Any = None) -> None:
        ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        self._console.print(f"[{ts}] {label}", markup=False, highlight=False)
        if data is not None:
            self._console.print_json(json.dumps(data, default=str))
