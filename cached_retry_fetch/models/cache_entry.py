import json
import logging
from dataclasses import dataclass
from typing import Any

from ..utils import safe_json_parse

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    data: Any
    expiry: int  # ms since epoch

    def is_valid(self, now_ms: int) -> bool:
        return now_ms < self.expiry

    def to_json(self) -> str:
        return json.dumps({"data": self.data, "expiry": self.expiry})

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> "CacheEntry | None":
        if raw is None:
            return None
        payload = safe_json_parse(raw)
        if not isinstance(payload, dict) or "data" not in payload or "expiry" not in payload:
            if payload is not None:
                logger.warning(f"Ignoring malformed cache entry: {raw!r}")
            return None
        expiry = payload["expiry"]
        if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
            logger.warning(f"Ignoring cache entry with invalid expiry: {expiry!r}")
            return None
        return cls(data=payload["data"], expiry=expiry)
