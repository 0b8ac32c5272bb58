"""Strict JSON helpers shared by discovery, composition and execution."""

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Any:
    """Decode ``text`` as standard JSON.

    Raises ValueError for anything a strict parser would refuse, including
    ``NaN``/``Infinity`` and documents nested too deeply to decode.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON document is nested too deeply") from e


def dump_compact(value: Any) -> str:
    """Serialize ``value`` without whitespace; raises ValueError if it cannot."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except RecursionError as e:
        raise ValueError("JSON document is nested too deeply") from e
