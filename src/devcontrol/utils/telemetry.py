"""Launch telemetry.

One JSON line per record in ``log_dir/telemetry.jsonl``. A devcall run
writes a ``launch`` record when it starts and when it finishes, plus one
``launch.session`` record per terminal it opened. Records of the same run
share a ``runId``. Set ``DEVCONTROL_TELEMETRY`` to ``0``/``false``/``no``/``off``
to turn recording off.
"""

from __future__ import annotations

import json
import os
import time
import uuid
from functools import lru_cache
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from devcontrol.resources import load_schema
from devcontrol.settings import RuntimeSettings

LAUNCH_EVENT = "launch"
SESSION_EVENT = "launch.session"

_DISABLE_VALUES = {"0", "false", "no", "off"}


def telemetry_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get("DEVCONTROL_TELEMETRY", "1").strip().lower() not in _DISABLE_VALUES


def new_run_id() -> str:
    return uuid.uuid4().hex


def build_record(
    event: str,
    run_id: str,
    *,
    payload: dict[str, Any] | None = None,
    level: str = "info",
    status: str | None = None,
    duration_ms: float | None = None,
) -> dict[str, Any]:
    """Assemble a record and check it against the packaged schema.

    Raises ``ValueError`` listing every schema violation.
    """

    record: dict[str, Any] = {
        "ts": time.time(),
        "event": event,
        "runId": run_id,
        "payload": payload or {},
        "level": level,
    }
    if status is not None:
        record["status"] = status
    if duration_ms is not None:
        record["durationMs"] = round(duration_ms, 3)
    problems = sorted(error.message for error in _validator().iter_errors(record))
    if problems:
        raise ValueError(f"Invalid telemetry record for '{event}': " + "; ".join(problems))
    return record


def append_record(settings: RuntimeSettings, record: Mapping[str, Any]) -> None:
    """Append ``record``; ``OSError`` from the log directory propagates."""

    if not telemetry_enabled():
        return
    log_path = settings.telemetry_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    return Draft202012Validator(load_schema("telemetry.schema.json"))


__all__ = [
    "LAUNCH_EVENT",
    "SESSION_EVENT",
    "append_record",
    "build_record",
    "new_run_id",
    "telemetry_enabled",
]
