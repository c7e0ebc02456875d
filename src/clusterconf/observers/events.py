# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of one assembly

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "run_id": run_id or str(uuid.uuid4()),
    }


# ---------------------------------------------------------------------
# Assembly lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class AssemblyStarted(BaseEvent):
    provider: Optional[str]

@dataclass(frozen=True)
class StageCompleted(BaseEvent):
    stage: str

@dataclass(frozen=True)
class AssemblyFailed(BaseEvent):
    stage: str
    error: str


# ---------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ConfigWritten(BaseEvent):
    path: str
    printed: bool
