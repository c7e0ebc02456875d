# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/observers/interface.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from .events import BaseEvent


@runtime_checkable
class Observer(Protocol):
    """
    Receives assembly lifecycle events (AssemblyStarted, StageCompleted,
    AssemblyFailed, ConfigWritten). notify() runs synchronously inside the
    assembly; the EventBus logs and drops anything it raises.
    """

    def notify(self, event: BaseEvent) -> None: ...
