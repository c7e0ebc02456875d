# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/observers/logger.py
from __future__ import annotations

import logging
from typing import Dict, Type

from .events import AssemblyFailed, BaseEvent, ConfigWritten

# events not listed here log at DEBUG
EVENT_LEVELS: Dict[Type[BaseEvent], int] = {
    AssemblyFailed: logging.WARNING,
    ConfigWritten: logging.INFO,
}


class LoggerObserver:
    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        fields = ", ".join(
            f"{k}={v}" for k, v in event.dict().items() if k not in ("ts", "run_id")
        )
        level = EVENT_LEVELS.get(type(event), logging.DEBUG)
        self.logger.log(
            level, "[EVENT] %s: %s (run %s)", type(event).__name__, fields, event.run_id
        )
