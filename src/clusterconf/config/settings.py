# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/config/settings.py

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    log_dir: Path
    machine_storage_path: Path
    inventory_path: str


def load_settings() -> Settings:
    # override via env
    return Settings(
        log_dir=Path(
            os.getenv("CLUSTERCONF_LOG_DIR", str(Path.home() / ".clusterconf" / "logs"))
        ).expanduser(),
        machine_storage_path=Path(
            os.getenv("MACHINE_STORAGE_PATH", str(Path.home() / ".docker" / "machine"))
        ).expanduser(),
        inventory_path=os.getenv("CLUSTERCONF_INVENTORY", "inventory/hosts.ini"),
    )
