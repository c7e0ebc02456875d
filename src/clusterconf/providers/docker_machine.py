# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/providers/docker_machine.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from clusterconf.assembly.prompt import LineReader
from clusterconf.config.settings import load_settings
from clusterconf.providers.base import Machine, NodeProvider, select_machines

log = logging.getLogger("clusterconf")


def _read_machine(config_path: Path) -> Optional[Machine]:
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Skipping unreadable machine config %s: %s", config_path, e)
        return None

    driver = data.get("Driver") or {}
    name = data.get("Name") or driver.get("MachineName") or config_path.parent.name
    port = driver.get("SSHPort")
    return Machine(
        name=name,
        address=driver.get("IPAddress") or "",
        port=str(port) if port else "",
        user=driver.get("SSHUser") or "",
        ssh_key_path=driver.get("SSHKeyPath") or "",
        hostname_override=name,
        raw=data,
    )


class DockerMachineProvider(NodeProvider):
    """
    Reads machines created by docker-machine from its storage directory
    (<storage>/machines/<name>/config.json).
    """

    name = "docker-machine"

    def __init__(self, storage_path: Optional[Path] = None):
        self.storage_path = storage_path or load_settings().machine_storage_path

    def list_machines(self) -> List[Machine]:
        machines_dir = self.storage_path / "machines"
        if not machines_dir.is_dir():
            log.debug("docker-machine storage %s not found", machines_dir)
            return []

        out: List[Machine] = []
        for cfg in sorted(machines_dir.glob("*/config.json")):
            m = _read_machine(cfg)
            if m is not None:
                out.append(m)
        log.debug("docker-machine machines: %s", [m.name for m in out])
        return out

    def get_nodes_from_config(self, reader: LineReader) -> List[Machine]:
        return select_machines(reader, self.list_machines())
