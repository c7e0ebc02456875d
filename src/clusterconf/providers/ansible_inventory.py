# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/providers/ansible_inventory.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from clusterconf.assembly.prompt import LineReader, get_config
from clusterconf.config.models import CONTROL_ROLE, ETCD_ROLE, WORKER_ROLE
from clusterconf.config.settings import load_settings
from clusterconf.errors import InventoryReadError
from clusterconf.providers.base import Machine, NodeProvider, select_machines

log = logging.getLogger("clusterconf")

GROUP_ROLES: Dict[str, str] = {
    "controlplane": CONTROL_ROLE,
    "control_plane": CONTROL_ROLE,
    "kube_control_plane": CONTROL_ROLE,
    "masters": CONTROL_ROLE,
    "controllers": CONTROL_ROLE,
    "worker": WORKER_ROLE,
    "workers": WORKER_ROLE,
    "kube_node": WORKER_ROLE,
    "nodes": WORKER_ROLE,
    "computes": WORKER_ROLE,
    "etcd": ETCD_ROLE,
}

_ROLE_ORDER = (CONTROL_ROLE, WORKER_ROLE, ETCD_ROLE)


def read_inventory(inv_path: Path) -> List[Machine]:
    """
    Parse an INI-like Ansible inventory. Every host line in a plain group
    section becomes a machine; a host listed in several groups is merged
    and gains the role of each group. ':vars' and ':children' sections
    are skipped.
    """
    hosts: Dict[str, Dict] = {}
    order: List[str] = []

    section: Optional[str] = None
    try:
        text = inv_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InventoryReadError(f"cannot read inventory {inv_path}: {e}") from e

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith(";"):
            continue
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip()
            continue
        if section is None or ":" in section:
            continue

        parts = line.split()
        name = parts[0]
        entry = hosts.get(name)
        if entry is None:
            entry = {"vars": {}, "roles": set()}
            hosts[name] = entry
            order.append(name)
        for p in parts[1:]:
            if "=" in p:
                k, v = p.split("=", 1)
                entry["vars"][k] = v
        role = GROUP_ROLES.get(section.lower())
        if role:
            entry["roles"].add(role)

    machines: List[Machine] = []
    for name in order:
        hv = hosts[name]["vars"]
        roles = tuple(r for r in _ROLE_ORDER if r in hosts[name]["roles"])
        machines.append(
            Machine(
                name=name,
                address=hv.get("ansible_host", name),
                port=hv.get("ansible_port", ""),
                user=hv.get("ansible_user", ""),
                ssh_key_path=hv.get("ansible_ssh_private_key_file", ""),
                internal_address=hv.get("ip", ""),
                hostname_override=name if "ansible_host" in hv else "",
                roles=roles,
                raw=dict(hv),
            )
        )
    return machines


class AnsibleInventoryProvider(NodeProvider):
    name = "ansible-inventory"

    def __init__(self, default_path: Optional[str] = None):
        self.default_path = default_path or load_settings().inventory_path

    def get_nodes_from_config(self, reader: LineReader) -> List[Machine]:
        path = Path(get_config(reader, "Ansible inventory path", self.default_path)).expanduser()
        if not path.is_file():
            log.warning("Inventory %s not found", path)
            machines: List[Machine] = []
        else:
            machines = read_inventory(path)
            log.debug("inventory %s: %d hosts", path, len(machines))
        return select_machines(reader, machines)
