# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/providers/base.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

import typer

from clusterconf.assembly.hosts import resolve_credentials
from clusterconf.assembly.prompt import LineReader, get_config
from clusterconf.config.defaults import (
    DEFAULT_DOCKER_SOCKET,
    DEFAULT_SSH_PORT,
    DEFAULT_SSH_USER,
)
from clusterconf.config.models import CONTROL_ROLE, Node
from clusterconf.errors import NoNodesSelectedError

log = logging.getLogger("clusterconf")


@dataclass(frozen=True)
class Machine:
    """
    A candidate host as reported by a backend. Only name is required;
    blank fields fall back to the manual-entry defaults.
    """

    name: str
    address: str = ""
    port: str = ""
    user: str = ""
    ssh_key_path: str = ""
    ssh_key: str = ""
    internal_address: str = ""
    hostname_override: str = ""
    roles: Tuple[str, ...] = ()
    raw: Dict = field(default_factory=dict, compare=False, hash=False)


def machine_to_node(machine: Machine, cluster_ssh_key_path: str = "") -> Node:
    """Apply the manual-entry defaults to one machine."""
    key_path, key = resolve_credentials(machine.ssh_key_path, machine.ssh_key, cluster_ssh_key_path)
    return Node(
        address=machine.address,
        port=machine.port or DEFAULT_SSH_PORT,
        internal_address=machine.internal_address,
        role=list(machine.roles) if machine.roles else [CONTROL_ROLE],
        hostname_override=machine.hostname_override,
        user=machine.user or DEFAULT_SSH_USER,
        docker_socket=DEFAULT_DOCKER_SOCKET,
        ssh_key=key,
        ssh_key_path=key_path,
    )


def select_machines(
    reader: LineReader,
    machines: Sequence[Machine],
    echo: Callable[..., None] = typer.echo,
) -> List[Machine]:
    """
    Show a numbered list and let the operator pick by number or name.
    Blank or 'all' selects everything. Order follows the listing, not
    the answer, and repeats are kept once.
    """
    if not machines:
        raise NoNodesSelectedError()

    echo("Available machines:")
    for i, m in enumerate(machines, start=1):
        echo(f"  {i}) {m.name} {m.address}".rstrip())

    answer = get_config(
        reader, "Select machines by number or name, comma separated", "all", echo=echo
    )
    tokens = {t.strip() for t in answer.split(",") if t.strip()}
    if "all" in tokens:
        picked = list(machines)
    else:
        picked = [
            m for i, m in enumerate(machines, start=1)
            if str(i) in tokens or m.name in tokens
        ]

    unknown = tokens - {"all"} - {m.name for m in machines} - {
        str(i) for i in range(1, len(machines) + 1)
    }
    if unknown:
        log.warning("Ignoring unknown machine selection(s): %s", ", ".join(sorted(unknown)))

    if not picked:
        raise NoNodesSelectedError()
    return picked


class NodeProvider(ABC):
    """
    Inventory backend contract: surface candidate machines, then turn
    them into Node records in the same order.
    """

    name: str = ""

    @abstractmethod
    def get_nodes_from_config(self, reader: LineReader) -> List[Machine]:
        """Query the backend and let the operator choose; raise NoNodesSelectedError if empty."""

    def read_node_configurations(
        self,
        machines: Sequence[Machine],
        cluster_ssh_key_path: str = "",
    ) -> List[Node]:
        nodes: List[Node] = []
        seen: set[str] = set()
        for m in machines:
            key = m.address or m.name
            if key in seen:
                log.warning("Skipping duplicate machine %s (%s)", m.name, key)
                continue
            seen.add(key)
            nodes.append(machine_to_node(m, cluster_ssh_key_path))
        return nodes
