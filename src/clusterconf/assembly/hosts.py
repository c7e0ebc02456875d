# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/assembly/hosts.py

from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import typer

from clusterconf.assembly.prompt import LineReader, get_config, is_yes
from clusterconf.config.defaults import (
    DEFAULT_DOCKER_SOCKET,
    DEFAULT_SSH_PORT,
    DEFAULT_SSH_USER,
)
from clusterconf.config.models import CONTROL_ROLE, ETCD_ROLE, WORKER_ROLE, Node

log = logging.getLogger("clusterconf")


def resolve_credentials(
    key_path: str,
    inline_key: str,
    cluster_key_path: str,
) -> Tuple[str, str]:
    """
    Return (ssh_key_path, ssh_key).

    Per-host path wins, then per-host inline key, then the cluster-level
    path. Only one of the two is ever set.
    """
    if key_path:
        return key_path, ""
    if inline_key:
        return "", inline_key
    return cluster_key_path, ""


def get_host_config(
    reader: LineReader,
    index: int,
    cluster_ssh_key_path: str,
    echo: Callable[..., None] = typer.echo,
) -> Node:
    """
    Run the per-host question sequence for host number index+1.
    """
    address = get_config(reader, f"SSH Address of host ({index + 1})", "", echo=echo)
    port = get_config(reader, f"SSH Port of host ({index + 1})", DEFAULT_SSH_PORT, echo=echo)

    ssh_key = ""
    ssh_key_path = get_config(reader, f"SSH Private Key Path of host ({address})", "", echo=echo)
    if not ssh_key_path:
        echo("[-] You have entered empty SSH key path, trying fetch from SSH key parameter")
        ssh_key = get_config(reader, f"SSH Private Key of host ({address})", "", echo=echo)
        if not ssh_key:
            echo(
                "[-] You have entered empty SSH key, defaulting to cluster level SSH key: "
                f"{cluster_ssh_key_path}"
            )
    ssh_key_path, ssh_key = resolve_credentials(ssh_key_path, ssh_key, cluster_ssh_key_path)

    user = get_config(reader, f"SSH User of host ({address})", DEFAULT_SSH_USER, echo=echo)

    roles: List[str] = []
    if is_yes(get_config(reader, f"Is host ({address}) a Control Plane host (y/n)?", "y", echo=echo)):
        roles.append(CONTROL_ROLE)
    if is_yes(get_config(reader, f"Is host ({address}) a Worker host (y/n)?", "n", echo=echo)):
        roles.append(WORKER_ROLE)
    if is_yes(get_config(reader, f"Is host ({address}) an etcd host (y/n)?", "n", echo=echo)):
        roles.append(ETCD_ROLE)

    hostname_override = get_config(reader, f"Override Hostname of host ({address})", "", echo=echo)
    internal_address = get_config(reader, f"Internal IP of host ({address})", "", echo=echo)
    docker_socket = get_config(
        reader, f"Docker socket path on host ({address})", DEFAULT_DOCKER_SOCKET, echo=echo
    )

    log.debug("host %d: address=%s roles=%s", index + 1, address, roles)
    return Node(
        address=address,
        port=port,
        internal_address=internal_address,
        role=roles,
        hostname_override=hostname_override,
        user=user,
        docker_socket=docker_socket,
        ssh_key=ssh_key,
        ssh_key_path=ssh_key_path,
    )
