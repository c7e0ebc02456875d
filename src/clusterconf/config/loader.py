# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/config/loader.py

import logging
import os
import yaml
from pathlib import Path

from clusterconf.config.models import ClusterConfiguration
from clusterconf.errors import DuplicateNodeAddressError

log = logging.getLogger("clusterconf")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def validate_nodes(cluster: ClusterConfiguration) -> None:
    """
    Reject duplicate non-empty node addresses. An empty node list is
    only worth a warning; zero hosts is a legal answer during assembly.
    """
    dups = cluster.duplicate_addresses()
    if dups:
        raise DuplicateNodeAddressError(
            f"nodes must have unique addresses, duplicated: {', '.join(dups)}"
        )
    if not cluster.nodes:
        log.warning("Cluster configuration has no nodes")


def load_cluster_config(path: str | Path) -> ClusterConfiguration:
    """
    Load a cluster document written by the config command (or by hand)
    and validate it. The leading comment block is plain YAML comments.
    """
    path = Path(path)
    data = _load_yaml(path)
    log.debug("Loaded cluster configuration from %s", path)
    return ClusterConfiguration.model_validate(data)
