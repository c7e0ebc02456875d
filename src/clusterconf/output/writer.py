# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/output/writer.py

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

import typer
import yaml

from clusterconf.config.defaults import CONFIG_COMMENTS
from clusterconf.config.models import ClusterConfiguration
from clusterconf.observers.dispatcher import EventBus
from clusterconf.observers.events import ConfigWritten, new_ctx

log = logging.getLogger("clusterconf")

CONFIG_FILE_MODE = 0o640


def marshal(cluster: ClusterConfiguration) -> str:
    """Comment block followed by the YAML document."""
    body = yaml.safe_dump(
        cluster.to_document(),
        sort_keys=False,
        default_flow_style=False,
    )
    return f"{CONFIG_COMMENTS}\n{body}"


def write_config(
    cluster: ClusterConfiguration,
    config_file: str | Path,
    print_only: bool = False,
    *,
    echo: Callable[..., None] = typer.echo,
    bus: Optional[EventBus] = None,
    run_id: Optional[str] = None,
) -> str:
    """
    Serialize and either print or write the document. Serialization runs
    before the file is touched so a failure never leaves a partial file.
    """
    config_string = marshal(cluster)
    log.debug("Deploying cluster configuration file: %s", config_file)

    if print_only:
        echo(f"Configuration File: \n{config_string}", nl=False)
    else:
        path = Path(config_file)
        # created with the final mode; nodes may carry inline private keys
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w") as f:
            f.write(config_string)
        # an existing file keeps its old mode through O_CREAT
        os.chmod(path, CONFIG_FILE_MODE)

    if bus:
        bus.emit(ConfigWritten(path=str(config_file), printed=print_only, **new_ctx(run_id)))
    return config_string
