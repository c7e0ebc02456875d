# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from clusterconf.assembly.assembler import ConfigAssembler
from clusterconf.assembly.prompt import LineReader, StreamReader
from clusterconf.config.defaults import CLUSTER_CONFIG_FILE
from clusterconf.config.loader import load_cluster_config, validate_nodes
from clusterconf.errors import ClusterConfigError
from clusterconf.images.resolver import generate_system_images_list
from clusterconf.logging.log import init_logging
from clusterconf.observers.dispatcher import EventBus
from clusterconf.observers.logger import LoggerObserver
from clusterconf.output.writer import write_config
from clusterconf.providers.registry import NodeProviderRegistry, build_node_providers


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Cluster configuration CLI")

# Errors turned into a non-zero exit; anything else is a bug and keeps its traceback.
HANDLED_ERRORS = (ClusterConfigError, OSError, yaml.YAMLError, ValidationError)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def cluster_config(
    *,
    reader: LineReader,
    config_file: str,
    print_only: bool,
    empty: bool,
    node_provider: Optional[str],
    registry: NodeProviderRegistry,
    bus: Optional[EventBus] = None,
    run_id: Optional[str] = None,
) -> None:
    """
    Assemble a cluster document and hand it to the writer. Nothing is
    written unless every stage succeeded.
    """
    assembler = ConfigAssembler(
        reader,
        registry=registry,
        provider_name=node_provider,
        bus=bus,
        run_id=run_id,
    )
    cluster = assembler.assemble(empty=empty)
    write_config(cluster, config_file, print_only, bus=bus, run_id=run_id)


def _fail(logger, exc: Exception) -> None:
    logger.debug("command failed", exc_info=True)
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command()
def config(
    name: str = typer.Option(
        CLUSTER_CONFIG_FILE, "--name", "-n", help="Name of the configuration file"
    ),
    empty: bool = typer.Option(
        False, "--empty", "-e", help="Generate Empty configuration file"
    ),
    print_only: bool = typer.Option(
        False, "--print", "-p", help="Print configuration"
    ),
    system_images: bool = typer.Option(
        False, "--system-images", help="Generate the default system images"
    ),
    all_versions: bool = typer.Option(
        False, "--all", help="Generate the default system images for all versions"
    ),
    version: Optional[str] = typer.Option(
        None, "--version", help="Generate the default system images for specific k8s versions"
    ),
    node_provider: Optional[str] = typer.Option(
        None,
        "--node-provider",
        "-N",
        help="Get node configurations from a node provider. ie. docker-machine",
    ),
    debug: bool = typer.Option(False, "--debug"),
):
    """Setup cluster configuration"""
    logger, run_id, _ = init_logging(verbose=debug)

    try:
        if system_images:
            generate_system_images_list(version, all_versions, emit=typer.echo)
            return

        bus = EventBus(observers=[LoggerObserver(logger)])
        cluster_config(
            reader=StreamReader(),
            config_file=name,
            print_only=print_only,
            empty=empty,
            node_provider=node_provider,
            registry=build_node_providers(),
            bus=bus,
            run_id=run_id,
        )
    except HANDLED_ERRORS as exc:
        _fail(logger, exc)


@app.command()
def validate(
    config_file: Path = typer.Argument(CLUSTER_CONFIG_FILE, help="Cluster configuration YAML"),
    debug: bool = typer.Option(False, "--debug"),
):
    """Load a cluster configuration file and check its nodes."""
    logger, _, _ = init_logging(verbose=debug)

    try:
        cluster = load_cluster_config(config_file)
        validate_nodes(cluster)
    except HANDLED_ERRORS as exc:
        _fail(logger, exc)

    typer.echo(
        f"{config_file}: {len(cluster.nodes)} nodes, "
        f"kubernetes image {cluster.system_images.kubernetes or 'none'}"
    )


if __name__ == "__main__":
    app()
