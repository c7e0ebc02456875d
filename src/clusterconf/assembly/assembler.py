# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/assembly/assembler.py

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import typer

from clusterconf.assembly.hosts import get_host_config
from clusterconf.assembly.prompt import LineReader, get_config, is_affirmative, is_yes
from clusterconf.config.defaults import (
    DEFAULT_AUTH_STRATEGY,
    DEFAULT_AUTHORIZATION_MODE,
    DEFAULT_CLUSTER_CIDR,
    DEFAULT_CLUSTER_DNS_SERVICE,
    DEFAULT_CLUSTER_DOMAIN,
    DEFAULT_NETWORK_PLUGIN,
    DEFAULT_SERVICE_CLUSTER_IP_RANGE,
    DEFAULT_SSH_KEY_PATH,
    MANUAL_PROVIDER,
)
from clusterconf.config.loader import validate_nodes
from clusterconf.config.models import (
    AuthnConfig,
    AuthzConfig,
    ClusterConfiguration,
    NetworkConfig,
    Node,
    ServicesConfig,
    SystemImages,
    empty_template,
)
from clusterconf.errors import InvalidCountError, NoNodesSelectedError
from clusterconf.images import catalog
from clusterconf.images.resolver import resolve_images
from clusterconf.observers.dispatcher import EventBus
from clusterconf.observers.events import (
    AssemblyFailed,
    AssemblyStarted,
    StageCompleted,
    new_ctx,
)
from clusterconf.providers.base import NodeProvider
from clusterconf.providers.registry import NodeProviderRegistry, build_node_providers

log = logging.getLogger("clusterconf")


class ConfigAssembler:
    """
    Builds one ClusterConfiguration from operator answers, stage by stage:

        provider -> ssh key -> nodes -> network -> authentication ->
        authorization -> system images -> services -> addons -> finalize

    Every stage blocks on the reader; the first error aborts the run and
    propagates unchanged. The document is only returned once all stages
    have succeeded.
    """

    def __init__(
        self,
        reader: LineReader,
        *,
        registry: Optional[NodeProviderRegistry] = None,
        provider_name: Optional[str] = None,
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
        echo: Callable[..., None] = typer.echo,
    ):
        self.reader = reader
        self.registry = registry
        self.provider_name = provider_name
        self.provider: Optional[NodeProvider] = None
        self.bus = bus
        self.run_id = run_id
        self.echo = echo
        self.stage = "init"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ask(self, text: str, default: str) -> str:
        return get_config(self.reader, text, default, echo=self.echo)

    def _emit(self, event_cls, **fields) -> None:
        if self.bus:
            self.bus.emit(event_cls(**fields, **new_ctx(self.run_id)))

    def _done(self, stage: str) -> None:
        log.debug("stage %s completed", stage)
        self._emit(StageCompleted, stage=stage)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def assemble(self, empty: bool = False) -> ClusterConfiguration:
        try:
            return self._assemble(empty)
        except Exception as exc:
            self._emit(AssemblyFailed, stage=self.stage, error=str(exc))
            raise

    def _assemble(self, empty: bool) -> ClusterConfiguration:
        if empty:
            self.stage = "empty-template"
            cluster = empty_template()
            self._done(self.stage)
            return cluster

        self.stage = "provider"
        self.provider = self.select_provider()
        self._emit(AssemblyStarted, provider=self.provider.name if self.provider else None)

        cluster = ClusterConfiguration()

        self.stage = "ssh-key-path"
        cluster.ssh_key_path = self._ask("Cluster Level SSH Private Key Path", DEFAULT_SSH_KEY_PATH)
        self._done(self.stage)

        self.stage = "nodes"
        if self.provider is not None:
            cluster.nodes = self.get_provider_nodes(cluster.ssh_key_path)
        else:
            cluster.nodes = self.get_manual_nodes(cluster.ssh_key_path)
        self._done(self.stage)

        self.stage = "network"
        cluster.network = self.get_network_config()
        self._done(self.stage)

        self.stage = "authentication"
        cluster.authentication = self.get_authn_config()
        self._done(self.stage)

        self.stage = "authorization"
        cluster.authorization = self.get_authz_config()
        self._done(self.stage)

        self.stage = "system-images"
        cluster.system_images = self.get_system_images_config()
        self._done(self.stage)

        self.stage = "services"
        cluster.services = self.get_service_config()
        self._done(self.stage)

        self.stage = "addons"
        addons = self.get_addon_manifests()
        if addons:
            cluster.addons_include.extend(addons)
        self._done(self.stage)

        self.stage = "finalize"
        validate_nodes(cluster)
        self._done(self.stage)
        return cluster

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def select_provider(self) -> Optional[NodeProvider]:
        """None means manual host entry."""
        name = (self.provider_name or "").strip()
        if not name or name == MANUAL_PROVIDER:
            return None
        if self.registry is None:
            self.registry = build_node_providers()
        provider = self.registry.get_node_provider(name)
        log.info("Using node provider [%s]", name)
        return provider

    def get_provider_nodes(self, cluster_ssh_key_path: str) -> List[Node]:
        machines = self.provider.get_nodes_from_config(self.reader)
        if not machines:
            raise NoNodesSelectedError()
        return self.provider.read_node_configurations(machines, cluster_ssh_key_path)

    def get_manual_nodes(self, cluster_ssh_key_path: str) -> List[Node]:
        answer = self._ask("Number of Hosts", "1")
        # ASCII digits with an optional sign
        digits = answer[1:] if answer[:1] in ("+", "-") else answer
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidCountError(f"invalid number of hosts: {answer!r}")
        count = int(answer)
        if count < 0:
            raise InvalidCountError(f"number of hosts must not be negative: {count}")

        return [
            get_host_config(self.reader, i, cluster_ssh_key_path, echo=self.echo)
            for i in range(count)
        ]

    def get_network_config(self) -> NetworkConfig:
        plugin = self._ask("Network Plugin Type (flannel, calico, weave, canal)", DEFAULT_NETWORK_PLUGIN)
        return NetworkConfig(plugin=plugin)

    def get_authn_config(self) -> AuthnConfig:
        return AuthnConfig(strategy=self._ask("Authentication Strategy", DEFAULT_AUTH_STRATEGY))

    def get_authz_config(self) -> AuthzConfig:
        return AuthzConfig(mode=self._ask("Authorization Mode (rbac, none)", DEFAULT_AUTHORIZATION_MODE))

    def get_system_images_config(self) -> SystemImages:
        default_kube_image = catalog.default_images().kubernetes
        answer = self._ask("Kubernetes Docker image", default_kube_image)
        return resolve_images(answer)

    def get_service_config(self) -> ServicesConfig:
        services = ServicesConfig()

        services.kubelet.cluster_domain = self._ask("Cluster domain", DEFAULT_CLUSTER_DOMAIN)

        service_cidr = self._ask("Service Cluster IP Range", DEFAULT_SERVICE_CLUSTER_IP_RANGE)
        services.kube_api.service_cluster_ip_range = service_cidr
        services.kube_controller.service_cluster_ip_range = service_cidr

        services.kube_api.pod_security_policy = is_yes(self._ask("Enable PodSecurityPolicy", "n"))

        services.kube_controller.cluster_cidr = self._ask("Cluster Network CIDR", DEFAULT_CLUSTER_CIDR)
        services.kubelet.cluster_dns_server = self._ask("Cluster DNS Service IP", DEFAULT_CLUSTER_DNS_SERVICE)
        return services

    def get_addon_manifests(self) -> List[str]:
        addons: List[str] = []
        if not is_affirmative(self._ask("Add addon manifest URLs or YAML files", "no")):
            return addons

        resume = True
        while resume:
            path = self._ask("Enter the Path or URL for the manifest", "")
            if path:
                addons.append(path)
            else:
                log.warning("Ignoring empty addon manifest path")
            resume = is_affirmative(self._ask("Add another addon", "no"))
        return addons
