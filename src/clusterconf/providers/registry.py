# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/providers/registry.py

from __future__ import annotations

from typing import Dict, List

from clusterconf.errors import UnknownProviderError
from clusterconf.providers.ansible_inventory import AnsibleInventoryProvider
from clusterconf.providers.base import NodeProvider
from clusterconf.providers.docker_machine import DockerMachineProvider


class NodeProviderRegistry:
    """
    Name -> node provider. Populated once at startup by
    build_node_providers(); nothing registers itself on import.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, NodeProvider] = {}

    def register_provider(self, name: str, provider: NodeProvider) -> None:
        if name in self._providers:
            raise ValueError(f"node provider [{name}] is already registered")
        self._providers[name] = provider

    def get_node_provider(self, name: str) -> NodeProvider:
        try:
            return self._providers[name]
        except KeyError:
            raise UnknownProviderError(name, self._providers) from None

    def names(self) -> List[str]:
        return sorted(self._providers)


def build_node_providers() -> NodeProviderRegistry:
    registry = NodeProviderRegistry()
    registry.register_provider(DockerMachineProvider.name, DockerMachineProvider())
    registry.register_provider(AnsibleInventoryProvider.name, AnsibleInventoryProvider())
    return registry
