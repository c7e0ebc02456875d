# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/errors.py
from __future__ import annotations

from typing import Iterable, List


class ClusterConfigError(RuntimeError):
    """Base class for cluster configuration failures."""


class InputIOError(ClusterConfigError):
    """Raised when the input source can no longer deliver a line."""


class InvalidCountError(ClusterConfigError):
    """Raised when the host count is not a non-negative integer."""


class NoNodesSelectedError(ClusterConfigError):
    """Raised when a node provider yields no machines."""

    def __init__(self, message: str = "no nodes were selected. Please select at least one node"):
        super().__init__(message)


class UnknownProviderError(ClusterConfigError):
    def __init__(self, name: str, registered: Iterable[str] = ()):
        self.name = name
        self.registered: List[str] = sorted(registered)
        super().__init__(
            f"node provider [{name}] is not registered, "
            f"available providers are: {self.registered}"
        )


class UnsupportedVersionError(ClusterConfigError):
    def __init__(self, version: str, supported_versions: Iterable[str]):
        self.version = version
        self.supported_versions: List[str] = list(supported_versions)
        super().__init__(
            f"k8s version is not supported, supported versions are: {self.supported_versions}"
        )


class DuplicateNodeAddressError(ClusterConfigError):
    """Raised when two nodes share the same address."""


class InventoryReadError(ClusterConfigError):
    """Raised when an Ansible inventory file cannot be read or decoded."""
