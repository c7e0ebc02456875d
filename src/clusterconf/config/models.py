# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/config/models.py

from __future__ import annotations

from typing import Any, Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

CONTROL_ROLE = "controlplane"
WORKER_ROLE = "worker"
ETCD_ROLE = "etcd"

Role = Literal["controlplane", "worker", "etcd"]


class Node(BaseModel):
    """
    One cluster member. Built once per host during assembly and not
    mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    address: str = ""
    port: str = ""
    internal_address: str = ""
    role: List[Role] = Field(default_factory=list)
    hostname_override: str = ""
    user: str = ""
    docker_socket: str = ""
    ssh_key: str = ""
    ssh_key_path: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)

    def has_role(self, role: str) -> bool:
        return role in self.role


class NetworkConfig(BaseModel):
    plugin: str = ""
    options: Dict[str, str] = Field(default_factory=dict)


class AuthnConfig(BaseModel):
    strategy: str = ""
    options: Dict[str, str] = Field(default_factory=dict)
    sans: List[str] = Field(default_factory=list)


class AuthzConfig(BaseModel):
    # rbac / none; unknown values are left for the consumer to reject
    mode: str = ""
    options: Dict[str, str] = Field(default_factory=dict)


class SystemImages(BaseModel):
    etcd: str = ""
    alpine: str = ""
    nginx_proxy: str = ""
    cert_downloader: str = ""
    kubernetes_services_sidecar: str = ""
    kubedns: str = ""
    dnsmasq: str = ""
    kubedns_sidecar: str = ""
    kubedns_autoscaler: str = ""
    kubernetes: str = ""
    flannel: str = ""
    flannel_cni: str = ""
    calico_node: str = ""
    calico_cni: str = ""
    calico_controllers: str = ""
    calico_ctl: str = ""
    canal_node: str = ""
    canal_cni: str = ""
    canal_flannel: str = ""
    weave_node: str = ""
    weave_cni: str = ""
    pod_infra_container: str = ""
    ingress: str = ""
    ingress_backend: str = ""

    def images(self) -> List[str]:
        """Image references in IMAGE_FIELDS order, empties included."""
        return [getattr(self, name) for name in IMAGE_FIELDS]


# Must list every SystemImages field, in declaration order. Adding a field to
# SystemImages without adding it here hides it from image listings;
# tests/images/test_resolver.py checks the two stay in lockstep.
IMAGE_FIELDS: Tuple[str, ...] = (
    "etcd",
    "alpine",
    "nginx_proxy",
    "cert_downloader",
    "kubernetes_services_sidecar",
    "kubedns",
    "dnsmasq",
    "kubedns_sidecar",
    "kubedns_autoscaler",
    "kubernetes",
    "flannel",
    "flannel_cni",
    "calico_node",
    "calico_cni",
    "calico_controllers",
    "calico_ctl",
    "canal_node",
    "canal_cni",
    "canal_flannel",
    "weave_node",
    "weave_cni",
    "pod_infra_container",
    "ingress",
    "ingress_backend",
)

# The orchestrator image, replaced when the operator enters a custom image.
PRIMARY_IMAGE_FIELD = "kubernetes"


class BaseService(BaseModel):
    image: str = ""
    extra_args: Dict[str, str] = Field(default_factory=dict)
    extra_binds: List[str] = Field(default_factory=list)
    extra_env: List[str] = Field(default_factory=list)


class ETCDService(BaseService):
    pass


class KubeAPIService(BaseService):
    service_cluster_ip_range: str = ""
    pod_security_policy: bool = False


class KubeControllerService(BaseService):
    cluster_cidr: str = ""
    service_cluster_ip_range: str = ""


class SchedulerService(BaseService):
    pass


class KubeletService(BaseService):
    cluster_domain: str = ""
    infra_container_image: str = ""
    cluster_dns_server: str = ""
    fail_swap_on: bool = False


class KubeproxyService(BaseService):
    pass


class ServicesConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    etcd: ETCDService = Field(default_factory=ETCDService)
    kube_api: KubeAPIService = Field(default_factory=KubeAPIService, alias="kube-api")
    kube_controller: KubeControllerService = Field(
        default_factory=KubeControllerService, alias="kube-controller"
    )
    scheduler: SchedulerService = Field(default_factory=SchedulerService)
    kubelet: KubeletService = Field(default_factory=KubeletService)
    kubeproxy: KubeproxyService = Field(default_factory=KubeproxyService)


class ClusterConfiguration(BaseModel):
    """
    Root cluster document. Field order is the serialized key order.
    """

    model_config = ConfigDict(populate_by_name=True)

    nodes: List[Node] = Field(default_factory=list)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    authentication: AuthnConfig = Field(default_factory=AuthnConfig)
    addons: str = ""
    addons_include: List[str] = Field(default_factory=list)
    system_images: SystemImages = Field(default_factory=SystemImages)
    ssh_key_path: str = ""
    authorization: AuthzConfig = Field(default_factory=AuthzConfig)
    ignore_docker_version: bool = False
    kubernetes_version: str = ""
    cluster_name: str = ""

    def duplicate_addresses(self) -> List[str]:
        """Non-empty addresses that appear on more than one node."""
        seen: set[str] = set()
        dups: List[str] = []
        for n in self.nodes:
            if not n.address:
                continue
            if n.address in seen and n.address not in dups:
                dups.append(n.address)
            seen.add(n.address)
        return dups

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def empty_template() -> ClusterConfiguration:
    """Placeholder document with exactly one blank node."""
    return ClusterConfiguration(nodes=[Node()])
