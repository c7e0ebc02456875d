# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/images/catalog.py

"""
Kubernetes version -> system images used to deploy that version.
"""

from __future__ import annotations

from typing import Dict

from clusterconf.config.defaults import DEFAULT_K8S_VERSION
from clusterconf.config.models import SystemImages

RKE_TOOLS_IMAGE = "rancher/rke-tools:v0.1.8"

K8S_VERSION_TO_SYSTEM_IMAGES: Dict[str, SystemImages] = {
    "v1.8.11-rancher2-1": SystemImages(
        etcd="rancher/coreos-etcd:v3.0.17",
        alpine=RKE_TOOLS_IMAGE,
        nginx_proxy=RKE_TOOLS_IMAGE,
        cert_downloader=RKE_TOOLS_IMAGE,
        kubernetes_services_sidecar=RKE_TOOLS_IMAGE,
        kubedns="rancher/k8s-dns-kube-dns-amd64:1.14.5",
        dnsmasq="rancher/k8s-dns-dnsmasq-nanny-amd64:1.14.5",
        kubedns_sidecar="rancher/k8s-dns-sidecar-amd64:1.14.5",
        kubedns_autoscaler="rancher/cluster-proportional-autoscaler-amd64:1.0.0",
        kubernetes="rancher/hyperkube:v1.8.11-rancher2",
        flannel="rancher/coreos-flannel:v0.9.1",
        flannel_cni="rancher/coreos-flannel-cni:v0.2.0",
        calico_node="rancher/calico-node:v3.1.1",
        calico_cni="rancher/calico-cni:v3.1.1",
        calico_ctl="rancher/calico-ctl:v2.0.0",
        canal_node="rancher/calico-node:v3.1.1",
        canal_cni="rancher/calico-cni:v3.1.1",
        canal_flannel="rancher/coreos-flannel:v0.9.1",
        weave_node="weaveworks/weave-kube:2.1.2",
        weave_cni="weaveworks/weave-npc:2.1.2",
        pod_infra_container="rancher/pause-amd64:3.0",
        ingress="rancher/nginx-ingress-controller:0.10.2-rancher3",
        ingress_backend="rancher/nginx-ingress-controller-defaultbackend:1.4",
    ),
    "v1.9.7-rancher2-2": SystemImages(
        etcd="rancher/coreos-etcd:v3.1.12",
        alpine=RKE_TOOLS_IMAGE,
        nginx_proxy=RKE_TOOLS_IMAGE,
        cert_downloader=RKE_TOOLS_IMAGE,
        kubernetes_services_sidecar=RKE_TOOLS_IMAGE,
        kubedns="rancher/k8s-dns-kube-dns-amd64:1.14.7",
        dnsmasq="rancher/k8s-dns-dnsmasq-nanny-amd64:1.14.7",
        kubedns_sidecar="rancher/k8s-dns-sidecar-amd64:1.14.7",
        kubedns_autoscaler="rancher/cluster-proportional-autoscaler-amd64:1.0.0",
        kubernetes="rancher/hyperkube:v1.9.7-rancher2",
        flannel="rancher/coreos-flannel:v0.9.1",
        flannel_cni="rancher/coreos-flannel-cni:v0.2.0",
        calico_node="rancher/calico-node:v3.1.1",
        calico_cni="rancher/calico-cni:v3.1.1",
        calico_ctl="rancher/calico-ctl:v2.0.0",
        canal_node="rancher/calico-node:v3.1.1",
        canal_cni="rancher/calico-cni:v3.1.1",
        canal_flannel="rancher/coreos-flannel:v0.9.1",
        weave_node="weaveworks/weave-kube:2.1.2",
        weave_cni="weaveworks/weave-npc:2.1.2",
        pod_infra_container="rancher/pause-amd64:3.0",
        ingress="rancher/nginx-ingress-controller:0.10.2-rancher3",
        ingress_backend="rancher/nginx-ingress-controller-defaultbackend:1.4",
    ),
    "v1.10.3-rancher2-1": SystemImages(
        etcd="rancher/coreos-etcd:v3.1.12",
        alpine=RKE_TOOLS_IMAGE,
        nginx_proxy=RKE_TOOLS_IMAGE,
        cert_downloader=RKE_TOOLS_IMAGE,
        kubernetes_services_sidecar=RKE_TOOLS_IMAGE,
        kubedns="rancher/k8s-dns-kube-dns-amd64:1.14.8",
        dnsmasq="rancher/k8s-dns-dnsmasq-nanny-amd64:1.14.8",
        kubedns_sidecar="rancher/k8s-dns-sidecar-amd64:1.14.8",
        kubedns_autoscaler="rancher/cluster-proportional-autoscaler-amd64:1.0.0",
        kubernetes="rancher/hyperkube:v1.10.3-rancher2",
        flannel="rancher/coreos-flannel:v0.9.1",
        flannel_cni="rancher/coreos-flannel-cni:v0.2.0",
        calico_node="rancher/calico-node:v3.1.1",
        calico_cni="rancher/calico-cni:v3.1.1",
        calico_ctl="rancher/calico-ctl:v2.0.0",
        canal_node="rancher/calico-node:v3.1.1",
        canal_cni="rancher/calico-cni:v3.1.1",
        canal_flannel="rancher/coreos-flannel:v0.9.1",
        weave_node="weaveworks/weave-kube:2.1.2",
        weave_cni="weaveworks/weave-npc:2.1.2",
        pod_infra_container="rancher/pause-amd64:3.1",
        ingress="rancher/nginx-ingress-controller:0.10.2-rancher3",
        ingress_backend="rancher/nginx-ingress-controller-defaultbackend:1.4",
    ),
}


def lookup(version: str) -> SystemImages | None:
    """Copy of the catalog entry for *version*, or None."""
    images = K8S_VERSION_TO_SYSTEM_IMAGES.get(version)
    if images is None:
        return None
    return images.model_copy()


def default_images() -> SystemImages:
    return K8S_VERSION_TO_SYSTEM_IMAGES[DEFAULT_K8S_VERSION].model_copy()
