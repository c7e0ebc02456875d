# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/config/defaults.py

CLUSTER_CONFIG_FILE = "cluster.yml"

DEFAULT_SSH_KEY_PATH = "~/.ssh/id_rsa"
DEFAULT_SSH_PORT = "22"
DEFAULT_SSH_USER = "ubuntu"
DEFAULT_DOCKER_SOCKET = "/var/run/docker.sock"

DEFAULT_NETWORK_PLUGIN = "canal"
DEFAULT_AUTH_STRATEGY = "x509"
DEFAULT_AUTHORIZATION_MODE = "rbac"

DEFAULT_CLUSTER_DOMAIN = "cluster.local"
DEFAULT_SERVICE_CLUSTER_IP_RANGE = "10.43.0.0/16"
DEFAULT_CLUSTER_CIDR = "10.42.0.0/16"
DEFAULT_CLUSTER_DNS_SERVICE = "10.43.0.10"

DEFAULT_K8S_VERSION = "v1.10.3-rancher2-1"

# Provider name that selects manual host entry.
MANUAL_PROVIDER = "none"

CONFIG_COMMENTS = """# If you intened to deploy Kubernetes in an air-gapped environment,
# please consult the documentation on how to configure custom RKE images."""
