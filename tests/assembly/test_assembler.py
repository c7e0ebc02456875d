from typing import List

import pytest

from clusterconf.assembly.assembler import ConfigAssembler
from clusterconf.assembly.prompt import ScriptedReader
from clusterconf.config.defaults import (
    DEFAULT_AUTH_STRATEGY,
    DEFAULT_AUTHORIZATION_MODE,
    DEFAULT_CLUSTER_CIDR,
    DEFAULT_CLUSTER_DNS_SERVICE,
    DEFAULT_CLUSTER_DOMAIN,
    DEFAULT_K8S_VERSION,
    DEFAULT_NETWORK_PLUGIN,
    DEFAULT_SERVICE_CLUSTER_IP_RANGE,
    DEFAULT_SSH_PORT,
)
from clusterconf.config.models import ClusterConfiguration, Node
from clusterconf.errors import (
    DuplicateNodeAddressError,
    InputIOError,
    InvalidCountError,
    NoNodesSelectedError,
    UnknownProviderError,
)
from clusterconf.images import catalog
from clusterconf.observers.dispatcher import EventBus
from clusterconf.observers.events import AssemblyFailed, StageCompleted
from clusterconf.providers.base import Machine, NodeProvider
from clusterconf.providers.registry import NodeProviderRegistry

HOST_DEFAULTS = [""] * 11
AFTER_NODES_DEFAULTS = [""] * 9   # network .. cluster dns
NO_ADDONS = ["no"]


def _quiet(*a, **k):
    pass


class Capture:
    def __init__(self): self.events = []
    def notify(self, ev): self.events.append(ev)


def _assembler(answers: List[str], **kw) -> ConfigAssembler:
    return ConfigAssembler(ScriptedReader(answers), echo=_quiet, **kw)


def _defaults_for(n: int) -> List[str]:
    return ["", str(n)] + HOST_DEFAULTS * n + AFTER_NODES_DEFAULTS + NO_ADDONS


@pytest.mark.parametrize("n", [0, 1, 3])
def test_manual_defaults_produce_n_nodes(n):
    answers = _defaults_for(n)
    asm = _assembler(answers)
    cluster = asm.assemble()

    assert asm.reader.consumed == len(answers)
    assert len(cluster.nodes) == n
    for node in cluster.nodes:
        assert node.port == DEFAULT_SSH_PORT
        assert node.user == "ubuntu"
        assert node.has_role("controlplane")
        assert not node.has_role("worker")
        assert not node.has_role("etcd")
        assert node.ssh_key_path == "~/.ssh/id_rsa"


def test_default_sections():
    cluster = _assembler(_defaults_for(1)).assemble()

    assert cluster.ssh_key_path == "~/.ssh/id_rsa"
    assert cluster.network.plugin == DEFAULT_NETWORK_PLUGIN
    assert cluster.authentication.strategy == DEFAULT_AUTH_STRATEGY
    assert cluster.authorization.mode == DEFAULT_AUTHORIZATION_MODE
    assert cluster.system_images == catalog.K8S_VERSION_TO_SYSTEM_IMAGES[DEFAULT_K8S_VERSION]

    svc = cluster.services
    assert svc.kubelet.cluster_domain == DEFAULT_CLUSTER_DOMAIN
    assert svc.kube_api.service_cluster_ip_range == DEFAULT_SERVICE_CLUSTER_IP_RANGE
    assert svc.kube_controller.service_cluster_ip_range == DEFAULT_SERVICE_CLUSTER_IP_RANGE
    assert svc.kube_api.pod_security_policy is False
    assert svc.kube_controller.cluster_cidr == DEFAULT_CLUSTER_CIDR
    assert svc.kubelet.cluster_dns_server == DEFAULT_CLUSTER_DNS_SERVICE
    assert cluster.addons_include == []


def test_custom_answers_flow_into_sections():
    answers = (
        ["/keys/cluster", "0"]
        + ["calico", "webhook", "none", "v1.9.7-rancher2-2"]
        + ["k8s.example", "10.50.0.0/16", "Y", "10.60.0.0/16", "10.50.0.10"]
        + NO_ADDONS
    )
    cluster = _assembler(answers).assemble()

    assert cluster.ssh_key_path == "/keys/cluster"
    assert cluster.network.plugin == "calico"
    assert cluster.authentication.strategy == "webhook"
    assert cluster.authorization.mode == "none"
    assert cluster.system_images == catalog.K8S_VERSION_TO_SYSTEM_IMAGES["v1.9.7-rancher2-2"]
    assert cluster.services.kube_api.service_cluster_ip_range == "10.50.0.0/16"
    assert cluster.services.kube_controller.service_cluster_ip_range == "10.50.0.0/16"
    assert cluster.services.kube_api.pod_security_policy is True


def test_unrecognized_authorization_mode_is_kept():
    answers = ["", "0", "", "", "abac"] + [""] * 6 + NO_ADDONS
    assert _assembler(answers).assemble().authorization.mode == "abac"


def test_custom_kubernetes_image_overrides_primary_only():
    answers = ["", "0", "", "", "", "my/hyperkube:dev"] + [""] * 5 + NO_ADDONS
    images = _assembler(answers).assemble().system_images

    assert images.kubernetes == "my/hyperkube:dev"
    assert images.etcd == catalog.K8S_VERSION_TO_SYSTEM_IMAGES[DEFAULT_K8S_VERSION].etcd


def test_addons_no():
    assert _assembler(_defaults_for(0)).assemble().addons_include == []


def test_addons_yes_two_paths():
    answers = ["", "0"] + AFTER_NODES_DEFAULTS + [
        "yes", "https://x/a.yaml", "y", "/tmp/b.yaml", "no",
    ]
    asm = _assembler(answers)
    assert asm.assemble().addons_include == ["https://x/a.yaml", "/tmp/b.yaml"]
    assert asm.reader.consumed == len(answers)


def test_addons_duplicates_kept_in_order():
    answers = ["", "0"] + AFTER_NODES_DEFAULTS + ["Y", "a.yaml", "YES", "a.yaml", "nope"]
    assert _assembler(answers).assemble().addons_include == ["a.yaml", "a.yaml"]


@pytest.mark.parametrize("count", ["two", "-1", "1.5"])
def test_invalid_host_count(count):
    with pytest.raises(InvalidCountError):
        _assembler(["", count]).assemble()


def test_input_error_aborts_and_emits_failure():
    cap = Capture()
    asm = _assembler(["", "1", "10.0.0.1"], bus=EventBus([cap]))
    with pytest.raises(InputIOError):
        asm.assemble()

    failed = [e for e in cap.events if isinstance(e, AssemblyFailed)]
    assert len(failed) == 1
    assert failed[0].stage == "nodes"


def test_stage_events_in_order():
    cap = Capture()
    _assembler(_defaults_for(1), bus=EventBus([cap])).assemble()
    stages = [e.stage for e in cap.events if isinstance(e, StageCompleted)]
    assert stages == [
        "ssh-key-path", "nodes", "network", "authentication", "authorization",
        "system-images", "services", "addons", "finalize",
    ]


def test_empty_template_skips_prompts():
    reader = ScriptedReader([])
    cluster = ConfigAssembler(reader, echo=_quiet).assemble(empty=True)

    assert reader.consumed == 0
    assert cluster.nodes == [Node()]
    assert cluster.model_dump(exclude={"nodes"}) == ClusterConfiguration().model_dump(exclude={"nodes"})


def test_duplicate_addresses_rejected():
    host = ["10.0.0.9"] + [""] * 10
    answers = ["", "2"] + host + host + AFTER_NODES_DEFAULTS + NO_ADDONS
    with pytest.raises(DuplicateNodeAddressError):
        _assembler(answers).assemble()


# ----------------- providers -----------------

class FakeProvider(NodeProvider):
    name = "fake"

    def __init__(self, machines):
        self.machines = machines
        self.read_with = None

    def get_nodes_from_config(self, reader):
        return list(self.machines)

    def read_node_configurations(self, machines, cluster_ssh_key_path=""):
        self.read_with = cluster_ssh_key_path
        return super().read_node_configurations(machines, cluster_ssh_key_path)


def _registry(provider):
    reg = NodeProviderRegistry()
    reg.register_provider(provider.name, provider)
    return reg


def test_unknown_provider_fails_before_prompting():
    reader = ScriptedReader([])
    asm = ConfigAssembler(reader, registry=NodeProviderRegistry(), provider_name="nonexistent", echo=_quiet)
    with pytest.raises(UnknownProviderError):
        asm.assemble()
    assert reader.consumed == 0
    assert asm.provider is None


def test_none_provider_means_manual():
    asm = _assembler(_defaults_for(1), provider_name="none")
    cluster = asm.assemble()
    assert asm.provider is None
    assert len(cluster.nodes) == 1


def test_provider_nodes_keep_machine_order():
    provider = FakeProvider([
        Machine(name="b", address="10.0.0.2", roles=("worker",)),
        Machine(name="a", address="10.0.0.1", ssh_key="INLINE"),
    ])
    answers = ["/keys/cluster"] + AFTER_NODES_DEFAULTS + NO_ADDONS
    cluster = _assembler(answers, registry=_registry(provider), provider_name="fake").assemble()

    assert [n.address for n in cluster.nodes] == ["10.0.0.2", "10.0.0.1"]
    assert cluster.nodes[0].role == ["worker"]
    assert cluster.nodes[0].ssh_key_path == "/keys/cluster"
    assert cluster.nodes[1].role == ["controlplane"]
    assert cluster.nodes[1].ssh_key == "INLINE"
    assert cluster.nodes[1].ssh_key_path == ""
    assert provider.read_with == "/keys/cluster"


def test_provider_with_no_machines_aborts():
    provider = FakeProvider([])
    with pytest.raises(NoNodesSelectedError):
        _assembler([""], registry=_registry(provider), provider_name="fake").assemble()


@pytest.mark.parametrize("count", ["1_0", "١", "+"])
def test_host_count_must_be_ascii_digits(count):
    reader = ScriptedReader(["", count])
    with pytest.raises(InvalidCountError):
        ConfigAssembler(reader, echo=_quiet).assemble()
    assert reader.consumed == 2


def test_default_registry_knows_builtin_providers(tmp_path, monkeypatch):
    d = tmp_path / "machines" / "m1"
    d.mkdir(parents=True)
    (d / "config.json").write_text(
        '{"Name": "m1", "Driver": {"IPAddress": "192.168.99.120", "SSHUser": "docker"}}'
    )
    monkeypatch.setenv("MACHINE_STORAGE_PATH", str(tmp_path))

    answers = ["", ""] + AFTER_NODES_DEFAULTS + NO_ADDONS
    asm = _assembler(answers, provider_name="docker-machine")
    cluster = asm.assemble()

    assert asm.provider.name == "docker-machine"
    assert [n.address for n in cluster.nodes] == ["192.168.99.120"]


class Boom(Exception):
    pass


class RaisingProvider(FakeProvider):
    name = "raising"

    def __init__(self, fail_in):
        super().__init__([Machine(name="a", address="10.0.0.1")])
        self.fail_in = fail_in

    def get_nodes_from_config(self, reader):
        if self.fail_in == "discover":
            raise Boom("discovery failed")
        return super().get_nodes_from_config(reader)

    def read_node_configurations(self, machines, cluster_ssh_key_path=""):
        if self.fail_in == "read":
            raise Boom("read failed")
        return super().read_node_configurations(machines, cluster_ssh_key_path)


@pytest.mark.parametrize("fail_in", ["discover", "read"])
def test_provider_error_propagates_unchanged(fail_in):
    cap = Capture()
    provider = RaisingProvider(fail_in)
    asm = _assembler([""], registry=_registry(provider), provider_name="raising", bus=EventBus([cap]))

    with pytest.raises(Boom):
        asm.assemble()

    stages = [e.stage for e in cap.events if isinstance(e, StageCompleted)]
    assert "nodes" not in stages
    failed = [e for e in cap.events if isinstance(e, AssemblyFailed)]
    assert [f.stage for f in failed] == ["nodes"]
