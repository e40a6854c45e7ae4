import pytest
from pydantic import ValidationError

from hoconedit import EndPoint, NodeConfigManager, NodeEndpointKind, Protocol, split_address

QUIET = {"enable_logger": False}


def test_extract_all_endpoints_from_node_conf(configs_dir):
    manager = NodeConfigManager(configs_dir / "complex.conf", config=QUIET)

    endpoints = manager.extract_endpoints()

    assert endpoints == {
        NodeEndpointKind.RPC: EndPoint(
            ip_or_host_name="123.123.123.123", internal_ip="localhost", port=10003, protocol=Protocol.RPC
        ),
        NodeEndpointKind.P2P: EndPoint(
            ip_or_host_name="123.123.123.123", internal_ip="localhost", port=10002, protocol=Protocol.P2P
        ),
        NodeEndpointKind.SSH: EndPoint(
            ip_or_host_name="123.123.123.123", internal_ip="localhost", port=10005, protocol=Protocol.SSH
        ),
    }


def test_rpc_endpoint_uses_rpc_host_as_internal_ip():
    manager = NodeConfigManager.from_string(
        'p2pAddress = "node.example.com:10002"\nrpcSettings { address = "10.0.0.5:10003" }', config=QUIET
    )

    rpc = manager.extract_endpoints()[NodeEndpointKind.RPC]

    assert rpc.ip_or_host_name == "node.example.com"
    assert rpc.internal_ip == "10.0.0.5"
    assert rpc.port == 10003


def test_missing_paths_yield_no_entries():
    manager = NodeConfigManager.from_string('p2pAddress = "localhost:10002"', config=QUIET)
    assert set(manager.extract_endpoints()) == {NodeEndpointKind.P2P}

    empty = NodeConfigManager.from_string("devMode = true", config=QUIET)
    assert empty.extract_endpoints() == {}


def test_invalid_values_are_skipped():
    manager = NodeConfigManager.from_string(
        'p2pAddress = "localhost:99999"\nsshd { port = 2222 }', config=QUIET
    )
    endpoints = manager.extract_endpoints()
    assert NodeEndpointKind.P2P not in endpoints
    assert endpoints[NodeEndpointKind.SSH].port == 2222


@pytest.mark.parametrize(
    "address, expected",
    [
        ("localhost:10003", ("localhost", 10003)),
        (" 10.0.0.1 : 22", ("10.0.0.1", 22)),
        ("localhost", None),
        ("localhost:http", None),
        (None, None),
    ],
)
def test_split_address(address, expected):
    assert split_address(address) == expected


def test_endpoint_validation():
    with pytest.raises(ValidationError):
        EndPoint(ip_or_host_name="not a host!")
    with pytest.raises(ValidationError):
        EndPoint(ip_or_host_name="localhost", port=70000)
    with pytest.raises(ValidationError):
        EndPoint(ip_or_host_name="localhost", internal_ip="internal")
    with pytest.raises(ValidationError):
        EndPoint(ip_or_host_name="localhost", platform_id="x" * 256)


def test_endpoint_helpers():
    endpoint = EndPoint(ip_or_host_name="192.168.1.10", port=22)
    assert endpoint.protocol is Protocol.TCP
    assert endpoint.has_port()
    assert not endpoint.has_internal_ip()
    assert not endpoint.has_platform_id()
    assert endpoint.is_ip_address()
    assert endpoint.ip_address() == "192.168.1.10"

    named = EndPoint(ip_or_host_name="corda.example.com")
    assert not named.is_ip_address()
    with pytest.raises(ValueError):
        named.ip_address()
