from typing import Any, List, NamedTuple, Tuple

import pytest
from eth_utils import keccak, to_checksum_address

from decine_deployment.config import DeploymentConfig
from decine_deployment.ledger import AddressLedger

SIGNING_ADDRESS = to_checksum_address("0x8ba1f109551bd432803012645ac136ddd64dba72")


# Utility functions
def fake_address(seed: str) -> str:
    return to_checksum_address(keccak(text=seed)[-20:])


class ProxyDeployment(NamedTuple):
    contract_name: str
    address: str
    initializer_args: Tuple[Any, ...]
    # addresses of every contract deployed before this one
    known_addresses: Tuple[str, ...]


class FakeProxyDeployer:
    """Stands in for the ape-backed deployer; records every proxy deployment."""

    class Reverted(Exception):
        pass

    def __init__(self, fail_on: str = None):
        self.fail_on = fail_on
        self.deployments: List[ProxyDeployment] = list()

    def deploy_proxy(self, contract_name, *initializer_args):
        if contract_name == self.fail_on:
            raise self.Reverted(f"{contract_name}: execution reverted")
        deployment = ProxyDeployment(
            contract_name=contract_name,
            address=fake_address(f"{contract_name}-{len(self.deployments)}"),
            initializer_args=initializer_args,
            known_addresses=tuple(d.address for d in self.deployments),
        )
        self.deployments.append(deployment)
        return deployment

    @property
    def deployed_names(self) -> List[str]:
        return [d.contract_name for d in self.deployments]


class RecordingVerifier:
    """Records verification requests, failing for the given contract names."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.requests = list()

    def __call__(self, request):
        self.requests.append(request)
        if request.contract_name in self.failing:
            raise RuntimeError(f"Bytecode mismatch for {request.contract_name}")


# Fixtures
@pytest.fixture
def signing_address():
    return SIGNING_ADDRESS


@pytest.fixture
def ledger_filepath(tmp_path):
    return tmp_path / "deployed-contracts.json"


@pytest.fixture
def ledger(ledger_filepath):
    return AddressLedger(ledger_filepath)


@pytest.fixture
def proxy_deployer():
    return FakeProxyDeployer()


@pytest.fixture
def deployment_config(signing_address):
    return DeploymentConfig.from_env(environ={"SIGNING_ADDRESS": signing_address})
