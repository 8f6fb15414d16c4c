from contextlib import nullcontext
from types import SimpleNamespace

import pytest
from click.testing import CliRunner

from decine_deployment.constants import (
    DECINE,
    DECINE_LOYALTY_TOKEN,
    DECINE_NFT,
    DECINE_TOKEN,
    NULL_ADDRESS,
    TESTNET,
    VERIFICATION_ORDER,
)
from decine_deployment.decine import DeployedContractSet
from scripts import deploy as deploy_script
from scripts import verify_project as verify_script
from tests.conftest import RecordingVerifier, fake_address


class FakeNetworks:
    """Records the network choices connected to."""

    def __init__(self):
        self.choices = list()

    def parse_network_choice(self, choice):
        self.choices.append(choice)
        return nullcontext()


class FakeDeployer:
    def __init__(self, fail=False, **kwargs):
        self.fail = fail
        self.kwargs = kwargs

    def run(self):
        if self.fail:
            raise RuntimeError("execution reverted")
        return DeployedContractSet(
            decine_token=fake_address(DECINE_TOKEN),
            decine_loyalty_token=fake_address(DECINE_LOYALTY_TOKEN),
            decine_nft=fake_address(DECINE_NFT),
            decine=fake_address(DECINE),
        )


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_networks():
    return FakeNetworks()


@pytest.fixture
def deploy_runtime(monkeypatch, fake_networks, deployment_config):
    deployers = list()

    def make_deployer(**kwargs):
        deployer = FakeDeployer(**kwargs)
        deployers.append(deployer)
        return deployer

    monkeypatch.setattr(deploy_script, "networks", fake_networks)
    monkeypatch.setattr(
        deploy_script, "DeploymentConfig", SimpleNamespace(from_env=lambda: deployment_config)
    )
    monkeypatch.setattr(
        deploy_script, "get_account", lambda config, network, account_id: account_id
    )
    monkeypatch.setattr(deploy_script, "Deployer", make_deployer)
    return deployers


@pytest.fixture
def verifier():
    return RecordingVerifier()


@pytest.fixture
def verify_runtime(monkeypatch, fake_networks, verifier):
    checks = list()

    def use_config(config):
        monkeypatch.setattr(
            verify_script, "DeploymentConfig", SimpleNamespace(from_env=lambda: config)
        )

    monkeypatch.setattr(verify_script, "networks", fake_networks)
    monkeypatch.setattr(
        verify_script,
        "check_etherscan_plugin",
        lambda config, network: checks.append(("etherscan", network.name)),
    )
    monkeypatch.setattr(
        verify_script, "check_network", lambda network: checks.append(("network", network.name))
    )
    monkeypatch.setattr(verify_script, "ExplorerVerifier", lambda: verifier)
    return SimpleNamespace(checks=checks, use_config=use_config)


@pytest.fixture
def recorded_ledger(ledger):
    ledger.merge({name: fake_address(name) for name in VERIFICATION_ORDER})
    return ledger


def test_deploy(runner, deploy_runtime, fake_networks, deployment_config, ledger_filepath):
    result = runner.invoke(
        deploy_script.cli,
        ["--network", TESTNET, "--account", "operator", "-f", str(ledger_filepath), "--verify"],
    )

    assert result.exit_code == 0, result.output
    assert fake_networks.choices == [deployment_config.network(TESTNET).choice]

    (deployer,) = deploy_runtime
    assert deployer.kwargs["account"] == "operator"
    assert deployer.kwargs["network"] == deployment_config.network(TESTNET)
    assert deployer.kwargs["ledger"].filepath == ledger_filepath
    assert deployer.kwargs["verify"] is True
    assert deployer.kwargs["autosign"] is False
    assert deployer.kwargs["config"] == deployment_config

    assert "Deployed contracts" in result.output
    for name in VERIFICATION_ORDER:
        assert f"    {name} {fake_address(name)}" in result.output


def test_deploy_signing_address_override(runner, deploy_runtime, ledger_filepath):
    override = fake_address("override-signer")
    result = runner.invoke(
        deploy_script.cli,
        ["-n", TESTNET, "-f", str(ledger_filepath), "--signing-address", override.lower()],
    )

    assert result.exit_code == 0, result.output
    (deployer,) = deploy_runtime
    assert deployer.kwargs["config"].signing_address == override


def test_deploy_failure(runner, deploy_runtime, monkeypatch, ledger_filepath):
    monkeypatch.setattr(deploy_script, "Deployer", lambda **kwargs: FakeDeployer(fail=True))
    result = runner.invoke(deploy_script.cli, ["-n", TESTNET, "-f", str(ledger_filepath)])

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
    assert "Deployed contracts" not in result.output


def test_deploy_unknown_network(runner, deploy_runtime, fake_networks):
    result = runner.invoke(deploy_script.cli, ["--network", "goerli"])
    assert result.exit_code == 2
    assert fake_networks.choices == []


def test_verify_project(
    runner, verify_runtime, fake_networks, verifier, deployment_config, recorded_ledger
):
    verify_runtime.use_config(deployment_config)
    result = runner.invoke(verify_script.cli, ["-n", TESTNET, "-f", str(recorded_ledger.filepath)])

    assert result.exit_code == 0, result.output
    assert fake_networks.choices == [deployment_config.network(TESTNET).choice]
    assert verify_runtime.checks == [("etherscan", TESTNET), ("network", TESTNET)]
    assert [r.contract_name for r in verifier.requests] == VERIFICATION_ORDER
    assert verifier.requests[0].constructor_arguments[-1] == deployment_config.signing_address
    for name in VERIFICATION_ORDER:
        assert f"✓ {name} verified at {fake_address(name)}" in result.output


def test_verify_project_empty_ledger(
    runner, verify_runtime, fake_networks, verifier, deployment_config, ledger_filepath
):
    verify_runtime.use_config(deployment_config)
    result = runner.invoke(verify_script.cli, ["-n", TESTNET, "-f", str(ledger_filepath)])

    assert result.exit_code == 0, result.output
    assert "No deployed contracts recorded" in result.output
    # nothing to verify; never connects
    assert fake_networks.choices == []
    assert verifier.requests == []


def test_verify_project_without_signing_address(
    runner, verify_runtime, verifier, deployment_config, recorded_ledger
):
    verify_runtime.use_config(deployment_config._replace(signing_address=None))
    result = runner.invoke(verify_script.cli, ["-n", TESTNET, "-f", str(recorded_ledger.filepath)])

    assert result.exit_code == 0, result.output
    assert "SIGNING_ADDRESS is not set" in result.output
    decine_request = verifier.requests[0]
    assert decine_request.contract_name == DECINE
    assert decine_request.constructor_arguments[-1] == NULL_ADDRESS


def test_verify_project_signing_address_override(
    runner, verify_runtime, verifier, deployment_config, recorded_ledger
):
    verify_runtime.use_config(deployment_config._replace(signing_address=None))
    override = fake_address("override-signer")
    result = runner.invoke(
        verify_script.cli,
        ["-n", TESTNET, "-f", str(recorded_ledger.filepath), "-s", override],
    )

    assert result.exit_code == 0, result.output
    assert "SIGNING_ADDRESS is not set" not in result.output
    assert verifier.requests[0].constructor_arguments[-1] == override


def test_verify_project_reports_every_contract(
    runner, verify_runtime, verifier, deployment_config, recorded_ledger
):
    verify_runtime.use_config(deployment_config)
    verifier.failing.add(DECINE_TOKEN)
    result = runner.invoke(verify_script.cli, ["-n", TESTNET, "-f", str(recorded_ledger.filepath)])

    assert result.exit_code == 0, result.output
    assert (
        f"✗ {DECINE_TOKEN} at {fake_address(DECINE_TOKEN)} failed verification: "
        f"Bytecode mismatch for {DECINE_TOKEN}" in result.output
    )
    for name in (DECINE, DECINE_LOYALTY_TOKEN, DECINE_NFT):
        assert f"✓ {name} verified at {fake_address(name)}" in result.output
