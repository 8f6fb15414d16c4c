import typing
from collections import OrderedDict
from typing import Any, List

from ape import networks
from ape.api import AccountAPI
from ape.contracts.base import ContractContainer, ContractInstance
from ape_accounts import KeyfileAccount
from ethpm_types import MethodABI
from web3 import Web3

from decine_deployment.config import DeploymentConfig, NetworkConfig
from decine_deployment.confirm import _confirm_initializer, _continue
from decine_deployment.constants import INITIALIZER_METHOD, PROXY_CONTRACT
from decine_deployment.decine import DeployedContractSet, deploy_decine
from decine_deployment.explorer import ExplorerVerifier
from decine_deployment.ledger import AddressLedger
from decine_deployment.utils import check_etherscan_plugin, check_network, get_contract_container
from decine_deployment.verification import (
    report_verification,
    verification_requests,
    verify_contracts,
)

w3 = Web3()


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = OrderedDict()
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


class Deployer:
    """
    Represents an ape account plus the configuration of a DeCine deployment,
    with validated/annotated execution of proxied contract deployments.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        network: NetworkConfig,
        account: AccountAPI,
        ledger: AddressLedger,
        verify: bool = False,
        autosign: bool = False,
    ):
        if verify:
            check_etherscan_plugin(config=config, network=network)
        check_network(network)

        self.config = config
        self.network = network
        self.ledger = ledger
        self.verify = verify
        self.signing_address = config.require_signing_address()

        self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
            if isinstance(account, KeyfileAccount):
                account.set_autosign(True, passphrase=config.passphrase)
        self._autosign = autosign

        self._print_deployment_info()
        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    def get_account(self) -> AccountAPI:
        """Returns the deployer account."""
        return self._account

    def _deploy_contract(self, container: ContractContainer, *args) -> ContractInstance:
        return self._account.deploy(container, *args, publish=False)

    def deploy_proxy(self, contract_name: str, *initializer_args) -> ContractInstance:
        """
        Deploys the implementation of the contract and a transparent upgradeable
        proxy that initializes it, and returns the contract at the proxy address.
        """
        container = get_contract_container(contract_name)
        method_abis = [
            abi for abi in container.contract_type.methods if abi.name == INITIALIZER_METHOD
        ]
        named_args = _validate_method_args(method_abis=method_abis, args=initializer_args)
        if not self._autosign:
            _confirm_initializer(named_args, contract_name)

        implementation = self._deploy_contract(container)
        initializer = getattr(implementation, INITIALIZER_METHOD)
        data = initializer.encode_input(*initializer_args)

        proxy_container = get_contract_container(PROXY_CONTRACT)
        print(f"\nDeploying {PROXY_CONTRACT} contract to proxy {contract_name}.")
        proxy_contract = self._deploy_contract(
            proxy_container, implementation.address, self._account.address, data
        )
        print(
            f"\nWrapping {contract_name} into {PROXY_CONTRACT} "
            f"(implementation at {implementation.address}) at {proxy_contract.address}."
        )
        return container.at(proxy_contract.address)

    def run(self) -> DeployedContractSet:
        deployed = deploy_decine(deployer=self, signing_address=self.signing_address)
        self.finalize(deployed)
        return deployed

    def finalize(self, deployed: DeployedContractSet) -> None:
        """
        Records the deployment in the ledger and optionally verifies it on the block explorer.
        """
        self.ledger.merge(deployed.addresses())
        print(f"(i) Addresses written to {self.ledger.filepath}!")
        if self.verify:
            requests = verification_requests(deployed.addresses(), self.signing_address)
            results = verify_contracts(requests, verifier=ExplorerVerifier())
            report_verification(results)

    def _print_deployment_info(self):
        print(
            f"Account: {self.get_account().address}",
            f"Ledger: {self.ledger.filepath}",
            f"Signing Address: {self.signing_address}",
            f"Verify: {self.verify}",
            f"Network: {self.network.name}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Chain ID: {networks.provider.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
