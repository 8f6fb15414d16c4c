from collections import OrderedDict
from typing import Any, List, NamedTuple

from eth_typing import ChecksumAddress

from decine_deployment.constants import (
    DECINE,
    DECINE_LOYALTY_TOKEN,
    DECINE_NFT,
    DECINE_TOKEN,
    NULL_ADDRESS,
)

BANNER = "=" * 34


class DeployedContractSet(NamedTuple):
    """Proxy addresses produced by a single deployment run."""

    decine_token: ChecksumAddress
    decine_loyalty_token: ChecksumAddress
    decine_nft: ChecksumAddress
    decine: ChecksumAddress

    def addresses(self) -> "OrderedDict[str, ChecksumAddress]":
        """Contract name to address, in deployment order."""
        return OrderedDict(
            [
                (DECINE_TOKEN, self.decine_token),
                (DECINE_LOYALTY_TOKEN, self.decine_loyalty_token),
                (DECINE_NFT, self.decine_nft),
                (DECINE, self.decine),
            ]
        )


def decine_initializer_arguments(
    decine_token: str, decine_loyalty_token: str, decine_nft: str, signing_address: str
) -> List[Any]:
    """
    Initializer arguments of the DeCine contract. Used both at deployment
    and at verification time so the two always agree.
    """
    return [decine_token, decine_loyalty_token, decine_nft, signing_address]


def _deploy(deployer, contract_name: str, *initializer_args) -> ChecksumAddress:
    print(BANNER)
    print(f"Deploying {contract_name} contract...")
    print(BANNER)
    instance = deployer.deploy_proxy(contract_name, *initializer_args)
    print(f"{contract_name} contract deployed to: {instance.address}")
    return instance.address


def deploy_decine(deployer, signing_address: ChecksumAddress) -> DeployedContractSet:
    """
    Deploys the DeCine contracts behind upgrade proxies, dependencies first.

    `deployer` must provide `deploy_proxy(contract_name, *initializer_args)`
    returning a deployed instance; errors raised by it propagate and leave
    any contract already deployed in place.
    """
    if not signing_address or signing_address == NULL_ADDRESS:
        raise ValueError("A signing address is required to initialize the DeCine contract.")

    print(BANNER)
    print("Deploying DeCine contracts...")

    decine_token = _deploy(deployer, DECINE_TOKEN)
    decine_loyalty_token = _deploy(deployer, DECINE_LOYALTY_TOKEN)
    decine_nft = _deploy(deployer, DECINE_NFT)

    dependencies = {
        DECINE_TOKEN: decine_token,
        DECINE_LOYALTY_TOKEN: decine_loyalty_token,
        DECINE_NFT: decine_nft,
    }
    for name, address in dependencies.items():
        if not address or address == NULL_ADDRESS:
            raise ValueError(f"{name} has no address; cannot initialize {DECINE}.")

    initializer_args = decine_initializer_arguments(
        decine_token, decine_loyalty_token, decine_nft, signing_address
    )
    print(f"{DECINE} initializer arguments: {initializer_args}")
    decine = _deploy(deployer, DECINE, *initializer_args)
    print(BANNER)

    return DeployedContractSet(
        decine_token=decine_token,
        decine_loyalty_token=decine_loyalty_token,
        decine_nft=decine_nft,
        decine=decine,
    )
