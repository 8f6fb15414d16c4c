from ape import accounts, networks, project
from ape.api import AccountAPI
from ape.contracts import ContractContainer, ContractInstance
from ape_accounts import import_account_from_private_key

from decine_deployment.config import DeploymentConfig, NetworkConfig
from decine_deployment.constants import API_KEY_ENVVAR, DEPLOYER_ACCOUNT_ALIAS, PRIVATE_KEY_ENVVAR


def check_etherscan_plugin(config: DeploymentConfig, network: NetworkConfig) -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the explorer API key is configured.
    """
    if network.is_local:
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to verify contracts.")
    if not config.api_key:
        raise ValueError(f"{API_KEY_ENVVAR} is not set.")


def check_network(network: NetworkConfig) -> None:
    """Checks that the connected chain is the one the network is configured for."""
    if network.is_local:
        return
    chain_id = networks.provider.chain_id
    if chain_id != network.chain_id:
        raise ValueError(
            f"Connected to chain {chain_id} but network '{network.name}' "
            f"expects chain {network.chain_id}."
        )


def get_account(
    config: DeploymentConfig, network: NetworkConfig, account_id: str = None
) -> AccountAPI:
    if network.is_local:
        return accounts.test_accounts[0]
    if account_id:
        return accounts.load(account_id)
    if not config.accounts:
        raise ValueError(
            f"{PRIVATE_KEY_ENVVAR} is not set and no account was given; "
            "transactions cannot be signed."
        )
    if DEPLOYER_ACCOUNT_ALIAS in accounts.aliases:
        return accounts.load(DEPLOYER_ACCOUNT_ALIAS)
    if not config.passphrase:
        raise ValueError("A passphrase is required to import the deployer account.")
    account = import_account_from_private_key(
        DEPLOYER_ACCOUNT_ALIAS, config.passphrase, config.signing_key
    )
    print(f"Account imported: {account.address}")
    return account


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container


def get_implementation(contract_name: str, address: str) -> ContractInstance:
    """
    Returns the contract at the address, or the implementation behind it
    when the address is a proxy.
    """
    contract_container = get_contract_container(contract_name)
    proxy_info = networks.provider.network.ecosystem.get_proxy_info(address)
    if proxy_info:
        print(f"Proxy contract detected; using implementation contract at {proxy_info.target}")
        return contract_container.at(proxy_info.target)
    return contract_container.at(address)
