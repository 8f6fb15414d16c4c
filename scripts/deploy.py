#!/usr/bin/python3
import click
from ape import networks

from decine_deployment.config import DeploymentConfig
from decine_deployment.deployer import Deployer
from decine_deployment.ledger import AddressLedger
from decine_deployment.options import (
    account_option,
    ledger_option,
    network_option,
    signing_address_option,
)
from decine_deployment.utils import get_account


@click.command()
@network_option
@account_option
@ledger_option
@signing_address_option
@click.option(
    "--verify/--no-verify",
    help="Verify the deployed contracts on the block explorer",
    default=False,
)
@click.option(
    "--autosign",
    help="Sign transactions without asking for confirmation",
    is_flag=True,
    default=False,
)
def cli(network_name, account_id, ledger_filepath, signing_address, verify, autosign):
    """Deploy the DeCine contracts behind upgradeable proxies."""
    config = DeploymentConfig.from_env()
    if signing_address:
        config = config._replace(signing_address=signing_address)
    network = config.network(network_name)

    with networks.parse_network_choice(network.choice):
        account = get_account(config=config, network=network, account_id=account_id)
        deployer = Deployer(
            config=config,
            network=network,
            account=account,
            ledger=AddressLedger(ledger_filepath),
            verify=verify,
            autosign=autosign,
        )
        deployed = deployer.run()

    click.secho("\nDeployed contracts", fg="green")
    for contract_name, address in deployed.addresses().items():
        click.secho(f"    {contract_name} {address}", fg="cyan")


if __name__ == "__main__":
    cli()
