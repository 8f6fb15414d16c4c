#!/usr/bin/python3
import click
from ape import networks

from decine_deployment.config import DeploymentConfig
from decine_deployment.constants import NULL_ADDRESS, SIGNING_ADDRESS_ENVVAR
from decine_deployment.explorer import ExplorerVerifier
from decine_deployment.ledger import AddressLedger
from decine_deployment.options import ledger_option, network_option, signing_address_option
from decine_deployment.utils import check_etherscan_plugin, check_network
from decine_deployment.verification import (
    report_verification,
    verification_requests,
    verify_contracts,
)


@click.command(name="verify:project")
@network_option
@ledger_option
@signing_address_option
def cli(network_name, ledger_filepath, signing_address):
    """Try to verify all deployed contracts recorded in the ledger."""
    config = DeploymentConfig.from_env()
    network = config.network(network_name)
    ledger = AddressLedger(ledger_filepath)

    addresses = ledger.load()
    if not addresses:
        click.secho(f"No deployed contracts recorded in {ledger.filepath}", fg="yellow")
        return

    signing_address = signing_address or config.signing_address
    if not signing_address:
        click.secho(
            f"{SIGNING_ADDRESS_ENVVAR} is not set; DeCine verification will likely fail.",
            fg="yellow",
        )
        signing_address = NULL_ADDRESS

    with networks.parse_network_choice(network.choice):
        check_etherscan_plugin(config=config, network=network)
        check_network(network)
        requests = verification_requests(addresses, signing_address)
        results = verify_contracts(requests, verifier=ExplorerVerifier())

    report_verification(results)


if __name__ == "__main__":
    cli()
