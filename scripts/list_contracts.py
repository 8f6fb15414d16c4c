#!/usr/bin/python3
import click

from decine_deployment.ledger import AddressLedger
from decine_deployment.options import ledger_option


@click.command(name="list-contracts")
@ledger_option
def cli(ledger_filepath):
    """List all contracts recorded in the ledger."""
    ledger = AddressLedger(ledger_filepath)
    addresses = ledger.load()
    if not addresses:
        click.secho(f"No deployed contracts recorded in {ledger.filepath}", fg="yellow")
        return

    click.secho(f"\nDeCine contracts ({ledger.filepath})", fg="green")
    for index, (contract_name, address) in enumerate(sorted(addresses.items()), start=1):
        click.secho(f"    {index}. {contract_name} {address}", fg="cyan")


if __name__ == "__main__":
    cli()
