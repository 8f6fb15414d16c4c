from pathlib import Path

import click

from decine_deployment.constants import LEDGER_FILEPATH, SUPPORTED_NETWORKS
from decine_deployment.types import ChecksumAddress

network_option = click.option(
    "--network",
    "-n",
    "network_name",
    help="Target network",
    type=click.Choice(SUPPORTED_NETWORKS),
    required=True,
)

ledger_option = click.option(
    "--ledger-filepath",
    "-f",
    help="Filepath of the deployed contracts ledger",
    type=click.Path(dir_okay=False, path_type=Path),
    default=LEDGER_FILEPATH,
    show_default=True,
)

account_option = click.option(
    "--account",
    "-a",
    "account_id",
    help="Alias of the ape account used to sign transactions",
    type=click.STRING,
    required=False,
)

signing_address_option = click.option(
    "--signing-address",
    "-s",
    help="Signing address passed to the DeCine initializer; overrides SIGNING_ADDRESS",
    type=ChecksumAddress(),
    required=False,
)
