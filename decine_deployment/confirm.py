import sys
from collections import OrderedDict

from decine_deployment.constants import NULL_ADDRESS


def _abort() -> None:
    print("Aborting deployment!")
    sys.exit(-1)


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    answer = input(f"Deploy {contract_name} Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _continue() -> None:
    """Asks the user to continue."""
    answer = input("Continue Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_null_address() -> None:
    answer = input("Null address detected for initializer parameter; Continue? Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_initializer(named_args: OrderedDict, contract_name: str) -> None:
    """Asks the user to confirm the initializer arguments of a single contract."""
    if len(named_args) == 0:
        print(f"\n(i) No initializer parameters for {contract_name}")
        _confirm_deployment(contract_name)
        return

    print(f"\nInitializer parameters for {contract_name}")
    contains_null_address = False
    for name, value in named_args.items():
        print(f"\t{name}={value}")
        if not contains_null_address:
            contains_null_address = value == NULL_ADDRESS
    _confirm_deployment(contract_name)
    if contains_null_address:
        _confirm_null_address()
