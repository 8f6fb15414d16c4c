from typing import Any, Callable, Iterable, List, Mapping, NamedTuple, Optional, Tuple

import click

from decine_deployment.constants import (
    DECINE,
    DECINE_LOYALTY_TOKEN,
    DECINE_NFT,
    DECINE_TOKEN,
    NULL_ADDRESS,
    VERIFICATION_ORDER,
)
from decine_deployment.decine import BANNER, decine_initializer_arguments


class VerificationRequest(NamedTuple):
    contract_name: str
    address: str
    constructor_arguments: Tuple[Any, ...] = ()


class VerificationResult(NamedTuple):
    contract_name: str
    address: str
    error: Optional[str] = None

    @property
    def verified(self) -> bool:
        return self.error is None


Verifier = Callable[[VerificationRequest], Any]


def verification_requests(
    addresses: Mapping[str, str], signing_address: Optional[str]
) -> List[VerificationRequest]:
    """
    Builds one request for each contract with a known address. DeCine is
    verified with the same initializer arguments it was deployed with.
    """
    requests = list()
    for contract_name in VERIFICATION_ORDER:
        if contract_name not in addresses:
            print(f"(i) No address recorded for {contract_name}; skipping.")
            continue

        constructor_arguments = tuple()
        if contract_name == DECINE:
            constructor_arguments = tuple(
                decine_initializer_arguments(
                    addresses.get(DECINE_TOKEN, NULL_ADDRESS),
                    addresses.get(DECINE_LOYALTY_TOKEN, NULL_ADDRESS),
                    addresses.get(DECINE_NFT, NULL_ADDRESS),
                    signing_address,
                )
            )
        requests.append(
            VerificationRequest(
                contract_name=contract_name,
                address=addresses[contract_name],
                constructor_arguments=constructor_arguments,
            )
        )
    return requests


def verify_contracts(
    requests: Iterable[VerificationRequest], verifier: Verifier
) -> List[VerificationResult]:
    """
    Submits every request to the verifier. A failed submission is recorded
    in its result and does not stop the remaining ones.
    """
    results = list()
    for request in requests:
        print(BANNER)
        print(f"Verifying {request.contract_name} smart contract at {request.address}...")
        print(BANNER)
        try:
            verifier(request)
        except Exception as e:
            error = str(e) or e.__class__.__name__
            results.append(VerificationResult(request.contract_name, request.address, error))
        else:
            results.append(VerificationResult(request.contract_name, request.address))
    return results


def report_verification(results: Iterable[VerificationResult]) -> None:
    for result in results:
        if result.verified:
            click.secho(f"✓ {result.contract_name} verified at {result.address}", fg="green")
        else:
            click.secho(
                f"✗ {result.contract_name} at {result.address} "
                f"failed verification: {result.error}",
                fg="red",
            )
