from ape import networks

from decine_deployment.utils import get_implementation
from decine_deployment.verification import VerificationRequest


class ExplorerVerifier:
    """Publishes contract sources to the block explorer of the connected network."""

    def __call__(self, request: VerificationRequest) -> None:
        explorer = networks.provider.network.explorer
        if explorer is None:
            raise ValueError(f"No explorer available for network {networks.provider.network.name}")

        instance = get_implementation(request.contract_name, request.address)
        if request.constructor_arguments:
            arguments = ", ".join(str(arg) for arg in request.constructor_arguments)
            print(f"(i) {request.contract_name} initializer arguments: {arguments}")
        print(f"(i) Verifying {request.contract_name} at {instance.address}...")
        explorer.publish_contract(instance.address)
