import os
from pathlib import Path
from typing import Dict, List, Mapping, NamedTuple, Optional

from dotenv import load_dotenv
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from decine_deployment.constants import (
    API_KEY_ENVVAR,
    BSC_ECOSYSTEM,
    CHAIN_IDS,
    DEFAULT_RPC_URLS,
    DOTENV_FILEPATH,
    LOCAL,
    LOCAL_NETWORK_CHOICE,
    NULL_ADDRESS,
    PASSPHRASE_ENVVAR,
    PRIVATE_KEY_ENVVAR,
    RPC_URL_ENVVARS,
    SIGNING_ADDRESS_ENVVAR,
    SUPPORTED_NETWORKS,
)


class NetworkConfig(NamedTuple):
    """Connection details for one target network."""

    name: str
    chain_id: int
    rpc_url: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.name == LOCAL

    @property
    def choice(self) -> str:
        """The ape network choice used to connect to this network."""
        if self.is_local:
            return LOCAL_NETWORK_CHOICE
        return f"{BSC_ECOSYSTEM}:{self.name}:{self.rpc_url}"


class DeploymentConfig(NamedTuple):
    """
    Process configuration, built once at start-up and handed to the
    deployer and the verifier.
    """

    api_key: str
    signing_key: Optional[str]
    signing_address: Optional[ChecksumAddress]
    networks: Dict[str, NetworkConfig]
    passphrase: Optional[str] = None

    @property
    def accounts(self) -> List[str]:
        """Signing material; empty when no private key is configured."""
        return [self.signing_key] if self.signing_key else []

    def network(self, name: str) -> NetworkConfig:
        try:
            return self.networks[name]
        except KeyError:
            raise ValueError(
                f"Unknown network '{name}'; expected one of {', '.join(self.networks)}"
            )

    def require_signing_address(self) -> ChecksumAddress:
        if not self.signing_address or self.signing_address == NULL_ADDRESS:
            raise ValueError(f"{SIGNING_ADDRESS_ENVVAR} is not set.")
        return self.signing_address

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv_path: Path = DOTENV_FILEPATH
    ) -> "DeploymentConfig":
        """
        Reads the configuration from the environment. When no explicit
        environment is given, the project's .env file is loaded first.
        """
        if environ is None:
            load_dotenv(dotenv_path=dotenv_path)
            environ = os.environ

        networks = dict()
        for name in SUPPORTED_NETWORKS:
            rpc_url = None
            if name != LOCAL:
                rpc_url = environ.get(RPC_URL_ENVVARS[name]) or DEFAULT_RPC_URLS[name]
            networks[name] = NetworkConfig(name=name, chain_id=CHAIN_IDS[name], rpc_url=rpc_url)

        signing_address = environ.get(SIGNING_ADDRESS_ENVVAR) or None
        if signing_address:
            try:
                signing_address = to_checksum_address(signing_address)
            except ValueError:
                raise ValueError(f"{SIGNING_ADDRESS_ENVVAR} is not a valid address.")

        return cls(
            api_key=environ.get(API_KEY_ENVVAR, ""),
            signing_key=environ.get(PRIVATE_KEY_ENVVAR) or None,
            signing_address=signing_address,
            networks=networks,
            passphrase=environ.get(PASSPHRASE_ENVVAR) or None,
        )
