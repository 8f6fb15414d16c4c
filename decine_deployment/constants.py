from pathlib import Path

import decine_deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(decine_deployment.__file__).parent
PROJECT_ROOT = DEPLOYMENT_DIR.parent
LEDGER_FILEPATH = PROJECT_ROOT / "deployed-contracts.json"
DOTENV_FILEPATH = PROJECT_ROOT / ".env"

#
# Networks
#

MAINNET = "mainnet"
TESTNET = "testnet"
LOCAL = "local"

SUPPORTED_NETWORKS = [MAINNET, TESTNET, LOCAL]

BSC_ECOSYSTEM = "bsc"

CHAIN_IDS = {
    MAINNET: 56,
    TESTNET: 97,
    LOCAL: 31337,
}

DEFAULT_RPC_URLS = {
    MAINNET: "https://rpc.ankr.com/bsc",
    TESTNET: "https://data-seed-prebsc-1-s1.binance.org:8545/",
}

LOCAL_NETWORK_CHOICE = "ethereum:local:test"

#
# Environment
#

API_KEY_ENVVAR = "BSCSCAN_API_KEY"
PRIVATE_KEY_ENVVAR = "PRIVATE_KEY"
PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"
SIGNING_ADDRESS_ENVVAR = "SIGNING_ADDRESS"

RPC_URL_ENVVARS = {
    MAINNET: "BSC_MAINNET_URL",
    TESTNET: "BSC_TESTNET_URL",
}

DEPLOYER_ACCOUNT_ALIAS = "decine-deployer"

#
# Contracts
#

DECINE_TOKEN = "DeCineToken"
DECINE_LOYALTY_TOKEN = "DeCineLoyaltyToken"
DECINE_NFT = "DeCineNFT"
DECINE = "DeCine"

# dependencies first; DeCine is initialized with the addresses of the other three
DEPLOYMENT_ORDER = [DECINE_TOKEN, DECINE_LOYALTY_TOKEN, DECINE_NFT, DECINE]

VERIFICATION_ORDER = [DECINE, DECINE_TOKEN, DECINE_LOYALTY_TOKEN, DECINE_NFT]

PROXY_CONTRACT = "TransparentUpgradeableProxy"
INITIALIZER_METHOD = "initialize"

NULL_ADDRESS = "0x" + "0" * 40
