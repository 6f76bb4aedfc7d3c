"""
Network Resolution
Maps a network name to its RPC endpoint and opens the Web3 connection
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from web3 import Web3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    rpc: str
    chain_id: Optional[int] = None


# Development networks whose nodes manage funded accounts
NETWORK_CONFIGS = {
    "localtest": {
        "rpc": "http://127.0.0.1:8545",
        "chain_id": 31337
    },
    "hardhat": {
        "rpc": "http://127.0.0.1:8545",
        "chain_id": 31337
    }
}


def resolve_network(name: str, rpc_override: Optional[str] = None) -> NetworkConfig:
    """Resolve a network name to its configuration"""
    env_rpc = os.getenv(f"{name.upper()}_RPC")

    if name in NETWORK_CONFIGS:
        config = NETWORK_CONFIGS[name]
        return NetworkConfig(
            name=name,
            rpc=rpc_override or env_rpc or config["rpc"],
            chain_id=config["chain_id"]
        )

    # Any other node can be targeted through an explicit endpoint
    rpc = rpc_override or env_rpc
    if not rpc:
        raise ValueError(f"Unsupported network: {name} (set {name.upper()}_RPC or DEPLOY_RPC)")
    return NetworkConfig(name=name, rpc=rpc)


def connect(network: NetworkConfig) -> Web3:
    """Open a Web3 connection to the network's RPC endpoint"""
    web3 = Web3(Web3.HTTPProvider(network.rpc))
    if not web3.is_connected():
        raise ConnectionError(f"Failed to connect to {network.name} at {network.rpc}")

    chain_id = web3.eth.chain_id
    if network.chain_id is not None and chain_id != network.chain_id:
        logger.warning(
            f"Connected to chain {chain_id} but {network.name} expects chain {network.chain_id}"
        )

    logger.info(f"Connected to {network.name} (chain {chain_id})")
    return web3
