"""
Deployment Settings
Reads the run configuration from the environment (and an optional .env file)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from web3 import Web3

DEFAULT_NETWORK = "localtest"
DEFAULT_SENDER_INDEX = 1
DEFAULT_DEPOSIT_GAS = 8000000
DEFAULT_DEPOSIT_GAS_PRICE_GWEI = "20"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class DeploymentSettings:
    network: str = DEFAULT_NETWORK
    rpc_url: Optional[str] = None
    sender_index: int = DEFAULT_SENDER_INDEX
    deposit_abi_path: str = "./contracts/Deposit.abi"
    deposit_bin_path: str = "./contracts/Deposit.bin"
    artifacts_dir: str = "./artifacts"
    deposit_gas: int = DEFAULT_DEPOSIT_GAS
    deposit_gas_price: int = Web3.to_wei(DEFAULT_DEPOSIT_GAS_PRICE_GWEI, "gwei")
    multicall_contract: str = "Multicall2"
    balance_batcher_contract: str = "BalanceChecker"
    log_file: Optional[str] = "deploy.log"

    def __post_init__(self):
        if self.sender_index < 0:
            raise ValueError(f"Sender account index must be >= 0, got {self.sender_index}")
        if self.deposit_gas <= 0:
            raise ValueError(f"Deposit gas limit must be positive, got {self.deposit_gas}")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "DeploymentSettings":
        """Build settings from environment variables"""
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        gas_price_gwei = os.getenv("DEPOSIT_GAS_PRICE_GWEI", DEFAULT_DEPOSIT_GAS_PRICE_GWEI)
        try:
            gas_price = Web3.to_wei(gas_price_gwei, "gwei")
        except (ValueError, ArithmeticError):
            raise ValueError(f"DEPOSIT_GAS_PRICE_GWEI must be a number, got {gas_price_gwei!r}")

        return cls(
            network=os.getenv("DEPLOY_NETWORK", DEFAULT_NETWORK),
            rpc_url=os.getenv("DEPLOY_RPC") or None,
            sender_index=_int_env("DEPLOYER_ACCOUNT_INDEX", DEFAULT_SENDER_INDEX),
            deposit_abi_path=os.getenv("DEPOSIT_ABI_PATH", cls.deposit_abi_path),
            deposit_bin_path=os.getenv("DEPOSIT_BIN_PATH", cls.deposit_bin_path),
            artifacts_dir=os.getenv("ARTIFACTS_DIR", cls.artifacts_dir),
            deposit_gas=_int_env("DEPOSIT_GAS_LIMIT", DEFAULT_DEPOSIT_GAS),
            deposit_gas_price=gas_price,
            multicall_contract=os.getenv("MULTICALL_CONTRACT", cls.multicall_contract),
            balance_batcher_contract=os.getenv("BALANCE_BATCHER_CONTRACT", cls.balance_batcher_contract),
            log_file=os.getenv("DEPLOY_LOG_FILE", cls.log_file) or None,
        )
