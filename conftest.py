"""
Shared test fixtures
An in-memory chain that stands in for the node during deployment tests
"""

import json
from typing import Dict, List, Optional

import pytest
from eth_utils import keccak, to_checksum_address

DEPOSIT_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "get_deposit_root",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function"
    }
]

MULTICALL_ABI = [
    {
        "inputs": [],
        "name": "getBlockNumber",
        "outputs": [{"internalType": "uint256", "name": "blockNumber", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

BALANCE_CHECKER_ABI = [
    {
        "inputs": [
            {"internalType": "address[]", "name": "users", "type": "address[]"},
            {"internalType": "address[]", "name": "tokens", "type": "address[]"}
        ],
        "name": "balances",
        "outputs": [{"internalType": "uint256[]", "name": "", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function"
    }
]

DEPOSIT_BYTECODE = "608060405234801561001057600080fd5b50"


class FakeConstructor:
    def __init__(self, factory):
        self.factory = factory

    def transact(self, transaction: Optional[Dict] = None):
        return self.factory.eth.submit(self.factory, dict(transaction or {}))


class FakeContractFactory:
    def __init__(self, eth, abi, bytecode):
        self.eth = eth
        self.abi = abi
        self.bytecode = bytecode

    def constructor(self):
        return FakeConstructor(self)


class FakeEth:
    def __init__(self, seed: str, accounts: List[str], accounts_error: Exception = None,
                 fail_on: Optional[int] = None, revert_on: Optional[int] = None):
        self.seed = seed
        self._accounts = accounts
        self.accounts_error = accounts_error
        self.fail_on = fail_on
        self.revert_on = revert_on
        self.chain_id = 31337
        self.submitted = []
        self.receipts = {}

    @property
    def accounts(self):
        if self.accounts_error is not None:
            raise self.accounts_error
        return self._accounts

    def contract(self, abi=None, bytecode=None):
        return FakeContractFactory(self, abi, bytecode)

    def submit(self, factory, params):
        nonce = len(self.submitted)
        self.submitted.append((factory, params))

        if "from" not in params:
            raise ValueError("unknown account: transaction has no sender")
        if nonce == self.fail_on:
            raise ValueError("insufficient funds for gas * price + value")

        tx_hash = keccak(text=f"{self.seed}:tx:{nonce}")
        address = to_checksum_address(keccak(text=f"{self.seed}:contract:{nonce}")[-20:])
        self.receipts[tx_hash] = {
            "status": 0 if nonce == self.revert_on else 1,
            "contractAddress": None if nonce == self.revert_on else address,
            "transactionHash": tx_hash,
        }
        return tx_hash

    def wait_for_transaction_receipt(self, tx_hash):
        return self.receipts[tx_hash]


class FakeWeb3:
    def __init__(self, eth: FakeEth):
        self.eth = eth

    def is_connected(self):
        return True


def make_accounts(seed: str, count: int = 3) -> List[str]:
    return [to_checksum_address(keccak(text=f"{seed}:account:{i}")[-20:]) for i in range(count)]


@pytest.fixture
def contracts_dir(tmp_path):
    """Deposit ABI/bytecode files plus a Hardhat-style artifacts tree"""
    contracts = tmp_path / "contracts"
    contracts.mkdir()
    (contracts / "Deposit.abi").write_text(json.dumps(DEPOSIT_ABI))
    (contracts / "Deposit.bin").write_text(DEPOSIT_BYTECODE + "\n")

    artifacts = tmp_path / "artifacts" / "contracts"
    for name, abi, bytecode in (
        ("Multicall2", MULTICALL_ABI, "0x6080604052348015600f57600080fd5b5061"),
        ("BalanceChecker", BALANCE_CHECKER_ABI, "0x608060405234801561001057600080fd5b5062"),
    ):
        folder = artifacts / f"{name}.sol"
        folder.mkdir(parents=True)
        (folder / f"{name}.json").write_text(json.dumps({
            "contractName": name,
            "abi": abi,
            "bytecode": bytecode,
        }))
        (folder / f"{name}.dbg.json").write_text(json.dumps({"buildInfo": "../../build-info/x.json"}))

    return tmp_path


@pytest.fixture
def settings(contracts_dir):
    from deployer.config import DeploymentSettings

    return DeploymentSettings(
        network="localtest",
        deposit_abi_path=str(contracts_dir / "contracts" / "Deposit.abi"),
        deposit_bin_path=str(contracts_dir / "contracts" / "Deposit.bin"),
        artifacts_dir=str(contracts_dir / "artifacts"),
        log_file=None,
    )


@pytest.fixture
def make_chain():
    def _make(seed: str = "chain-a", **kwargs) -> FakeWeb3:
        accounts = kwargs.pop("accounts", None)
        if accounts is None:
            accounts = make_accounts(seed)
        return FakeWeb3(FakeEth(seed, accounts, **kwargs))

    return _make
