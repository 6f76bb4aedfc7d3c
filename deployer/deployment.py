"""
Contract Deployment Module
Deploys the Beacon deposit contract, Multicall and the balance batcher in sequence
"""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from eth_utils import to_checksum_address
from web3 import Web3

from deployer.artifacts import Artifact, ArtifactRegistry, load_abi, load_bytecode
from deployer.config import DeploymentSettings
from deployer.errors import DeploymentError
from deployer.logging_utils import setup_logging
from deployer.network import NetworkConfig, connect, resolve_network

logger = logging.getLogger(__name__)

DEPOSIT_CONTRACT_NAME = "Deposit"


@dataclass(frozen=True)
class DeployedContract:
    name: str
    address: str
    abi: List[Dict]
    transaction_hash: str


@dataclass
class DeploymentResult:
    network: str
    sender: Optional[str]
    contracts: "OrderedDict[str, DeployedContract]" = field(default_factory=OrderedDict)

    def addresses(self) -> Dict[str, str]:
        """Contract name to address, in deployment order"""
        return OrderedDict((name, c.address) for name, c in self.contracts.items())


class ContractDeployer:
    def __init__(self, settings: DeploymentSettings, web3: Optional[Web3] = None,
                 registry: Optional[ArtifactRegistry] = None):
        self.settings = settings
        self.web3 = web3
        self.registry = registry or ArtifactRegistry(settings.artifacts_dir)
        self.network: Optional[NetworkConfig] = None

    async def resolve_network(self) -> NetworkConfig:
        """Resolve the target network and connect to it"""
        try:
            self.network = resolve_network(self.settings.network, self.settings.rpc_url)
            if self.web3 is None:
                self.web3 = connect(self.network)
            return self.network
        except Exception as e:
            logger.error(f"Failed to resolve network {self.settings.network}: {e}")
            raise

    async def resolve_accounts(self) -> List[str]:
        """Get the accounts managed by the connected node"""
        try:
            return list(self.web3.eth.accounts)
        except Exception as e:
            # A missing account list only fails later, on the first deployment
            logger.error(f"Error retrieving accounts: {e}")
            return []

    def select_sender(self, accounts: List[str]) -> Optional[str]:
        """Pick the deployment sender from the node's accounts"""
        index = self.settings.sender_index
        if index >= len(accounts):
            logger.warning(
                f"Sender account index {index} not available ({len(accounts)} accounts on node)"
            )
            return None
        return accounts[index]

    async def _deploy(self, artifact: Artifact, tx_params: Dict) -> DeployedContract:
        """Submit a contract creation transaction and wait for its receipt"""
        factory = self.web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx_hash = factory.constructor().transact(tx_params)
        receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash)

        tx_hex = Web3.to_hex(tx_hash)
        if receipt.get("status") == 0:
            raise DeploymentError(f"{artifact.name} deployment reverted: {tx_hex}")

        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(f"{artifact.name} deployment returned no contract address: {tx_hex}")

        address = to_checksum_address(address)
        logger.info(f"{artifact.name} deployed at {address} (tx {tx_hex})")

        return DeployedContract(
            name=artifact.name,
            address=address,
            abi=artifact.abi,
            transaction_hash=tx_hex
        )

    def _tx_params(self, sender: Optional[str], **extra) -> Dict:
        params = dict(extra)
        if sender is not None:
            params["from"] = sender
        return params

    async def deploy_deposit_contract(self, sender: Optional[str]) -> DeployedContract:
        """Deploy the Beacon deposit contract from its ABI and bytecode files"""
        try:
            artifact = Artifact(
                name=DEPOSIT_CONTRACT_NAME,
                abi=load_abi(self.settings.deposit_abi_path),
                bytecode=load_bytecode(self.settings.deposit_bin_path)
            )
            tx_params = self._tx_params(
                sender,
                gas=self.settings.deposit_gas,
                gasPrice=self.settings.deposit_gas_price
            )
            return await self._deploy(artifact, tx_params)
        except Exception as e:
            logger.error(f"Failed to deploy deposit contract: {e}")
            raise

    async def deploy_from_registry(self, name: str, sender: Optional[str]) -> DeployedContract:
        """Deploy a contract resolved by name from the build artifacts"""
        try:
            artifact = self.registry.get(name)
            return await self._deploy(artifact, self._tx_params(sender))
        except Exception as e:
            logger.error(f"Failed to deploy {name}: {e}")
            raise

    async def deploy_contracts(self) -> DeploymentResult:
        """Run the full deployment sequence"""
        network = await self.resolve_network()
        accounts = await self.resolve_accounts()
        sender = self.select_sender(accounts)

        logger.info(f"Using network: {network.name}")
        logger.info(f"Deploying from: {sender}")

        result = DeploymentResult(network=network.name, sender=sender)

        deposit = await self.deploy_deposit_contract(sender)
        result.contracts[deposit.name] = deposit

        for name in (self.settings.multicall_contract, self.settings.balance_batcher_contract):
            deployed = await self.deploy_from_registry(name, sender)
            result.contracts[name] = deployed

        return result

    def report(self, result: DeploymentResult):
        """Print the deployed addresses"""
        labels = {
            DEPOSIT_CONTRACT_NAME: "Beacon Deposit Address",
            self.settings.multicall_contract: "Multicall Address",
            self.settings.balance_batcher_contract: "Balance Batcher Address",
        }

        print(f"Using network: {result.network}")
        print(f"Deploying from: {result.sender}")
        print()
        for name, contract in result.contracts.items():
            print(f"   {labels.get(name, name)}")
            print(f"     {contract.address}")
        print()
        print("  Done!")


async def main(settings: Optional[DeploymentSettings] = None, web3: Optional[Web3] = None) -> int:
    """Deploy all contracts and return the process exit status"""
    try:
        settings = settings or DeploymentSettings.from_env()
        deployer = ContractDeployer(settings, web3=web3)
        result = await deployer.deploy_contracts()
    except Exception as e:
        logger.error(f"Deployment failed: {e}")
        return 1

    deployer.report(result)
    return 0


def run() -> int:
    """Console entry point"""
    try:
        settings = DeploymentSettings.from_env()
    except ValueError as e:
        setup_logging(None)
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(settings.log_file)
    return asyncio.run(main(settings))
