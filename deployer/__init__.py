"""
Contract Deployer
Deploys the deposit, multicall and balance batcher contracts to a dev network
"""

from deployer.artifacts import Artifact, ArtifactRegistry, compress_abi, decompress_abi
from deployer.config import DeploymentSettings
from deployer.deployment import ContractDeployer, DeployedContract, DeploymentResult, main
from deployer.errors import ArtifactError, ArtifactNotFoundError, DeployerError, DeploymentError
from deployer.network import NetworkConfig, connect, resolve_network

__all__ = [
    "Artifact",
    "ArtifactRegistry",
    "compress_abi",
    "decompress_abi",
    "DeploymentSettings",
    "ContractDeployer",
    "DeployedContract",
    "DeploymentResult",
    "main",
    "ArtifactError",
    "ArtifactNotFoundError",
    "DeployerError",
    "DeploymentError",
    "NetworkConfig",
    "connect",
    "resolve_network",
]
