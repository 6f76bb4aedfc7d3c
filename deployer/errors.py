"""Exceptions raised by the deployer"""


class DeployerError(Exception):
    """Base class for deployer failures"""


class ArtifactError(DeployerError):
    """A compiled artifact could not be read or is malformed"""


class ArtifactNotFoundError(ArtifactError, FileNotFoundError):
    """No compiled artifact exists for the requested contract name"""


class DeploymentError(DeployerError):
    """A deployment transaction did not produce a contract"""
