"""
Contract Artifacts
Loads compiled ABI / bytecode pairs from disk and from the build output
"""

import base64
import json
import logging
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from deployer.errors import ArtifactError, ArtifactNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Artifact:
    name: str
    abi: List[Dict]
    bytecode: str


def _normalize_bytecode(raw: str, source: PathLike) -> str:
    bytecode = "".join(raw.split())
    if bytecode.startswith(("0x", "0X")):
        bytecode = bytecode[2:]
    if not bytecode:
        raise ArtifactError(f"No bytecode in {source}")
    return "0x" + bytecode


def load_abi(abi_file_path: PathLike) -> List[Dict]:
    """Load and parse an ABI file"""
    with open(abi_file_path, "r") as f:
        abi = json.load(f)

    if not isinstance(abi, list):
        raise ArtifactError(f"ABI in {abi_file_path} is not a list")
    return abi


def load_bytecode(bin_file_path: PathLike) -> str:
    """Load a hex-encoded bytecode file"""
    with open(bin_file_path, "r") as f:
        return _normalize_bytecode(f.read(), bin_file_path)


def load_artifact_file(path: PathLike, name: Optional[str] = None) -> Artifact:
    """Load a compiled artifact JSON (Hardhat, Truffle or Foundry output)"""
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))

    try:
        abi = data["abi"]
        bytecode = data["bytecode"]
    except KeyError as e:
        raise ArtifactError(f"Artifact {path} has no {e.args[0]} field")

    # Foundry nests the hex under "object"
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object", "")

    return Artifact(
        name=name or data.get("contractName") or path.stem,
        abi=abi,
        bytecode=_normalize_bytecode(bytecode or "", path)
    )


class ArtifactRegistry:
    """Looks up compiled contracts by name in a build output directory"""

    def __init__(self, artifacts_dir: PathLike = "./artifacts"):
        self.artifacts_dir = Path(artifacts_dir)
        self._cache: Dict[str, Artifact] = {}

    def find(self, name: str) -> Path:
        """Find the artifact file for a contract name"""
        name = name[:-len(".sol")] if name.endswith(".sol") else name

        if not self.artifacts_dir.is_dir():
            raise ArtifactNotFoundError(f"Artifacts directory not found: {self.artifacts_dir}")

        candidates = sorted(
            p for p in self.artifacts_dir.rglob(f"{name}.json")
            if not p.name.endswith(".dbg.json")
        )
        if not candidates:
            raise ArtifactNotFoundError(f"No artifact for {name} under {self.artifacts_dir}")

        if len(candidates) > 1:
            logger.warning(f"Multiple artifacts for {name}, using {candidates[0]}")
        return candidates[0]

    def get(self, name: str) -> Artifact:
        """Get the compiled artifact for a contract name"""
        if name not in self._cache:
            path = self.find(name)
            self._cache[name] = load_artifact_file(path, name=Path(path).stem)
            logger.debug(f"Loaded artifact {name} from {path}")
        return self._cache[name]


def compress_abi(abi) -> str:
    """Serialize, deflate and base64-encode an ABI"""
    # Compact form, byte-identical to JSON.stringify
    serialized = json.dumps(abi, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(zlib.compress(serialized.encode("utf-8"))).decode("ascii")


def decompress_abi(data: str):
    """Inverse of compress_abi"""
    return json.loads(zlib.decompress(base64.b64decode(data)).decode("utf-8"))
