"""
Network configuration for evm-auto-deploy.

Network lists live in JSON files, one file per network type
(``testnet.json``, ``mainnet.json``, ...). Each entry carries the
display name, the RPC endpoint and the block explorer base URL.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from evm_auto_deploy.exceptions import ConfigurationError


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_NETWORK_TYPE: str = "testnet"

# Built-in network lists shipped with the package
BUILTIN_NETWORKS_DIR: Path = Path(__file__).parent / "networks"


# =============================================================================
# NETWORK PROFILE
# =============================================================================

@dataclass(frozen=True)
class NetworkProfile:
    """Connection parameters for one deployable chain."""
    name: str
    rpc_url: str
    explorer: str
    chain_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetworkProfile":
        """Build a profile from a config entry (``name``/``rpcUrl``/``explorer``)."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Network entry must be an object, got: {data!r}")
        missing = [key for key in ("name", "rpcUrl") if not data.get(key)]
        if missing:
            raise ConfigurationError(f"Network entry missing {', '.join(missing)}: {data}")
        chain_id = data.get("chainId")
        if chain_id is not None:
            try:
                chain_id = int(chain_id)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid chainId for {data['name']}: {chain_id!r}") from e
        return cls(
            name=str(data["name"]),
            rpc_url=str(data["rpcUrl"]),
            explorer=str(data.get("explorer") or "").rstrip("/"),
            chain_id=chain_id,
        )

    def address_url(self, address: str) -> str:
        """Explorer link for a deployed contract."""
        return f"{self.explorer}/address/{address}"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def resolve_config_dir(config_dir: str | Path | None = None) -> Path:
    """Return the directory holding network lists.

    Precedence: explicit argument > NETWORKS_CONFIG_DIR env var > built-in dir.
    """
    if config_dir is None:
        config_dir = os.getenv("NETWORKS_CONFIG_DIR") or BUILTIN_NETWORKS_DIR
    return Path(config_dir)


def available_network_types(config_dir: str | Path | None = None) -> list[str]:
    """List the network types that have a config file."""
    directory = resolve_config_dir(config_dir)
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob("*.json"))


def load_network_config(
    network_type: str = DEFAULT_NETWORK_TYPE,
    config_dir: str | Path | None = None,
) -> list[NetworkProfile]:
    """Load the ordered network list for a network type.

    Args:
        network_type: Config key, e.g. 'testnet' or 'mainnet'.
        config_dir: Directory with ``<network_type>.json`` files.
                    Defaults to NETWORKS_CONFIG_DIR or the built-in lists.

    Returns:
        Non-empty list of NetworkProfile in file order.

    Raises:
        ConfigurationError: If the file is missing or unreadable, or yields no networks.
    """
    directory = resolve_config_dir(config_dir)
    path = directory / f"{network_type}.json"
    if not path.is_file():
        raise ConfigurationError(
            f"No networks found in config for type: {network_type}. "
            f"Supported: {available_network_types(directory)}"
        )

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read network config {path}: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("networks")
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError(f"No networks found in config for type: {network_type}")

    return [NetworkProfile.from_dict(entry) for entry in raw]
