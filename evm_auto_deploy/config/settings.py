"""Runtime settings and signing-key access, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount

from evm_auto_deploy.exceptions import DeploymentError


# Solidity version used for the token contract
DEFAULT_SOLC_VERSION = "0.8.20"

# Deployment gas settings
DEFAULT_RECEIPT_TIMEOUT = 300  # seconds
DEFAULT_PRIORITY_FEE_GWEI = 2
DEFAULT_GAS_LIMIT_BUFFER = 1.2  # 20% on top of estimate_gas
DEFAULT_DEPLOY_DELAY = 1.0  # seconds between deployments


@dataclass(frozen=True)
class DeploySettings:
    solc_version: str = DEFAULT_SOLC_VERSION
    receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT
    priority_fee_gwei: float = DEFAULT_PRIORITY_FEE_GWEI
    gas_limit_buffer: float = DEFAULT_GAS_LIMIT_BUFFER
    deploy_delay: float = DEFAULT_DEPLOY_DELAY

    @classmethod
    def from_env(cls) -> DeploySettings:
        """Build settings from SOLC_VERSION, RECEIPT_TIMEOUT, PRIORITY_FEE_GWEI,
        GAS_LIMIT_BUFFER and DEPLOY_DELAY_SECONDS, falling back to defaults."""
        return cls(
            solc_version=os.getenv("SOLC_VERSION", DEFAULT_SOLC_VERSION),
            receipt_timeout=int(os.getenv("RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT)),
            priority_fee_gwei=float(os.getenv("PRIORITY_FEE_GWEI", DEFAULT_PRIORITY_FEE_GWEI)),
            gas_limit_buffer=float(os.getenv("GAS_LIMIT_BUFFER", DEFAULT_GAS_LIMIT_BUFFER)),
            deploy_delay=float(os.getenv("DEPLOY_DELAY_SECONDS", DEFAULT_DEPLOY_DELAY)),
        )


def _normalize_privkey_hex(pk: str) -> str:
    pk = pk.strip()
    if pk.startswith("0x"):
        pk = pk[2:]
    if len(pk) != 64:
        raise ValueError("private key hex must be 64 characters (32 bytes)")
    int(pk, 16)  # validate hex
    return "0x" + pk


class EnvKeyProvider:
    """Signing-key provider backed by an environment variable."""

    def __init__(self, env_name: str = "PRIVATE_KEY"):
        self.env_name = env_name

    def get_account(self) -> LocalAccount:
        """Return the deployer account.

        Raises:
            DeploymentError: If the variable is unset or not a valid key.
        """
        private_key = os.getenv(self.env_name)
        if not private_key:
            raise DeploymentError(f"{self.env_name} environment variable not set")
        try:
            return Account.from_key(_normalize_privkey_hex(private_key))
        except ValueError as e:
            raise DeploymentError(f"Invalid {self.env_name}: {e}") from e


class StaticKeyProvider:
    """Key provider holding an already-loaded account.

    Used to inject a fixed account into Web3TokenDeployer, e.g. in tests.
    """

    def __init__(self, account: LocalAccount):
        self.account = account

    def get_account(self) -> LocalAccount:
        return self.account
