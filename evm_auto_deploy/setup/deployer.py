#!/usr/bin/env python3
"""
Token deployment through web3.py.

``Web3TokenDeployer.deploy`` never raises for a failed deployment: it
returns a ``DeployResult`` holding either the contract address or the
error message, and the batch runner records whichever it gets.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3
from web3.exceptions import TimeExhausted

from evm_auto_deploy.config.network import NetworkProfile
from evm_auto_deploy.config.settings import DeploySettings
from evm_auto_deploy.exceptions import DeploymentError
from evm_auto_deploy.helpers.contract_code import CompiledContract, compile_token_contract
from evm_auto_deploy.helpers.identifiers import DeploymentRequest
from evm_auto_deploy.helpers.web3_setup import get_web3_instance

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Result type                                                                 #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class DeployResult:
    """Outcome of one deploy call: exactly one of address/error is set."""
    address: str | None = None
    error: str | None = None

    def __post_init__(self):
        if (self.address is None) == (self.error is None):
            raise ValueError("DeployResult needs exactly one of address or error")

    @property
    def ok(self) -> bool:
        return self.address is not None

    @classmethod
    def success(cls, address: str) -> DeployResult:
        return cls(address=address)

    @classmethod
    def failure(cls, message: str) -> DeployResult:
        return cls(error=message)


class KeyProvider(Protocol):
    def get_account(self) -> LocalAccount: ...


class Deployer(Protocol):
    def deploy(self, network: NetworkProfile, request: DeploymentRequest) -> DeployResult: ...


# --------------------------------------------------------------------------- #
# Confirmation                                                                #
# --------------------------------------------------------------------------- #

class PendingDeployment:
    """A broadcast deployment transaction waiting to be mined."""

    def __init__(self, w3: Web3, tx_hash: Any, timeout: int):
        self.w3 = w3
        self.tx_hash = tx_hash
        self.timeout = timeout

    @property
    def tx_hash_hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    def await_confirmation(self) -> str:
        """Wait for the receipt and return the checksummed contract address.

        Raises:
            DeploymentError: On timeout, reverted deployment, or a receipt
                without a contract address.
        """
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(self.tx_hash, timeout=self.timeout)
        except TimeExhausted as e:
            raise DeploymentError(
                f"Transaction {self.tx_hash_hex} not mined within {self.timeout}s"
            ) from e

        if receipt.get("status") != 1:
            raise DeploymentError(f"Deployment transaction {self.tx_hash_hex} reverted")

        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(f"No contract address in receipt for {self.tx_hash_hex}")
        return to_checksum_address(address)


# --------------------------------------------------------------------------- #
# Deployer                                                                    #
# --------------------------------------------------------------------------- #

class Web3TokenDeployer:
    """Compiles, signs and broadcasts token deployments."""

    def __init__(
        self,
        key_provider: KeyProvider,
        settings: DeploySettings | None = None,
        web3_factory: Callable[[str], Web3] = get_web3_instance,
        compiler: Callable[[str], CompiledContract] = compile_token_contract,
    ):
        self.key_provider = key_provider
        self.settings = settings or DeploySettings()
        self.web3_factory = web3_factory
        self.compiler = compiler

    def _fee_fields(self, w3: Web3) -> dict[str, int]:
        latest_block = w3.eth.get_block("latest")
        base_fee = latest_block.get("baseFeePerGas")
        if base_fee is None:
            return {"gasPrice": w3.eth.gas_price}
        priority_fee = Web3.to_wei(self.settings.priority_fee_gwei, "gwei")
        return {
            "maxPriorityFeePerGas": priority_fee,
            "maxFeePerGas": base_fee + priority_fee * 2,  # generous cap
        }

    def submit(self, network: NetworkProfile, request: DeploymentRequest) -> PendingDeployment:
        """Build, sign and broadcast the deployment transaction."""
        account = self.key_provider.get_account()
        w3 = self.web3_factory(network.rpc_url)
        compiled = self.compiler(self.settings.solc_version)

        logger.info("Deploying %s (%s) to %s from %s", request.name, request.symbol, network.name, account.address)

        contract = w3.eth.contract(abi=compiled.abi, bytecode=compiled.bytecode)
        constructor = contract.constructor(request.name, request.symbol, int(request.supply))

        gas_estimate = constructor.estimate_gas({"from": account.address})
        tx = constructor.build_transaction({
            "from": account.address,
            "nonce": w3.eth.get_transaction_count(account.address, "pending"),
            "gas": int(gas_estimate * self.settings.gas_limit_buffer),
            "chainId": w3.eth.chain_id,
            **self._fee_fields(w3),
        })

        signed_tx = account.sign_transaction(tx)
        tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        pending = PendingDeployment(w3, tx_hash, self.settings.receipt_timeout)
        logger.info("Broadcast %s on %s", pending.tx_hash_hex, network.name)
        return pending

    def deploy(self, network: NetworkProfile, request: DeploymentRequest) -> DeployResult:
        """Deploy one token and wait for confirmation."""
        try:
            address = self.submit(network, request).await_confirmation()
        except DeploymentError as e:
            logger.error("Error deploying contract: %s", e)
            return DeployResult.failure(str(e))
        except Exception as e:
            # RPC, signing and compiler errors from the library stack
            logger.error("Error deploying contract: %s", e, exc_info=True)
            return DeployResult.failure(str(e) or type(e).__name__)

        logger.info("Contract deployed at %s (%s)", address, network.address_url(address))
        return DeployResult.success(address)
