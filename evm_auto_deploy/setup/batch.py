"""Sequential batch of token deployments."""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable

from colorama import Fore, Style

from evm_auto_deploy.config.logging_config import log_deployment
from evm_auto_deploy.config.network import NetworkProfile
from evm_auto_deploy.helpers.identifiers import DeploymentRequest, IdentifierGenerator
from evm_auto_deploy.setup.deployer import Deployer, DeployResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeploymentOutcome:
    """Result of one deployment attempt, persisted verbatim in the summary."""
    name: str
    symbol: str
    supply: str
    address: str | None = None
    error: str | None = None

    def __post_init__(self):
        if (self.address is None) == (self.error is None):
            raise ValueError("DeploymentOutcome needs exactly one of address or error")

    @property
    def succeeded(self) -> bool:
        return self.address is not None

    @classmethod
    def from_result(cls, request: DeploymentRequest, result: DeployResult) -> DeploymentOutcome:
        return cls(
            name=request.name,
            symbol=request.symbol,
            supply=request.supply,
            address=result.address,
            error=result.error,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class BatchRunner:
    """Runs N deployments one after another.

    A failed deployment is recorded and the batch moves on; nothing
    short of an interrupt stops it before ``count`` attempts.
    """

    def __init__(
        self,
        deployer: Deployer,
        generator: IdentifierGenerator,
        network: NetworkProfile,
        delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        audit_logger: logging.Logger | None = None,
    ):
        self.deployer = deployer
        self.generator = generator
        self.network = network
        self.delay = delay
        self.sleep = sleep
        self.audit_logger = audit_logger

    def run(
        self,
        count: int,
        on_outcome: Callable[[int, DeploymentOutcome], None] | None = None,
    ) -> list[DeploymentOutcome]:
        if count < 1:
            raise ValueError(f"deploy count must be a positive integer, got {count}")

        outcomes: list[DeploymentOutcome] = []
        for i in range(1, count + 1):
            request = self.generator.request()
            print(
                f"{Fore.CYAN}Deploy #{i}/{count}: name={request.name}, "
                f"symbol={request.symbol}, supply={request.supply}{Style.RESET_ALL}"
            )

            result = self.deployer.deploy(self.network, request)
            outcome = DeploymentOutcome.from_result(request, result)
            outcomes.append(outcome)

            if outcome.succeeded:
                print(f"{Fore.GREEN}  -> Success! Contract deployed at {outcome.address}{Style.RESET_ALL}")
                if self.network.explorer:
                    print(f"     Explorer URL: {self.network.address_url(outcome.address)}")
            else:
                print(f"{Fore.RED}  -> Failed on deploy #{i}: {outcome.error}{Style.RESET_ALL}")
                logger.info("Deploy #%d/%d failed: %s", i, count, outcome.error)

            if self.audit_logger is not None:
                log_deployment(
                    self.audit_logger,
                    index=i,
                    network=self.network.name,
                    name=outcome.name,
                    symbol=outcome.symbol,
                    supply=outcome.supply,
                    address=outcome.address,
                    error=outcome.error,
                )
            if on_outcome is not None:
                on_outcome(i, outcome)

            self.sleep(self.delay)

        return outcomes
