"""
Random token identifiers - name, ticker symbol and supply.

Public API
----------
IdentifierGenerator(min_supply, max_supply, rng=None, prefix="Token")
    Produce independent random DeploymentRequest values.
"""
from __future__ import annotations

import random
import string
from dataclasses import dataclass

__all__ = ["DeploymentRequest", "IdentifierGenerator", "DEFAULT_NAME_PREFIX"]

DEFAULT_NAME_PREFIX = "Token"
SYMBOL_LENGTHS = (3, 4, 5)
SYMBOL_ALPHABET = string.ascii_uppercase
NAME_SUFFIX_BYTES = 3


@dataclass(frozen=True)
class DeploymentRequest:
    """Identifiers for one token deployment; supply is a decimal string."""
    name: str
    symbol: str
    supply: str


class IdentifierGenerator:
    """Random name/symbol/supply source for a fixed supply range.

    The random source is injected so tests can pass a seeded
    ``random.Random``. Defaults to ``random.SystemRandom``.
    """

    def __init__(
        self,
        min_supply: int,
        max_supply: int,
        rng: random.Random | None = None,
        prefix: str = DEFAULT_NAME_PREFIX,
    ):
        if min_supply <= 0 or max_supply <= 0:
            raise ValueError("supply bounds must be positive integers")
        if min_supply > max_supply:
            raise ValueError(f"min_supply ({min_supply}) > max_supply ({max_supply})")
        self.min_supply = min_supply
        self.max_supply = max_supply
        self.rng = rng if rng is not None else random.SystemRandom()
        self.prefix = prefix

    def name(self) -> str:
        # e.g. "Token3fa9c1"
        suffix = self.rng.getrandbits(8 * NAME_SUFFIX_BYTES)
        return f"{self.prefix}{suffix:0{2 * NAME_SUFFIX_BYTES}x}"

    def symbol(self) -> str:
        length = self.rng.choice(SYMBOL_LENGTHS)
        return "".join(self.rng.choice(SYMBOL_ALPHABET) for _ in range(length))

    def supply(self) -> str:
        return str(self.rng.randint(self.min_supply, self.max_supply))

    def request(self) -> DeploymentRequest:
        return DeploymentRequest(name=self.name(), symbol=self.symbol(), supply=self.supply())
