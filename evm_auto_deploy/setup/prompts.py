"""Interactive network selection and run-parameter prompts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from colorama import Fore, Style

from evm_auto_deploy.config.network import NetworkProfile
from evm_auto_deploy.exceptions import SelectionError

InputFn = Callable[[str], str]


@dataclass(frozen=True)
class RunParameters:
    """Validated once at startup, constant for the run."""
    network_type: str
    deploy_count: int
    min_supply: int
    max_supply: int

    def __post_init__(self):
        if self.deploy_count < 1:
            raise ValueError(f"deploy_count must be positive, got {self.deploy_count}")
        if not 0 < self.min_supply <= self.max_supply:
            raise ValueError(f"invalid supply range {self.min_supply}..{self.max_supply}")


def _cyan(text: str) -> str:
    return f"{Fore.CYAN}{text}{Style.RESET_ALL}"


def parse_positive_int(value: Any) -> int | None:
    """Return value as a positive int, or None if missing or invalid."""
    if value is None:
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def select_network(networks: Sequence[NetworkProfile], input_fn: InputFn = input) -> NetworkProfile:
    """Show the 1-based network list and return the chosen profile.

    Raises:
        SelectionError: On non-numeric or out-of-range input.
    """
    print(f"{Fore.YELLOW}Available networks:{Style.RESET_ALL}")
    for index, network in enumerate(networks, start=1):
        print(f"{index}. {network.name}")

    raw = input_fn(_cyan("\nSelect a network (enter number): "))
    try:
        choice = int(raw.strip())
    except ValueError:
        raise SelectionError(f"Invalid network selection: {raw!r}") from None
    if not 1 <= choice <= len(networks):
        raise SelectionError(f"Invalid network selection: {choice} (choose 1-{len(networks)})")
    return networks[choice - 1]


def prompt_int(
    prompt: str,
    input_fn: InputFn = input,
    minimum: int = 1,
    limit_message: str = "Please enter a positive integer.",
) -> int:
    """Prompt until the user enters an integer >= minimum."""
    while True:
        value = parse_positive_int(input_fn(_cyan(prompt)))
        if value is not None and value >= minimum:
            return value
        print(limit_message)


def resolve_deploy_count(raw: Any, input_fn: InputFn = input) -> int:
    """Use the CLI deploy count when valid, otherwise ask for it."""
    count = parse_positive_int(raw)
    if count is None:
        count = prompt_int("How many tokens do you want to deploy? (e.g., 100): ", input_fn)
    return count


def resolve_supply_range(raw_min: Any, raw_max: Any, input_fn: InputFn = input) -> tuple[int, int]:
    """Use the CLI supply range when both bounds are valid, otherwise ask for both."""
    min_supply = parse_positive_int(raw_min)
    max_supply = parse_positive_int(raw_max)
    if min_supply is not None and max_supply is not None and min_supply <= max_supply:
        return min_supply, max_supply

    print(_cyan("Please specify supply range for random generation."))
    min_supply = prompt_int("Enter minimum supply (integer > 0): ", input_fn)
    max_supply = prompt_int(
        f"Enter maximum supply (integer >= {min_supply}): ",
        input_fn,
        minimum=min_supply,
        limit_message=f"Please enter an integer >= {min_supply}.",
    )
    return min_supply, max_supply


def resolve_run_parameters(
    network_type: str,
    raw_count: Any,
    raw_min: Any,
    raw_max: Any,
    input_fn: InputFn = input,
) -> RunParameters:
    deploy_count = resolve_deploy_count(raw_count, input_fn)
    print(f"{Fore.YELLOW}Will deploy {deploy_count} tokens sequentially.{Style.RESET_ALL}")

    min_supply, max_supply = resolve_supply_range(raw_min, raw_max, input_fn)
    print(f"{Fore.YELLOW}Supply will be random between {min_supply} and {max_supply} (inclusive).{Style.RESET_ALL}")

    return RunParameters(network_type, deploy_count, min_supply, max_supply)
