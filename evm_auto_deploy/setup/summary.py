"""Run summary: console table and timestamped JSON file."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from colorama import Fore, Style
from tabulate import tabulate

from evm_auto_deploy.exceptions import SummaryWriteError
from evm_auto_deploy.setup.batch import DeploymentOutcome

logger = logging.getLogger(__name__)

SUMMARY_PREFIX = "deploy-summary-"


def _iso_timestamp(now: datetime) -> str:
    # Millisecond precision, UTC, e.g. 2024-05-01T10:20:30.123Z
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def summary_filename(now: datetime | None = None) -> str:
    """File name embedding the timestamp, with ':' and '.' made filesystem-safe."""
    if now is None:
        now = datetime.now(timezone.utc)
    timestamp = _iso_timestamp(now).replace(":", "-").replace(".", "-")
    return f"{SUMMARY_PREFIX}{timestamp}.json"


def print_summary(outcomes: Sequence[DeploymentOutcome]) -> None:
    """Print one line per outcome, in order, followed by a table."""
    print(f"\n{Style.BRIGHT}All done. Summary:{Style.RESET_ALL}\n")
    for idx, res in enumerate(outcomes, start=1):
        line = f"#{idx}: name={res.name}, symbol={res.symbol}, supply={res.supply} -> "
        if res.succeeded:
            print(f"{Fore.GREEN}{line}{res.address}{Style.RESET_ALL}")
        else:
            print(f"{Fore.RED}{line}FAILED ({res.error}){Style.RESET_ALL}")

    if not outcomes:
        return

    headers = ["#", "Name", "Symbol", "Supply", "Result"]
    rows = [
        [idx, res.name, res.symbol, res.supply, res.address if res.succeeded else f"FAILED: {res.error}"]
        for idx, res in enumerate(outcomes, start=1)
    ]
    print()
    print(tabulate(rows, headers=headers, tablefmt="grid"))

    succeeded = sum(1 for res in outcomes if res.succeeded)
    print(f"\n{succeeded}/{len(outcomes)} deployments succeeded, {len(outcomes) - succeeded} failed")


def write_summary(
    outcomes: Sequence[DeploymentOutcome],
    directory: str | Path = ".",
    now: datetime | None = None,
) -> Path:
    """Write the outcome list as indented JSON and return the file path.

    Raises:
        SummaryWriteError: If the directory or file cannot be written.
    """
    path = Path(directory) / summary_filename(now)
    try:
        os.makedirs(path.parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([res.to_dict() for res in outcomes], f, indent=2)
    except OSError as e:
        raise SummaryWriteError(f"{path}: {e}") from e
    return path


def report(
    outcomes: Sequence[DeploymentOutcome],
    directory: str | Path = ".",
    now: datetime | None = None,
) -> Path | None:
    """Print the summary and persist it; a write failure is reported, not raised."""
    print_summary(outcomes)
    try:
        path = write_summary(outcomes, directory, now)
    except SummaryWriteError as e:
        logger.error("Failed to write summary file: %s", e)
        print(f"{Fore.RED}Failed to write summary file: {e}{Style.RESET_ALL}")
        return None
    print(f"\n{Fore.YELLOW}Summary saved to {path}{Style.RESET_ALL}")
    return path
