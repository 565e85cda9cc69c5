#!/usr/bin/env python3
"""
EVM Auto Deploy
===============

Deploys a batch of randomly named ERC-20 tokens to one network, one
after another, and writes a JSON summary of the results.

Usage:
    evm-auto-deploy [network_type] [deploy_count] [min_supply] [max_supply]

    evm-auto-deploy                       # testnet, everything prompted
    evm-auto-deploy testnet 100           # 100 tokens, supply range prompted
    evm-auto-deploy mainnet 5 1000 50000

Environment Variables:
    - PRIVATE_KEY: Deployer private key (required to sign)
    - NETWORKS_CONFIG_DIR: (Optional) Directory with <network_type>.json files
    - LOG_DIR: (Optional) Log directory, default ./logs
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable

from colorama import Fore, Style, just_fix_windows_console
from dotenv import load_dotenv

from evm_auto_deploy.config.logging_config import get_cli_logger, setup_deploy_logger
from evm_auto_deploy.config.network import DEFAULT_NETWORK_TYPE, load_network_config
from evm_auto_deploy.config.settings import DeploySettings, EnvKeyProvider
from evm_auto_deploy.exceptions import ConfigurationError, SelectionError
from evm_auto_deploy.helpers.identifiers import DEFAULT_NAME_PREFIX, IdentifierGenerator
from evm_auto_deploy.setup.batch import BatchRunner
from evm_auto_deploy.setup.deployer import Deployer, Web3TokenDeployer
from evm_auto_deploy.setup.prompts import resolve_run_parameters, select_network
from evm_auto_deploy.setup.summary import report

logger = logging.getLogger("evm_auto_deploy")


def display_header() -> None:
    print(f"{Fore.CYAN}{Style.BRIGHT}{'=' * 50}")
    print("  EVM Auto Deploy - random ERC-20 batch deployer")
    print(f"{'=' * 50}{Style.RESET_ALL}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deploy randomly named ERC-20 tokens in sequence")
    parser.add_argument("network_type", nargs="?", default=DEFAULT_NETWORK_TYPE,
                        help=f"Network list to choose from (default: {DEFAULT_NETWORK_TYPE})")
    parser.add_argument("deploy_count", nargs="?", help="Number of tokens to deploy (prompted if missing)")
    parser.add_argument("min_supply", nargs="?", help="Minimum token supply (prompted if missing)")
    parser.add_argument("max_supply", nargs="?", help="Maximum token supply (prompted if missing)")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    parser.add_argument("--networks-dir", help="Directory with <network_type>.json files")
    parser.add_argument("--summary-dir", default=".", help="Where to write the summary JSON")
    parser.add_argument("--delay", type=float, help="Seconds to wait between deployments (default: 1)")
    parser.add_argument("--prefix", default=DEFAULT_NAME_PREFIX, help="Token name prefix")
    parser.add_argument("--debug", action="store_true", help="Verbose logging: DEBUG records on the console and in log files")
    return parser


def run(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
    deployer: Deployer | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    display_header()
    print(f"{Fore.YELLOW}Please wait...{Style.RESET_ALL}\n")
    sleep(1)
    print(f"{Fore.GREEN}{Style.BRIGHT}Welcome to EVM Auto Deploy!{Style.RESET_ALL}")

    try:
        networks = load_network_config(args.network_type, args.networks_dir)
        logger.info("Loaded %d networks for type %s", len(networks), args.network_type)
        network = select_network(networks, input_fn)
    except (ConfigurationError, SelectionError) as e:
        logger.error("%s", e)
        print(f"{Fore.RED}{e}{Style.RESET_ALL}", file=sys.stderr)
        return 1

    params = resolve_run_parameters(
        args.network_type, args.deploy_count, args.min_supply, args.max_supply, input_fn
    )

    settings = DeploySettings.from_env()
    if deployer is None:
        deployer = Web3TokenDeployer(EnvKeyProvider(), settings)
    delay = args.delay if args.delay is not None else settings.deploy_delay

    runner = BatchRunner(
        deployer,
        IdentifierGenerator(params.min_supply, params.max_supply, prefix=args.prefix),
        network,
        delay=delay,
        sleep=sleep,
        audit_logger=setup_deploy_logger(),
    )

    print(f"\n{Fore.GREEN}Starting deployments on {network.name}...{Style.RESET_ALL}\n")
    logger.info("Starting %d deployments on %s (%s)", params.deploy_count, network.name, network.rpc_url)
    outcomes = runner.run(params.deploy_count)

    report(outcomes, args.summary_dir)
    print(f"\n{Fore.GREEN}{Style.BRIGHT}Done.{Style.RESET_ALL}")
    return 0


def main(
    argv: list[str] | None = None,
    input_fn: Callable[[str], str] = input,
    deployer: Deployer | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    just_fix_windows_console()

    try:
        load_dotenv(args.env_file)
        get_cli_logger(args.debug)
        return run(args, input_fn=input_fn, deployer=deployer, sleep=sleep)
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Interrupted - no summary written.{Style.RESET_ALL}", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical("Fatal error: %s", e, exc_info=True)
        print(f"{Fore.RED}Fatal error: {e}{Style.RESET_ALL}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
