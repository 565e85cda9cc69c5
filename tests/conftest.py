"""Shared pytest fixtures for evm-auto-deploy tests."""

import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List

import pytest

from evm_auto_deploy.config.network import NetworkProfile
from evm_auto_deploy.helpers.identifiers import DeploymentRequest, IdentifierGenerator
from evm_auto_deploy.setup.deployer import DeployResult


class FailingDeployer:
    """Deployer that always fails with the same message."""

    def __init__(self, message: str = "boom"):
        self.message = message
        self.calls: List[DeploymentRequest] = []

    def deploy(self, network: NetworkProfile, request: DeploymentRequest) -> DeployResult:
        self.calls.append(request)
        return DeployResult.failure(self.message)


class AlternatingDeployer:
    """Deployer that succeeds on odd calls and fails on even calls."""

    def __init__(self):
        self.calls: List[DeploymentRequest] = []

    def deploy(self, network: NetworkProfile, request: DeploymentRequest) -> DeployResult:
        self.calls.append(request)
        if len(self.calls) % 2 == 1:
            return DeployResult.success(f"0x{len(self.calls):040x}")
        return DeployResult.failure(f"failure {len(self.calls)}")


class SucceedingDeployer:
    """Deployer that always succeeds with sequential addresses."""

    def __init__(self):
        self.calls: List[DeploymentRequest] = []

    def deploy(self, network: NetworkProfile, request: DeploymentRequest) -> DeployResult:
        self.calls.append(request)
        return DeployResult.success(f"0x{len(self.calls):040x}")


class ScriptedInput:
    """Replacement for input() that replays answers and records prompts."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.answers.pop(0)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep logs in a temp dir and drop environment that tests must not see."""
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    for name in ("NETWORKS_CONFIG_DIR", "PRIVATE_KEY", "DEPLOY_DELAY_SECONDS", "SOLC_VERSION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop handlers the CLI attaches so each test starts with fresh log files."""
    _drop_handlers()
    yield
    _drop_handlers()


def _drop_handlers() -> None:
    for name in ("evm_auto_deploy", "deployments_deploy"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture
def network() -> NetworkProfile:
    return NetworkProfile(
        name="Local Testnet",
        rpc_url="http://127.0.0.1:8545",
        explorer="https://explorer.example",
        chain_id=31337,
    )


@pytest.fixture
def sample_networks() -> List[Dict[str, Any]]:
    return [
        {"name": "Alpha", "rpcUrl": "https://alpha.example/rpc", "explorer": "https://alpha.example"},
        {"name": "Beta", "rpcUrl": "https://beta.example/rpc", "explorer": "https://beta.example/", "chainId": 42},
    ]


@pytest.fixture
def networks_dir(tmp_path: Path, sample_networks: List[Dict[str, Any]]) -> Path:
    """Directory with a 'testnet' list and an empty 'empty' list."""
    directory = tmp_path / "networks"
    directory.mkdir()
    with open(directory / "testnet.json", "w") as f:
        json.dump(sample_networks, f, indent=2)
    with open(directory / "empty.json", "w") as f:
        json.dump([], f)
    return directory


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def generator(seeded_rng: random.Random) -> IdentifierGenerator:
    return IdentifierGenerator(100, 1000, rng=seeded_rng)


class RecordingSleep:
    """time.sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def failing_deployer() -> FailingDeployer:
    return FailingDeployer("boom")


@pytest.fixture
def alternating_deployer() -> AlternatingDeployer:
    return AlternatingDeployer()


@pytest.fixture
def succeeding_deployer() -> SucceedingDeployer:
    return SucceedingDeployer()


@pytest.fixture
def scripted_input():
    """Factory: scripted_input('1', '3') -> input() replacement."""
    return ScriptedInput
