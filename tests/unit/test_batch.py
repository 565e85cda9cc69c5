"""Unit tests for the batch runner."""

import logging

import pytest

from evm_auto_deploy.config.network import NetworkProfile
from evm_auto_deploy.setup.batch import BatchRunner, DeploymentOutcome
from evm_auto_deploy.setup.deployer import DeployResult


class TestOutcomeCount:
    """Test that every iteration yields exactly one outcome, in order."""

    @pytest.mark.parametrize("count", [1, 2, 7])
    def test_outcome_count_matches_deploy_count(self, count, network, generator, succeeding_deployer, no_sleep):
        runner = BatchRunner(succeeding_deployer, generator, network, sleep=no_sleep)
        outcomes = runner.run(count)
        assert len(outcomes) == count
        assert len(succeeding_deployer.calls) == count

    def test_outcomes_follow_submission_order(self, network, generator, succeeding_deployer, no_sleep):
        runner = BatchRunner(succeeding_deployer, generator, network, sleep=no_sleep)
        outcomes = runner.run(4)
        assert [o.name for o in outcomes] == [r.name for r in succeeding_deployer.calls]
        assert [o.address for o in outcomes] == [f"0x{i:040x}" for i in range(1, 5)]

    def test_zero_count_rejected(self, network, generator, succeeding_deployer, no_sleep):
        runner = BatchRunner(succeeding_deployer, generator, network, sleep=no_sleep)
        with pytest.raises(ValueError):
            runner.run(0)
        assert succeeding_deployer.calls == []


class TestFailureIsolation:
    """Test that per-item failures never stop the batch."""

    def test_always_failing_deployer_records_every_error(self, network, generator, failing_deployer, no_sleep):
        runner = BatchRunner(failing_deployer, generator, network, sleep=no_sleep)
        outcomes = runner.run(3)
        assert len(outcomes) == 3
        for outcome in outcomes:
            assert outcome.error == "boom"
            assert outcome.address is None

    def test_alternation_is_preserved(self, network, generator, alternating_deployer, no_sleep):
        runner = BatchRunner(alternating_deployer, generator, network, sleep=no_sleep)
        outcomes = runner.run(6)
        assert [o.succeeded for o in outcomes] == [True, False, True, False, True, False]
        assert outcomes[1].error == "failure 2"

    def test_exactly_one_of_address_or_error(self, network, generator, alternating_deployer, no_sleep):
        runner = BatchRunner(alternating_deployer, generator, network, sleep=no_sleep)
        for outcome in runner.run(5):
            assert (outcome.address is None) != (outcome.error is None)


class TestDelay:
    """Test the inter-deployment delay."""

    def test_delay_applied_after_every_attempt(self, network, generator, alternating_deployer, no_sleep):
        runner = BatchRunner(alternating_deployer, generator, network, delay=1.0, sleep=no_sleep)
        runner.run(4)
        assert no_sleep.delays == [1.0, 1.0, 1.0, 1.0]

    def test_custom_delay(self, network, generator, failing_deployer, no_sleep):
        runner = BatchRunner(failing_deployer, generator, network, delay=0.25, sleep=no_sleep)
        runner.run(2)
        assert no_sleep.delays == [0.25, 0.25]


def test_on_outcome_callback_sees_each_outcome(network, generator, alternating_deployer, no_sleep):
    seen = []
    runner = BatchRunner(alternating_deployer, generator, network, sleep=no_sleep)
    outcomes = runner.run(3, on_outcome=lambda i, o: seen.append((i, o)))
    assert seen == list(enumerate(outcomes, start=1))


def test_audit_logger_gets_one_line_per_outcome(network, generator, alternating_deployer, no_sleep, caplog):
    audit = logging.getLogger("test_audit")
    runner = BatchRunner(alternating_deployer, generator, network, sleep=no_sleep, audit_logger=audit)
    with caplog.at_level(logging.INFO, logger="test_audit"):
        runner.run(2)
    messages = [r.getMessage() for r in caplog.records if r.name == "test_audit"]
    assert len(messages) == 2
    assert messages[0].startswith("SUCCESS | #1 | Local Testnet")
    assert messages[1].startswith("FAILED | #2 | Local Testnet")
    assert "Error: failure 2" in messages[1]


def test_progress_lines_printed(network, generator, failing_deployer, no_sleep, capsys):
    BatchRunner(failing_deployer, generator, network, sleep=no_sleep).run(2)
    out = capsys.readouterr().out
    assert "Deploy #1/2: name=Token" in out
    assert "Failed on deploy #2: boom" in out


def test_explorer_url_printed_for_successes_only(network, generator, alternating_deployer, no_sleep, capsys):
    BatchRunner(alternating_deployer, generator, network, sleep=no_sleep).run(2)
    out = capsys.readouterr().out
    assert f"Explorer URL: https://explorer.example/address/0x{1:040x}" in out
    assert out.count("Explorer URL:") == 1


def test_explorer_url_skipped_without_explorer(generator, succeeding_deployer, no_sleep, capsys):
    bare = NetworkProfile(name="Bare", rpc_url="http://127.0.0.1:8545", explorer="")
    BatchRunner(succeeding_deployer, generator, bare, sleep=no_sleep).run(1)
    assert "Explorer URL" not in capsys.readouterr().out


class TestDeploymentOutcome:
    """Test the outcome record."""

    def test_rejects_both_address_and_error(self):
        with pytest.raises(ValueError):
            DeploymentOutcome("T", "ABC", "1", address="0x1", error="x")

    def test_rejects_neither(self):
        with pytest.raises(ValueError):
            DeploymentOutcome("T", "ABC", "1")

    def test_to_dict_shape(self):
        outcome = DeploymentOutcome("Tokenabcdef", "XYZ", "42", error="boom")
        assert outcome.to_dict() == {
            "name": "Tokenabcdef",
            "symbol": "XYZ",
            "supply": "42",
            "address": None,
            "error": "boom",
        }

    def test_from_result(self, generator):
        request = generator.request()
        outcome = DeploymentOutcome.from_result(request, DeployResult.success("0xabc"))
        assert outcome.succeeded
        assert (outcome.name, outcome.symbol, outcome.supply) == (request.name, request.symbol, request.supply)
