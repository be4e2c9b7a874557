"""Shared fixtures: a complete plan, a temporary store and a local chain."""

import copy
import logging

import pytest
from mmengine.config import Config

from court_deployment.core.config.base_config import DeploymentPlan
from court_deployment.environments.local import DEFAULT_SENDER, LocalEnvironment
from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.pending_journal import PendingCreationJournal, journal_path_for
from court_deployment.runtime.runner import DeploymentRunner

NETWORK = "testnet"
SENDER = DEFAULT_SENDER
MODULES_GOVERNOR = "0x0000000000000000000000000000000000000A01"
FEE_TOKEN = "0x00000000000000000000000000000000000000d1"
JURORS_TOKEN = "0x00000000000000000000000000000000000000a2"

PLAN = dict(
    governor=dict(
        funds=dict(address="0x0000000000000000000000000000000000000f01", description="Funds multisig"),
        config="0x0000000000000000000000000000000000000c01",
        modules=dict(address=MODULES_GOVERNOR, description="Modules DAO"),
    ),
    clock=dict(term_duration=28800, first_term_start_time=1735689600),
    court=dict(
        fee_token=dict(symbol="DAI", decimals=18, address=FEE_TOKEN),
        juror_fee=10 * 10**18,
        draft_fee="1_800_000_000_000_000_000",
        settle_fee=10**17,
        evidence_terms=21,
        commit_terms=6,
        reveal_terms=6,
        appeal_terms=6,
        appeal_confirm_terms=6,
        penalty_pct=1000,
        final_round_reduction=5000,
        first_round_jurors_number=3,
        appeal_step_factor=3,
        max_regular_appeal_rounds=4,
        final_round_lock_terms=36,
        appeal_collateral_factor=30000,
        appeal_confirm_collateral_factor=20000,
        final_round_weight_precision=1000,
        max_jurors_per_draft_batch=81,
    ),
    jurors=dict(
        token=dict(symbol="ANJ", decimals=18, address=JURORS_TOKEN),
        min_active_balance=10000 * 10**18,
    ),
    subscriptions=dict(
        fee_token=dict(symbol="DAI", decimals=18, address=FEE_TOKEN),
        period_duration=90,
        fee_amount=1000 * 10**18,
        pre_payment_periods=12,
        resume_pre_paid_periods=12,
        late_payment_penalty_pct=0,
        governor_share_pct=0,
    ),
)


@pytest.fixture
def plan_dict():
    """A fresh, complete plan dict that tests may modify."""
    return copy.deepcopy(PLAN)


@pytest.fixture
def make_plan(plan_dict):
    def _make(**sections):
        cfg = copy.deepcopy(plan_dict)
        cfg.update(sections)
        return DeploymentPlan(Config(cfg))

    return _make


@pytest.fixture
def plan(make_plan):
    return make_plan()


@pytest.fixture
def logger():
    return logging.getLogger("court_deployment.tests")


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "deployments.json")


@pytest.fixture
def chain_path(tmp_path):
    return str(tmp_path / "chain.json")


@pytest.fixture
def make_environment(chain_path):
    """Build a LocalEnvironment sharing chain state on disk, so each run starts with an empty call log."""

    def _make(**kwargs):
        kwargs.setdefault("network", NETWORK)
        kwargs.setdefault("state_path", chain_path)
        return LocalEnvironment(**kwargs)

    return _make


@pytest.fixture
def make_runner(plan, store_path, logger, make_environment):
    """Build a runner over a freshly loaded store, as a new process would."""

    def _make(environment=None, run_plan=None):
        environment = environment or make_environment()
        store = DeploymentStore(store_path, environment.network, logger)
        journal = PendingCreationJournal(journal_path_for(store_path), environment.network, logger)
        return DeploymentRunner(run_plan or plan, environment, store, logger, journal=journal)

    return _make
