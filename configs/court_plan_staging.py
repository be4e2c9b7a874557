"""
Court Deployment Plan (staging).

This plan is designed to:
- Deploy the six court modules against a staging network.
- Mint test tokens for every token left without an address.
- Hand the modules governor role off to the staging governor once wired.
"""

# ============================================================================
# Environment - network access used by the deployer
# ============================================================================
# Any class registered in court_deployment.environments.ENVIRONMENTS can be
# used here. Environments defined elsewhere are imported through
# `custom_imports = dict(imports=["my_package.my_environment"])`.
environment = dict(
    type="LocalEnvironment",
    network="staging",
    # Keeps the dry-run chain between invocations so `deploy` can resume
    state_path="work_dirs/court/staging_chain.json",
    # Set to None to disable the verification pass
    explorer_url="https://explorer.staging.local",
)

# ============================================================================
# Deployment store - single source of truth for what is already deployed
# ============================================================================
store = dict(path="work_dirs/court/deployments.json")

# ============================================================================
# Resume behaviour
# ============================================================================
resume = dict(
    # A module whose creation was started but never recorded:
    # - True  : warn and deploy it again
    # - False : abort so the sender's transactions can be checked first
    redeploy_pending=True,
)

# ============================================================================
# Tokens - declared once, referenced by name from the sections below
# ============================================================================
# A token without an address is minted on first use; every section naming it
# then shares the minted address.
tokens = dict(
    DAI=dict(symbol="DAI", decimals=18, address=None),
    ANJ=dict(symbol="ANJ", decimals=18, address=None),
)

# ============================================================================
# Governors
# ============================================================================
governor = dict(
    funds=dict(address="0x0000000000000000000000000000000000000f01", description="Funds governor multisig"),
    config=dict(address="0x0000000000000000000000000000000000000c01", description="Config governor multisig"),
    modules=dict(address="0x0000000000000000000000000000000000000a01", description="Modules governor DAO"),
)

# ============================================================================
# Clock
# ============================================================================
clock = dict(
    term_duration=60 * 60 * 8,  # 8 hours
    first_term_start_time=1735689600,  # 2025-01-01 00:00:00 UTC
)

# ============================================================================
# Controller and disputes
# ============================================================================
court = dict(
    fee_token="DAI",
    juror_fee=10 * 10**18,
    draft_fee=18 * 10**17,
    settle_fee=1 * 10**17,
    evidence_terms=21,
    commit_terms=6,
    reveal_terms=6,
    appeal_terms=6,
    appeal_confirm_terms=6,
    penalty_pct=1000,  # ‱
    final_round_reduction=5000,  # ‱
    first_round_jurors_number=3,
    appeal_step_factor=3,
    max_regular_appeal_rounds=4,
    final_round_lock_terms=36,
    appeal_collateral_factor=30000,  # ‱
    appeal_confirm_collateral_factor=20000,  # ‱
    final_round_weight_precision=1000,
    max_jurors_per_draft_batch=81,
    skipped_disputes=0,
)

# ============================================================================
# Jurors
# ============================================================================
jurors = dict(
    token="ANJ",
    min_active_balance=10000 * 10**18,
)

# ============================================================================
# Subscriptions
# ============================================================================
subscriptions = dict(
    fee_token="DAI",  # same token as the court fees
    period_duration=90,  # terms
    fee_amount=1000 * 10**18,
    pre_payment_periods=12,
    resume_pre_paid_periods=12,
    late_payment_penalty_pct=0,  # ‱
    governor_share_pct=0,  # ‱
)

# ============================================================================
# Verification
# ============================================================================
verification = dict(
    enabled=True,
    source="@aragon/court",
    headers=[
        "Commit sha: c7bf36f004a2b0e11d7e14234cea7853fd3a523a",
        "GitHub repository: https://github.com/aragon/aragon-court",
        "Tool used for the deploy: https://github.com/aragon/aragon-network-deploy",
    ],
)
