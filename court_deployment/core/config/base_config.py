"""
Deployment plan for the court modules.

A plan is a Python config file loaded with MMEngine. This module turns its
sections into typed, immutable objects; the only value allowed to change after
loading is a token address that gets filled in once when a staging token is
minted.
"""

import argparse
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from mmengine.config import Config, DictAction

from court_deployment.core.config.constants import STORE_DEFAULTS, VERIFICATION_DEFAULTS
from court_deployment.core.errors import PlanConfigError
from court_deployment.core.numbers import to_int

REQUIRED_SECTIONS = ("clock", "governor", "court", "jurors", "subscriptions")


def _require(section: Mapping[str, Any], key: str, section_name: str) -> Any:
    if key not in section or section[key] is None:
        raise PlanConfigError(f"Missing '{section_name}.{key}' in deployment plan")
    return section[key]


def _require_int(section: Mapping[str, Any], key: str, section_name: str) -> int:
    try:
        return to_int(_require(section, key, section_name), key=f"{section_name}.{key}")
    except PlanConfigError:
        raise
    except ValueError as exc:
        raise PlanConfigError(str(exc)) from exc


class TokenConfig:
    """
    Token referenced by the plan.

    The address may be left empty in staging plans; the deployer then mints a
    test token and completes the address exactly once.
    """

    def __init__(self, symbol: str, decimals: int = 18, address: Optional[str] = None):
        self.symbol = symbol
        self.decimals = decimals
        self._address = address or None

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any], section_name: str) -> "TokenConfig":
        if not isinstance(config_dict, Mapping):
            raise PlanConfigError(f"'{section_name}' must be a token name or a dict with symbol/decimals/address")
        return cls(
            symbol=str(_require(config_dict, "symbol", section_name)),
            decimals=to_int(config_dict.get("decimals", 18), key=f"{section_name}.decimals"),
            address=config_dict.get("address"),
        )

    @classmethod
    def from_value(cls, value: Any, section_name: str, tokens: Mapping[str, "TokenConfig"]) -> "TokenConfig":
        """Resolve a token field: the name of a shared token in the `tokens` section, or an inline dict."""
        if isinstance(value, str):
            if value not in tokens:
                raise PlanConfigError(
                    f"'{section_name}' refers to token '{value}', which is not declared in the 'tokens' section"
                )
            return tokens[value]
        return cls.from_dict(value, section_name)

    @property
    def address(self) -> Optional[str]:
        return self._address

    def assign_address(self, address: str) -> None:
        """Complete the token address of a freshly minted token."""
        if self._address:
            raise PlanConfigError(f"Token {self.symbol} already has address {self._address}")
        if not address:
            raise PlanConfigError(f"Cannot assign an empty address to token {self.symbol}")
        self._address = address

    def describe(self) -> str:
        return f"{self.symbol} at {self._address or '(to be minted)'}"

    def __repr__(self) -> str:
        return f"TokenConfig(symbol={self.symbol!r}, decimals={self.decimals}, address={self._address!r})"


@dataclass(frozen=True)
class GovernorConfig:
    """One governance identity: an address plus an optional human description."""

    address: str
    description: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any, section_name: str) -> "GovernorConfig":
        if isinstance(value, str):
            return cls(address=value)
        if isinstance(value, Mapping):
            return cls(
                address=str(_require(value, "address", section_name)),
                description=value.get("description"),
            )
        raise PlanConfigError(f"'{section_name}' must be an address string or a dict with an address")

    def describe(self) -> str:
        if self.description:
            return f"{self.description} ({self.address})"
        return self.address

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class GovernorsConfig:
    """Funds, config and modules governors of the controller."""

    funds: GovernorConfig
    config: GovernorConfig
    modules: GovernorConfig

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "GovernorsConfig":
        return cls(
            funds=GovernorConfig.from_value(_require(config_dict, "funds", "governor"), "governor.funds"),
            config=GovernorConfig.from_value(_require(config_dict, "config", "governor"), "governor.config"),
            modules=GovernorConfig.from_value(_require(config_dict, "modules", "governor"), "governor.modules"),
        )


@dataclass(frozen=True)
class ClockConfig:
    """Court term settings."""

    term_duration: int
    first_term_start_time: int

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ClockConfig":
        config = cls(
            term_duration=_require_int(config_dict, "term_duration", "clock"),
            first_term_start_time=_require_int(config_dict, "first_term_start_time", "clock"),
        )
        if config.term_duration <= 0:
            raise PlanConfigError("'clock.term_duration' must be positive")
        return config


@dataclass(frozen=True)
class CourtConfig:
    """Controller and dispute manager parameters."""

    fee_token: TokenConfig
    juror_fee: int
    draft_fee: int
    settle_fee: int
    evidence_terms: int
    commit_terms: int
    reveal_terms: int
    appeal_terms: int
    appeal_confirm_terms: int
    penalty_pct: int
    final_round_reduction: int
    first_round_jurors_number: int
    appeal_step_factor: int
    max_regular_appeal_rounds: int
    final_round_lock_terms: int
    appeal_collateral_factor: int
    appeal_confirm_collateral_factor: int
    final_round_weight_precision: int
    max_jurors_per_draft_batch: int
    skipped_disputes: int = 0

    INT_FIELDS = (
        "juror_fee",
        "draft_fee",
        "settle_fee",
        "evidence_terms",
        "commit_terms",
        "reveal_terms",
        "appeal_terms",
        "appeal_confirm_terms",
        "penalty_pct",
        "final_round_reduction",
        "first_round_jurors_number",
        "appeal_step_factor",
        "max_regular_appeal_rounds",
        "final_round_lock_terms",
        "appeal_collateral_factor",
        "appeal_confirm_collateral_factor",
        "final_round_weight_precision",
        "max_jurors_per_draft_batch",
    )

    @classmethod
    def from_dict(
        cls, config_dict: Mapping[str, Any], tokens: Mapping[str, TokenConfig] = MappingProxyType({})
    ) -> "CourtConfig":
        values = {name: _require_int(config_dict, name, "court") for name in cls.INT_FIELDS}
        values["skipped_disputes"] = to_int(config_dict.get("skipped_disputes", 0), key="court.skipped_disputes")
        if values["final_round_weight_precision"] <= 0:
            raise PlanConfigError("'court.final_round_weight_precision' must be positive")
        return cls(
            fee_token=TokenConfig.from_value(_require(config_dict, "fee_token", "court"), "court.fee_token", tokens),
            **values,
        )


@dataclass(frozen=True)
class JurorsConfig:
    """Juror token and eligibility threshold."""

    token: TokenConfig
    min_active_balance: int

    @classmethod
    def from_dict(
        cls, config_dict: Mapping[str, Any], tokens: Mapping[str, TokenConfig] = MappingProxyType({})
    ) -> "JurorsConfig":
        return cls(
            token=TokenConfig.from_value(_require(config_dict, "token", "jurors"), "jurors.token", tokens),
            min_active_balance=_require_int(config_dict, "min_active_balance", "jurors"),
        )


@dataclass(frozen=True)
class SubscriptionsConfig:
    """Subscription billing parameters."""

    fee_token: TokenConfig
    period_duration: int
    fee_amount: int
    pre_payment_periods: int
    resume_pre_paid_periods: int
    late_payment_penalty_pct: int
    governor_share_pct: int

    INT_FIELDS = (
        "period_duration",
        "fee_amount",
        "pre_payment_periods",
        "resume_pre_paid_periods",
        "late_payment_penalty_pct",
        "governor_share_pct",
    )

    @classmethod
    def from_dict(
        cls, config_dict: Mapping[str, Any], tokens: Mapping[str, TokenConfig] = MappingProxyType({})
    ) -> "SubscriptionsConfig":
        values = {name: _require_int(config_dict, name, "subscriptions") for name in cls.INT_FIELDS}
        return cls(
            fee_token=TokenConfig.from_value(
                _require(config_dict, "fee_token", "subscriptions"), "subscriptions.fee_token", tokens
            ),
            **values,
        )


@dataclass(frozen=True)
class VerificationConfig:
    """Settings for the post-deployment verification pass."""

    enabled: bool = True
    source: str = VERIFICATION_DEFAULTS.SOURCE_PACKAGE
    headers: Tuple[str, ...] = field(default_factory=lambda: VERIFICATION_DEFAULTS.HEADERS)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "VerificationConfig":
        return cls(
            enabled=bool(config_dict.get("enabled", True)),
            source=config_dict.get("source", VERIFICATION_DEFAULTS.SOURCE_PACKAGE),
            headers=tuple(config_dict.get("headers", VERIFICATION_DEFAULTS.HEADERS)),
        )


@dataclass(frozen=True)
class StoreConfig:
    """Where deployment records are persisted."""

    path: str = STORE_DEFAULTS.STORE_PATH

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "StoreConfig":
        return cls(path=config_dict.get("path", STORE_DEFAULTS.STORE_PATH))


@dataclass(frozen=True)
class ResumeConfig:
    """How to treat module creations a previous run never saw complete."""

    redeploy_pending: bool = True

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ResumeConfig":
        return cls(redeploy_pending=bool(config_dict.get("redeploy_pending", True)))


def build_tokens(section: Any) -> Dict[str, TokenConfig]:
    """
    Build the shared tokens of a plan, one TokenConfig per name.

    Sections referring to the same name share the instance, so a token minted
    for one module is reused by every other module that names it.
    """
    if not section:
        return {}
    if not isinstance(section, Mapping):
        raise PlanConfigError("'tokens' must be a dict mapping token names to symbol/decimals/address")
    tokens = {}
    for name, value in section.items():
        if value is not None and not isinstance(value, Mapping):
            raise PlanConfigError(f"'tokens.{name}' must be a dict with symbol/decimals/address")
        value = dict(value or {})
        value.setdefault("symbol", name)
        tokens[name] = TokenConfig.from_dict(value, f"tokens.{name}")
    return tokens


class DeploymentPlan:
    """
    Typed view over a deployment plan config.

    Attributes:
        clock: Term duration and first term start
        tokens: Shared tokens by name, referenced from the sections below
        governors: Funds, config and modules governors
        court: Controller and dispute parameters
        jurors: Juror token and minimum active balance
        subscriptions: Subscription billing parameters
    """

    def __init__(self, plan_cfg: Config):
        """
        Initialize the deployment plan.

        Args:
            plan_cfg: MMEngine Config object containing the plan sections
        """
        self.plan_cfg = plan_cfg
        self._validate_config()

        self.tokens = build_tokens(plan_cfg.get("tokens"))
        self.clock = ClockConfig.from_dict(plan_cfg["clock"])
        self.governors = GovernorsConfig.from_dict(plan_cfg["governor"])
        self.court = CourtConfig.from_dict(plan_cfg["court"], self.tokens)
        self.jurors = JurorsConfig.from_dict(plan_cfg["jurors"], self.tokens)
        self.subscriptions = SubscriptionsConfig.from_dict(plan_cfg["subscriptions"], self.tokens)

        self._verification_config = VerificationConfig.from_dict(plan_cfg.get("verification", {}) or {})
        self._store_config = StoreConfig.from_dict(plan_cfg.get("store", {}) or {})
        self._resume_config = ResumeConfig.from_dict(plan_cfg.get("resume", {}) or {})

    def _validate_config(self) -> None:
        """Validate that every required section is present and is a mapping."""
        for name in REQUIRED_SECTIONS:
            if name not in self.plan_cfg:
                raise PlanConfigError(
                    f"Missing '{name}' section in deployment plan. Please update your plan to include it."
                )
            if not isinstance(self.plan_cfg[name], Mapping):
                raise PlanConfigError(f"Section '{name}' must be a dict")

    @property
    def verification_config(self) -> VerificationConfig:
        return self._verification_config

    @property
    def store_config(self) -> StoreConfig:
        return self._store_config

    @property
    def resume_config(self) -> ResumeConfig:
        return self._resume_config

    @property
    def environment_config(self) -> Dict[str, Any]:
        """Registry config of the deployment environment (defaults to a local dry-run chain)."""
        environment = self.plan_cfg.get("environment") or dict(type="LocalEnvironment")
        return dict(environment)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s:%(name)s:%(message)s")
    return logging.getLogger("court_deployment")


def parse_base_args(parser: Optional[argparse.ArgumentParser] = None) -> argparse.ArgumentParser:
    """
    Create argument parser with common deployment arguments.

    Args:
        parser: Optional existing ArgumentParser to add arguments to

    Returns:
        ArgumentParser with deployment arguments
    """
    if parser is None:
        parser = argparse.ArgumentParser(
            description="Deploy the court modules",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )

    parser.add_argument("plan_cfg", help="Deployment plan config path")
    parser.add_argument("--store", default=None, help="Deployment store path (overrides store.path)")
    parser.add_argument(
        "--cfg-options",
        nargs="+",
        action=DictAction,
        help="Override plan settings, the key-value pair in xxx=yyy format will be merged into the plan file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    return parser


def load_plan(args: argparse.Namespace) -> DeploymentPlan:
    """Load the plan file named on the command line, applying overrides."""
    plan_cfg = Config.fromfile(args.plan_cfg)
    if getattr(args, "cfg_options", None):
        plan_cfg.merge_from_dict(args.cfg_options)
    if getattr(args, "store", None):
        plan_cfg.merge_from_dict({"store.path": args.store})
    return DeploymentPlan(plan_cfg)
