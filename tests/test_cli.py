"""Command line entrypoint."""

import pytest

from court_deployment.cli.main import build_parser, main
from court_deployment.commands import deploy, verify
from court_deployment.core.module_kind import ModuleKind
from court_deployment.runtime.deployment_store import DeploymentStore

from .conftest import PLAN


@pytest.fixture
def plan_file(tmp_path):
    sections = dict(PLAN)
    sections["environment"] = dict(type="LocalEnvironment", network="dryrun", state_path=str(tmp_path / "chain.json"))
    path = tmp_path / "plan.py"
    path.write_text("".join(f"{name} = {value!r}\n" for name, value in sections.items()))
    return str(path)


def test_parser_has_one_subcommand_per_command():
    parser = build_parser()

    args = parser.parse_args(["deploy", "plan.py", "--skip-verification", "--log-level", "DEBUG"])

    assert args.command == "deploy"
    assert args.plan_cfg == "plan.py"
    assert args.skip_verification
    assert args.log_level == "DEBUG"
    assert args.run is deploy.run
    assert parser.parse_args(["verify", "plan.py"]).run is verify.run


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_deploy_then_verify(plan_file, tmp_path):
    store_path = str(tmp_path / "deployments.json")

    assert main(["verify", plan_file, "--store", store_path]) == 1
    assert main(["deploy", plan_file, "--store", store_path, "--skip-verification"]) == 0

    records = DeploymentStore(store_path, "dryrun").records()
    assert set(records) == set(ModuleKind)
    assert not any(record.is_verified for record in records.values())

    assert main(["verify", plan_file, "--store", store_path]) == 0
    assert all(record.is_verified for record in DeploymentStore(store_path, "dryrun").records().values())

    assert main(["deploy", plan_file, "--store", store_path]) == 0


def test_invalid_plan_exits_with_error(tmp_path):
    path = tmp_path / "broken.py"
    path.write_text("clock = dict(term_duration=1, first_term_start_time=0)\n")

    assert main(["deploy", str(path), "--store", str(tmp_path / "deployments.json")]) == 1
