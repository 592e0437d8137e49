# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Integration test running behave in-process with the ReportPortal formatter.

Only the ReportPortal service is replaced (by the recording launch); feature
parsing, step execution and formatter callbacks are real behave.

behave keeps step definitions in a process-wide registry, so each run uses
its own step texts and loads them only once.
"""

import textwrap
from pathlib import Path
from unittest.mock import patch

from _pytest.monkeypatch import MonkeyPatch

from cucumber_rp.core.types import ItemType, LogLevel
from cucumber_rp.runner import run_behave

FEATURE = """\
@auth
Feature: Login
  As a user
  I want to log in

  @smoke
  Scenario: Successful login
    Given the registered users
      | name  | role  |
      | alice | admin |
    When alice submits the login form with
      \"\"\"
      {"password": "secret"}
      \"\"\"
    Then the dashboard is shown

  Scenario: Wrong password
    Given the registered users
      | name | role |
      | bob  | user |
    When bob submits a wrong password
    Then the dashboard is shown
    And the session is closed

  Scenario: Unfinished work
    Given a step nobody implemented
"""

STEPS = """\
from behave import given, then, when


@given("the registered users")
def step_users(context):
    context.users = {row["name"]: row["role"] for row in context.table}


@when("alice submits the login form with")
def step_login_with_payload(context):
    context.logged_in = "alice" in context.users and "secret" in context.text


@when("bob submits a wrong password")
def step_wrong_password(context):
    context.logged_in = False


@then("the dashboard is shown")
def step_dashboard(context):
    assert context.logged_in, "login failed"


@then("the session is closed")
def step_session_closed(context):
    context.logged_in = False
"""

CONFIG = """\
reportportal:
  endpoint: https://rp.example.com
  project: demo
  api_key: secret
"""


def _write_project(root: Path) -> tuple[Path, Path]:
    features = root / "features"
    (features / "steps").mkdir(parents=True)
    (features / "login.feature").write_text(FEATURE)
    (features / "steps" / "login_steps.py").write_text(STEPS)
    config = root / "reportportal.yaml"
    config.write_text(textwrap.dedent(CONFIG))
    return features, config


def test_behave_run_reports_item_tree(
    launch, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """Features, scenarios and steps are reported with mapped statuses and logs."""
    monkeypatch.chdir(tmp_path)
    features, config = _write_project(tmp_path)

    with patch("cucumber_rp.behave.formatter.ReportPortalLaunch", return_value=launch):
        rc = run_behave(paths=[features], config=config, console_format="plain")

    assert rc != 0, "the wrong-password scenario must fail the run"
    assert launch.finish_calls == 1

    items = {uuid: (parent, rq) for parent, rq, uuid in launch.started}
    statuses = {uuid: rq.status.value if rq.status else None for uuid, rq in launch.finished}
    by_type = {
        item_type: [uuid for uuid, (_, rq) in items.items() if rq.type == item_type]
        for item_type in ItemType
    }

    # Every started item is finished exactly once
    assert sorted(uuid for uuid, _ in launch.finished) == sorted(items)

    # Feature
    (feature_id,) = by_type[ItemType.STORY]
    feature_parent, feature_rq = items[feature_id]
    assert feature_parent is None
    assert feature_rq.name == "Feature: Login"
    assert feature_rq.tags == frozenset({"@auth"})
    assert feature_rq.description == "As a user\nI want to log in"
    assert statuses[feature_id] == "FAILED"

    # Scenarios
    scenarios = {items[uuid][1].name: uuid for uuid in by_type[ItemType.SCENARIO]}
    assert set(scenarios) == {
        "Scenario: Successful login",
        "Scenario: Wrong password",
        "Scenario: Unfinished work",
    }
    assert all(items[uuid][0] == feature_id for uuid in scenarios.values())
    assert items[scenarios["Scenario: Successful login"]][1].tags == frozenset({"@smoke"})
    assert statuses[scenarios["Scenario: Successful login"]] == "PASSED"
    assert statuses[scenarios["Scenario: Wrong password"]] == "FAILED"

    # Steps of the passing scenario, in execution order
    def steps_of(scenario_name: str) -> list[str]:
        scenario_id = scenarios[scenario_name]
        return [uuid for uuid in by_type[ItemType.STEP] if items[uuid][0] == scenario_id]

    passing = steps_of("Scenario: Successful login")
    assert [items[uuid][1].name for uuid in passing] == [
        "Given the registered users",
        "When alice submits the login form with",
        "Then the dashboard is shown",
    ]
    assert all(statuses[uuid] == "PASSED" for uuid in passing)
    assert items[passing[0]][1].description == (
        "\r\n\r\n| name | role |\r\n|-|\r\n| alice | admin |\r\n"
    )
    assert items[passing[1]][1].description == '\n"""\n{"password": "secret"}\n"""\n'

    # Failing step carries the assertion message as an ERROR log
    failing = steps_of("Scenario: Wrong password")
    assert [statuses[uuid] for uuid in failing] == ["PASSED", "PASSED", "FAILED", "SKIPPED"]
    failure_logs = [log for log in launch.logs if log.item_id == failing[2]]
    assert len(failure_logs) == 1
    assert failure_logs[0].level == LogLevel.ERROR
    assert "login failed" in failure_logs[0].message

    # Undefined step is still reported
    (undefined,) = steps_of("Scenario: Unfinished work")
    assert items[undefined][1].name == "Given a step nobody implemented"
    assert statuses[undefined] == "SKIPPED"


DRY_RUN_FEATURE = """\
Feature: Inventory
  Scenario: Stock check
    Given the warehouse is open
    Then every shelf is counted
"""

DRY_RUN_STEPS = """\
from behave import given, then


@given("the warehouse is open")
def step_open(context):
    raise AssertionError("must not run in a dry run")


@then("every shelf is counted")
def step_counted(context):
    raise AssertionError("must not run in a dry run")
"""


def test_dry_run_reports_items_as_skipped(
    launch, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """Nothing runs in a dry run, so nothing is reported as failed."""
    monkeypatch.chdir(tmp_path)
    features = tmp_path / "features"
    (features / "steps").mkdir(parents=True)
    (features / "inventory.feature").write_text(DRY_RUN_FEATURE)
    (features / "steps" / "inventory_steps.py").write_text(DRY_RUN_STEPS)
    config = tmp_path / "reportportal.yaml"
    config.write_text(CONFIG)

    with patch("cucumber_rp.behave.formatter.ReportPortalLaunch", return_value=launch):
        run_behave(paths=[features], config=config, dry_run=True, console_format="plain")

    assert launch.names() == [
        "Feature: Inventory",
        "Scenario: Stock check",
        "Given the warehouse is open",
        "Then every shelf is counted",
    ]
    for name in launch.names():
        assert launch.status_of(name) == "SKIPPED", name
    assert launch.logs == []
