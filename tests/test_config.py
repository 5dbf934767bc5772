from __future__ import annotations

from pathlib import Path

import pytest

from wifistudy.runtime.config import load_effective_config, load_experiment_config, validate_config


def test_defaults_match_reference_sweep() -> None:
    cfg = load_experiment_config()

    assert cfg.csv == Path("results.csv")
    assert cfg.verbose is False
    assert cfg.failure_policy == "continue"
    assert cfg.events is None
    specs = cfg.scenarios()
    assert [s.distance_m for s in specs] == [5.0, 10.0, 20.0, 35.0, 50.0]
    assert {(s.app_start_s, s.app_stop_s, s.sim_stop_s) for s in specs} == {(1.0, 10.0, 12.0)}
    assert specs[0].station_offsets == (0.0, 3.0, -3.0)


def test_yaml_file_and_overrides_are_layered(tmp_path: Path) -> None:
    cfg_path = tmp_path / "exp.yaml"
    cfg_path.write_text(
        """
backend: stub
csv: from_file.csv
scenario:
  distances_m: [1, 2]
  station_count: 2
stub:
  sink_total_rx_bytes: 500
  fail_on: [1]
""".strip(),
        encoding="utf-8",
    )
    cfg = load_experiment_config(cfg_path, {"csv": "from_cli.csv", "verbose": None})

    assert cfg.backend == "stub"
    assert cfg.csv == Path("from_cli.csv")
    assert cfg.distances_m == (1.0, 2.0)
    assert cfg.scenario_params["station_count"] == 2
    # untouched keys keep their defaults
    assert cfg.scenario_params["app_stop_s"] == 10.0
    assert cfg.backend_options == {"sink_total_rx_bytes": 500, "fail_on": [1]}


def test_validate_config_reports_every_problem() -> None:
    cfg = load_effective_config()
    cfg["backend"] = "omnet"
    cfg["failure_policy"] = "retry"
    cfg["scenario"] = dict(cfg["scenario"], station_count=0, app_stop_s=20.0, subnet="10.1.1.7/24")

    errors = validate_config(cfg)

    assert len(errors) == 5
    assert any("backend" in e for e in errors)
    assert any("failure_policy" in e for e in errors)
    assert any("station_count" in e for e in errors)
    assert any("sim_stop_s" in e for e in errors)
    assert any("subnet" in e for e in errors)


def test_invalid_config_raises_value_error(tmp_path: Path) -> None:
    cfg_path = tmp_path / "bad.yaml"
    cfg_path.write_text("scenario:\n  distances_m: []\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid config"):
        load_experiment_config(cfg_path)


def test_validate_config_checks_scenario_extras() -> None:
    cfg = load_effective_config()
    cfg["scenario"] = dict(
        cfg["scenario"],
        station_offsets=[0.0, None],
        stagger_s=-1.0,
        send_size_bytes=0,
        port="5000",
    )

    errors = validate_config(cfg)

    assert sorted(e.split(" ")[0] for e in errors) == [
        "scenario.port",
        "scenario.send_size_bytes",
        "scenario.stagger_s",
        "scenario.station_offsets",
    ]


def test_non_mapping_config_file_is_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "list.yaml"
    cfg_path.write_text("- stub\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_effective_config(cfg_path)
