import csv

import cosmic_ray_shower
from air_shower.config import SimulationParams
from air_shower.rng import NumpyRandom
from air_shower.showers import HIT_FIELDS, PROFILE_FIELDS, run_showers, write_rows
from air_shower.species import Species


def test_run_showers_collects_hits_and_profile():
    result = run_showers("proton", 5.0, 2, dt=0.02, max_ticks=5000, rng=NumpyRandom(5))
    assert len(result.ticks_per_shower) == 2
    assert result.unfinished == 0
    assert {row["shower_id"] for row in result.hits} == {1, 2}
    for row in result.hits:
        assert set(row) == set(HIT_FIELDS)
        assert 0.35 <= row["brightness"] <= 1.0
    assert len(result.profile) == sum(result.ticks_per_shower)
    # every shower ends with an empty population
    last = {}
    for row in result.profile:
        last[row["shower_id"]] = row
    assert all(row["total"] == 0 for row in last.values())


def test_tick_limit_marks_unfinished():
    result = run_showers("proton", 5.0, 1, dt=0.02, max_ticks=3, rng=NumpyRandom(1))
    assert result.ticks_per_shower == [3]
    assert result.unfinished == 1


def test_progress_callback():
    seen = []
    run_showers("gamma", 2.0, 3, rng=NumpyRandom(2), progress=lambda *args: seen.append(args))
    assert [s[0] for s in seen] == [1, 2, 3]


def test_run_showers_leaves_caller_params_alone():
    params = SimulationParams(primary_energy=1.0, selected_species="gamma", continuous_spawn=True, drive_factor=3.0)
    result = run_showers("iron", 5.0, 1, params=params, rng=NumpyRandom(6))
    assert result.ticks_per_shower
    assert params.primary_energy == 1.0
    assert params.selected_species is Species.GAMMA
    assert params.continuous_spawn is True


def test_write_rows(tmp_path):
    path = tmp_path / "profile.csv"
    write_rows(path, [{"shower_id": 1, "time": 0.02, "total": 3, "muon": 1, "gamma": 0, "electron": 2,
                       "hadrons": 0, "extra": "ignored"}], PROFILE_FIELDS)
    with open(path, newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert list(rows[0]) == PROFILE_FIELDS
    assert rows[0]["electron"] == "2"


def test_cli_writes_csv_files(tmp_path, capsys):
    hits = tmp_path / "hits.csv"
    profile = tmp_path / "profile.csv"
    code = cosmic_ray_shower.main(["--showers", "2", "--energy", "5", "--seed", "4",
                                   "--output", str(hits), "--profile", str(profile)])
    assert code == 0
    assert hits.exists() and profile.exists()
    with open(hits, newline="") as fh:
        assert next(csv.reader(fh)) == HIT_FIELDS
    assert "All 2 simulations finished" in capsys.readouterr().out


def test_cli_reports_bad_parameter_file(tmp_path, capsys):
    bad = tmp_path / "settings.ini"
    bad.write_text("x = 1\n")
    assert cosmic_ray_shower.main(["--params", str(bad), "--output", str(tmp_path / "h.csv")]) == 1
    assert "Error reading parameter file" in capsys.readouterr().out
