import os
from datetime import date, datetime
from unittest.mock import patch

import pytest
from conftest import export_csv, export_row, make_activity

import stridekit.appconfig as scfg
from stridekit.appconfig import DEFAULT_CONFIG, save_config
from stridekit.core import Stridekit, build_report
from stridekit.db import get_db
from stridekit.providers.export import ExportProvider
from stridekit.providers.file import FileProvider

SAMPLE_GPX = os.path.join(os.path.dirname(__file__), "fileformats", "samples", "sample.gpx")


def _config(**overrides):
    config = {
        "home_timezone": "UTC",
        "debug": False,
        "week_start_day": 0,
        "providers": {
            "export": {"category_filter": "Run", "columns": {}},
            "file": {"activity_type": "Run"},
        },
    }
    config.update(overrides)
    return config


@pytest.fixture
def export_file(tmp_path):
    path = tmp_path / "activities.csv"
    path.write_text(
        export_csv(
            export_row("1", "1 Jan 2024, 07:00:00", distance_m="5000"),
            export_row("2", "8 Jan 2024, 07:00:00", distance_m="7000"),
            export_row("3", "9 Jan 2024, 07:00:00", activity_type="Ride", distance_m="30000"),
        )
    )
    return str(path)


class TestStridekitCore:
    """Test the core Stridekit class functionality."""

    def test_init_loads_config_from_db(self, monkeypatch):
        monkeypatch.setattr(scfg, "_FILE_PATHS", [])
        save_config({"home_timezone": "America/Los_Angeles", "week_start_day": 6})

        sk = Stridekit()

        assert sk.config["home_timezone"] == "America/Los_Angeles"
        assert sk.week_start_day == 6
        assert sk.config["providers"] == DEFAULT_CONFIG["providers"]

    def test_providers_get_shared_settings(self):
        sk = Stridekit(config=_config(home_timezone="Europe/Berlin", debug=False))

        assert isinstance(sk.export, ExportProvider)
        assert sk.export.category_filter == "Run"
        assert isinstance(sk.file, FileProvider)
        assert sk.file.home_timezone == "Europe/Berlin"
        assert sk.file is sk.file

    def test_provider_for(self, tmp_path):
        sk = Stridekit(config=_config())

        assert sk.provider_for(str(tmp_path)) is sk.file
        assert sk.provider_for("activities.CSV") is sk.export
        assert sk.provider_for("run.gpx") is sk.file
        assert sk.provider_for("run.gpx.gz") is sk.file
        with pytest.raises(ValueError):
            sk.provider_for("run.fit")

    def test_import_and_report(self, export_file, capsys):
        sk = Stridekit(config=_config())

        counts = sk.import_paths([export_file, SAMPLE_GPX])

        assert counts == {export_file: 2, SAMPLE_GPX: 1}
        assert "Saved 3 activities" in capsys.readouterr().out

        report = sk.report()
        assert [a.id for a in report.activities][:2] == ["1", "2"]
        assert len(report.weeks) == 3
        assert report.stats.total_activities == 3
        assert report.stats.total_km == pytest.approx(12.0 + report.activities[-1].distance_km)
        assert [m.year_month for m in report.months] == ["2024-01", "2024-03"]

    def test_reimport_does_not_duplicate(self, export_file):
        sk = Stridekit(config=_config())

        sk.import_paths([export_file])
        sk.import_paths([export_file])

        assert len(sk.activities()) == 2

    def test_import_continues_after_bad_path(self, export_file, tmp_path, capsys):
        sk = Stridekit(config=_config())
        missing = str(tmp_path / "missing.csv")
        unknown = str(tmp_path / "notes.txt")

        counts = sk.import_paths([missing, unknown, export_file])

        assert counts[missing] == -1
        assert counts[unknown] == -1
        assert counts[export_file] == 2
        assert "Error importing" in capsys.readouterr().out

    def test_report_range(self, export_file):
        sk = Stridekit(config=_config())
        sk.import_paths([export_file])

        report = sk.report(date(2024, 1, 2), date(2024, 1, 8))

        assert [a.id for a in report.activities] == ["2"]
        assert report.stats.max_week.week_start == datetime(2024, 1, 8)

    def test_reset(self, export_file):
        sk = Stridekit(config=_config())
        sk.import_paths([export_file])

        assert sk.reset() == 2
        assert sk.activities() == []

    def test_context_manager_closes_db(self):
        with Stridekit(config=_config()) as sk:
            assert sk.activities() == []

        assert get_db().is_closed()


def test_build_report_empty():
    report = build_report([])

    assert report.weeks == []
    assert report.months == []
    assert report.stats.total_km == 0.0
    assert report.stats.max_week is None


def test_nothing_saved_when_every_path_fails(tmp_path):
    sk = Stridekit(config=_config())

    with patch("stridekit.core.save_activities") as mock_save:
        counts = sk.import_paths([str(tmp_path / "missing.csv")])

    assert counts == {str(tmp_path / "missing.csv"): -1}
    mock_save.assert_not_called()


def test_bad_timezone_fails_only_the_track_import(export_file, capsys):
    sk = Stridekit(config=_config(home_timezone="Nope/Zone"))

    counts = sk.import_paths([SAMPLE_GPX, export_file])

    assert counts == {SAMPLE_GPX: -1, export_file: 2}
    assert "Unknown timezone" in capsys.readouterr().out


def test_build_report_filters_working_set():
    activities = [
        make_activity("1", datetime(2024, 1, 1, 7, 0), distance_km=5.0),
        make_activity("2", datetime(2024, 1, 8, 23, 30), distance_km=7.0),
        make_activity("3", datetime(2024, 1, 9, 7, 0), distance_km=9.0),
    ]

    report = build_report(activities, start=date(2024, 1, 2), end=date(2024, 1, 8))

    assert [a.id for a in report.activities] == ["2"]
    assert report.stats.total_km == 7.0
    assert [w.week_start for w in report.weeks] == [datetime(2024, 1, 8)]
