"""CLI tests for the ttime-ratings commands."""

from __future__ import annotations

import textwrap

import yaml
from typer.testing import CliRunner

from ttime.cli.main import app
from ttime.exceptions import PluginLoadError, RatingConfigError

runner = CliRunner()


def _settings(tmp_path):
    return str(tmp_path / "settings.yml")


def test_list_shows_builtin_ratings(tmp_path):
    result = runner.invoke(app, ["list", "--settings", _settings(tmp_path)])
    assert result.exit_code == 0, result.output
    for key in ("NoGaps", "free_days", "EarlyMornings"):
        assert key in result.output


def test_set_weight_persists(tmp_path):
    result = runner.invoke(app, ["set-weight", "NoGaps", "2.5", "--settings", _settings(tmp_path)])
    assert result.exit_code == 0, result.output

    saved = yaml.safe_load((tmp_path / "settings.yml").read_text())
    assert saved["weight"]["NoGaps"] == 2.5


def test_disable_then_enable(tmp_path):
    runner.invoke(app, ["disable", "free_days", "--settings", _settings(tmp_path)])
    saved = yaml.safe_load((tmp_path / "settings.yml").read_text())
    assert saved["free_days"]["enabled"] is False

    runner.invoke(app, ["enable", "free_days", "--settings", _settings(tmp_path)])
    saved = yaml.safe_load((tmp_path / "settings.yml").read_text())
    assert saved["free_days"]["enabled"] is True


def test_unknown_rating_raises_config_error(tmp_path):
    result = runner.invoke(app, ["disable", "Nope", "--settings", _settings(tmp_path)])
    assert isinstance(result.exception, RatingConfigError)


def test_score_prints_total(tmp_path):
    schedule = tmp_path / "schedule.yml"
    schedule.write_text(
        textwrap.dedent(
            """
            - course: "104166"
              events:
                - {day: 1, start: 480, end: 570}
            """
        )
    )
    result = runner.invoke(app, ["score", str(schedule), "--settings", _settings(tmp_path)])
    assert result.exit_code == 0, result.output
    # free_days: Sun, Tue, Wed, Thu free = 4; early_mornings: -1; no gaps.
    assert "Total: 3.000" in result.output


def test_extra_plugin_dir_is_searched(tmp_path):
    plugins = tmp_path / "plugins"
    plugins.mkdir()
    (plugins / "broken.py").write_text("import not_a_real_module_xyz\n")

    result = runner.invoke(app, ["list", "--settings", _settings(tmp_path), "--plugin-dir", str(plugins)])

    assert isinstance(result.exception, PluginLoadError)
