"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import typer

from ttime.cli.commands.ratings import disable, enable, list_ratings, set_weight
from ttime.cli.commands.score import score
from ttime.exceptions import PluginLoadError, RatingConfigError, ScoringError, SettingsError
from ttime.utils.logging import configure_logging, get_logger

app = typer.Typer(help="ttime schedule rating tools")


app.command("list")(list_ratings)
app.command("set-weight")(set_weight)
app.command()(enable)
app.command()(disable)
app.command()(score)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        app()
    except RatingConfigError as exc:
        log.error(str(exc))
        raise SystemExit(1)
    except PluginLoadError as exc:
        log.error(f"Plugin load failed: {exc}")
        raise SystemExit(2)
    except ScoringError as exc:
        log.error(f"Scoring failed: {exc}")
        raise SystemExit(3)
    except SettingsError as exc:
        log.error(f"Settings error: {exc}")
        raise SystemExit(4)
    except KeyboardInterrupt:
        log.info("Interrupted")
        raise SystemExit(130)
    except Exception:
        log.exception("Unhandled exception")
        raise SystemExit(255)


if __name__ == "__main__":
    sys.exit(main())
