"""Unit tests for CLI error printing."""

from __future__ import annotations

from medviz import _console


def test_print_error_escapes_markup(capsys):
    _console.print_error("bad value [red]x[/red]")
    err = capsys.readouterr().err
    assert "Error: bad value [red]x[/red]" in err


def test_print_traceback_shows_exception(capsys):
    try:
        raise KeyError("[bold]missing[/bold]")
    except KeyError:
        _console.print_traceback()
    err = capsys.readouterr().err
    assert "Traceback" in err
    assert "[bold]missing[/bold]" in err
