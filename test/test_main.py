# mypy: allow-untyped-defs

import io

import pytest  # type: ignore

from leftrec.__main__ import main


def test_prints_value(capsys):
    main(["1 + 2 * 3"])
    assert capsys.readouterr().out == "7\n"


def test_quiet(capsys):
    main(["-q", "1 + 2"])
    assert capsys.readouterr().out == ""


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("(2 + 3) * 4\n"))
    main([])
    assert capsys.readouterr().out == "20\n"


def test_verbose(capsys):
    main(["-v", "--capacity", "128", "1 - 1"])
    out = capsys.readouterr().out
    assert out.startswith("0\n")
    assert "Total time:" in out
    assert "Guarded rules:" in out
    assert "leftrec.calc.expr" in out
    assert "... leftrec.calc.expr" not in out


def test_trace(capsys):
    main(["-vv", "1 - 1"])
    out = capsys.readouterr().out
    assert "leftrec.calc.expr ... (looking at '1 - 1')" in out
    assert "Recursive leftrec.calc.expr at 5 depth 2: 0" in out


def test_syntax_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["1 +* 2"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "SyntaxError: leftrec parse failure" in captured.err


def test_bad_capacity(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--capacity", "100", "1"])
    assert excinfo.value.code == 2
    assert "multiple of 64" in capsys.readouterr().err


def test_division_by_zero(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["1/0"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ZeroDivisionError: division by zero" in captured.err
