from __future__ import annotations

import runpy
from pathlib import Path

from sqlalchemy.exc import OperationalError

MODULE_GLOBALS = runpy.run_path(Path(__file__).resolve().parents[2] / "scripts" / "seed.py")
RUN = MODULE_GLOBALS["run"]
MAIN = MODULE_GLOBALS["main"]
PARSE_ARGS = MODULE_GLOBALS["parse_args"]


class DummyQuery:
    def __init__(self, first=None):
        self._first = first

    def first(self):
        return self._first


class DummySession:
    def __init__(self, existing_user=None, fail_on_seed=False, add_error=None) -> None:
        self.closed = False
        self.rolled_back = False
        self.committed = False
        self._existing_user = existing_user
        self._fail_on_seed = fail_on_seed
        self._add_error = add_error

    def query(self, _model):
        return DummyQuery(self._existing_user)

    def add(self, _row):
        if self._fail_on_seed:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        if self._add_error is not None:
            raise self._add_error

    def add_all(self, rows):
        for row in rows:
            self.add(row)

    def flush(self) -> None:
        pass

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True


def _patch(module_globals, **overrides):
    for key, value in overrides.items():
        module_globals[key] = value


def test_parse_args_defaults():
    args = PARSE_ARGS([])
    assert args.reset is False
    assert args.password == "password123"


def test_short_password_rejected(capsys):
    exit_code = MAIN(["--password", "abc"])
    assert exit_code == 1
    assert "at least 6 characters" in capsys.readouterr().err


def test_existing_data_without_reset_is_left_alone(capsys):
    session = DummySession(existing_user=object())
    _patch(RUN.__globals__, SessionLocal=lambda: session)

    exit_code = MAIN([])

    assert exit_code == 0
    assert session.closed is True
    assert session.committed is False
    assert "--reset" in capsys.readouterr().out


def test_database_error_rolls_back(capsys):
    session = DummySession(fail_on_seed=True)
    _patch(RUN.__globals__, SessionLocal=lambda: session)

    exit_code = MAIN([])

    assert exit_code == 1
    assert session.rolled_back is True
    assert session.closed is True
    assert "Error seeding database" in capsys.readouterr().err


def test_unexpected_error_rolls_back_and_exits_nonzero(capsys):
    session = DummySession(add_error=ValueError("bad seed row"))
    _patch(RUN.__globals__, SessionLocal=lambda: session)

    exit_code = MAIN([])

    assert exit_code == 1
    assert session.rolled_back is True
    assert session.closed is True
    assert session.committed is False
    assert "Error seeding database: bad seed row" in capsys.readouterr().err
