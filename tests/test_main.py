"""Tests for the process bootstrap (main.py)."""

from __future__ import annotations

import logging

import pytest

import main

_configure_logging = main.configure_logging


class _StubServer:
    def __init__(self, outcome: BaseException | None = None) -> None:
        self.outcome = outcome
        self.transports: list[str] = []

    def run(self, transport: str) -> None:
        self.transports.append(transport)
        if self.outcome is not None:
            raise self.outcome


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "configure_logging", lambda: None)


def test_startup_failure_exits_with_one(monkeypatch, caplog):
    def broken_server():
        raise RuntimeError("boom")

    monkeypatch.setattr(main, "build_server", broken_server)

    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1
    assert "Fatal error in main()" in caplog.text


def test_interrupt_returns_normally(monkeypatch):
    server = _StubServer(KeyboardInterrupt())
    monkeypatch.setattr(main, "build_server", lambda: server)

    main.main()

    assert server.transports == ["stdio"]


def test_clean_shutdown_returns_normally(monkeypatch):
    server = _StubServer()
    monkeypatch.setattr(main, "build_server", lambda: server)

    main.main()

    assert server.transports == ["stdio"]


def test_log_level_comes_from_environment(monkeypatch):
    calls = []
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setattr(main.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    _configure_logging()

    assert calls[0]["level"] == "DEBUG"
    assert calls[0]["stream"] is main.sys.stderr
