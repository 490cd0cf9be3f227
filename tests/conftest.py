from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _skip_global_logging_config(monkeypatch) -> None:
    # CliRunner swaps sys.stderr per invocation; a root handler bound to one of
    # those streams would outlive it.
    monkeypatch.setattr("logging_config._configured", True)
