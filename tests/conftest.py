# SPDX-License-Identifier: MIT
"""Shared test fixtures."""

import logging

import pytest

import sysinc


@pytest.fixture(autouse=True)
def _reset_build_vars(monkeypatch):
    """Run every test without build variables from the outer environment."""
    monkeypatch.delenv("SYSINC_VARS", raising=False)
    monkeypatch.delenv("SYSINC_RELATIVIZE", raising=False)
    monkeypatch.setattr(sysinc, "_cli_vars", None)
    yield
    # The CLI sets the package logger level
    logging.getLogger("sysinc").setLevel(logging.NOTSET)
