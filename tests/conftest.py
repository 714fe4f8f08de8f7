from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from pandora_tsdb.config import TsdbClientConfig  # noqa: E402


@pytest.fixture
def config() -> TsdbClientConfig:
    cfg = TsdbClientConfig(
        endpoint="https://tsdb.example.com",
        dial_timeout_seconds=5.0,
        response_timeout_seconds=10.0,
    )
    cfg.validate()
    return cfg
