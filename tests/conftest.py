import os
import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local `src/` package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _clear_capstan_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Settings come from CAPSTAN_* env vars; tests opt in explicitly.
    for name in list(os.environ):
        if name.startswith("CAPSTAN_"):
            monkeypatch.delenv(name, raising=False)
