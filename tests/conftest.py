from __future__ import annotations

from collections import Counter
from typing import List

import pytest

from ember.environment import Environment
from ember.runtime import make_global_env
from ember.utils import DEBUG_PY_TRACE_ENV


@pytest.fixture
def global_env() -> Environment:
    """A fresh root scope with the default constants and natives."""
    return make_global_env()


@pytest.fixture(autouse=True)
def _no_py_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    # REPL tests flip the traceback toggle through os.environ
    monkeypatch.delenv(DEBUG_PY_TRACE_ENV, raising=False)


def pytest_collection_modifyitems(items: List[pytest.Item]) -> None:
    """Refuse to run when two case tables produce the same test id."""
    counts = Counter(item.nodeid for item in items)
    clashes = sorted(nodeid for nodeid, seen in counts.items() if seen > 1)

    if clashes:
        listing = "\n".join(f"- {nodeid}" for nodeid in clashes)
        raise pytest.UsageError(f"Duplicate test ids in Ember suite:\n{listing}")
