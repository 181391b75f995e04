import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'nextlayer'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def _isolate_nextlayer_env(monkeypatch):
    """Developer shells must not leak NEXTLAYER_* settings into tests."""
    for key in list(os.environ):
        if key.startswith("NEXTLAYER_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def layered_roots(tmp_path: Path) -> List[str]:
    """Three empty layers, highest priority first: [c, b, a]."""
    roots = []
    for name in ("c", "b", "a"):
        root = tmp_path / "templates" / name
        root.mkdir(parents=True)
        roots.append(str(root))
    return roots


@pytest.fixture
def write_layer_file() -> Callable[..., Path]:
    """Write ``relative`` under ``root`` (creating parents) and return the path."""

    def _write(root: str, relative: str, content: str = "") -> Path:
        path = Path(root) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
