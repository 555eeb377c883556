import sys
import os

import pytest

# Add src/ to sys.path so absolute imports (hostsdoc.*) work without installing.
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_project_root, "src"))
sys.path.insert(0, _project_root)


@pytest.fixture()
def write_hosts(tmp_path):
    """Return a helper that writes *content* to a hosts file under tmp_path."""
    def _write(content: str, name: str = "hosts") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return str(path)
    return _write
