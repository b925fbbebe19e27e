from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.component_tree import ComponentTree


@pytest.fixture
def component_tree(tmp_path: Path) -> ComponentTree:
    """Provide a reusable component tree rooted at the pytest tmp_path."""
    return ComponentTree(tmp_path)
