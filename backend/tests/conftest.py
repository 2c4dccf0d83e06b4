import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# main.py refuses to import without an explicit origin list
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")

from ancient_bowling.scoring import Match  # noqa: E402


@pytest.fixture
def started_match():
    """Factory for a started match with the given player names."""

    def _build(*names: str) -> Match:
        match = Match()
        for name in names or ("Ada", "Bo"):
            match.add_player(name)
        match.start()
        return match

    return _build

