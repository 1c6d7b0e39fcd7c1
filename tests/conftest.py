from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def posts_transport():
    from tests.shared.client_fakes import PagedPostsTransport

    return PagedPostsTransport(total=18)


@pytest.fixture
def client_config():
    from tests.shared.transport import build_config

    return build_config()
