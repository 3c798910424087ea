"""
Global test fixtures.

Puts the api/ directory on sys.path and provides sample configuration
text and a temporary NGINX config directory.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "nginx_configs"


@pytest.fixture
def fixtures_dir():
    """Directory holding sample .conf files."""
    return FIXTURES_DIR


@pytest.fixture
def nested_config():
    """Small http/server/listen configuration."""
    return "http {\n  server {\n    listen 80;\n  }\n}\n"


@pytest.fixture
def tmp_conf_dir(tmp_path):
    """Temporary NGINX conf directory used as NGINX_CONF_DIR."""
    conf_dir = tmp_path / "nginx"
    conf_dir.mkdir()
    return conf_dir
