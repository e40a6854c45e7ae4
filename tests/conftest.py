from pathlib import Path

import pytest

from hoconedit import ConfigEditor

CONFIGS_DIR = Path(__file__).parent / "resources" / "configs"


@pytest.fixture
def configs_dir() -> Path:
    return CONFIGS_DIR


@pytest.fixture
def editor() -> ConfigEditor:
    return ConfigEditor(config={"enable_logger": False})
