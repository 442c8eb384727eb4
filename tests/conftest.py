import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import yaml

# Ensure the repository's src directory is importable for package imports
_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


@pytest.fixture
def create_test_config():
    """Factory fixture to create temporary config files for testing."""

    def _create_config(
        tmp_path: Path,
        kernel: Optional[Dict[str, Any]] = None,
        gaussian: Optional[Dict[str, Any]] = None,
        logging: Optional[Dict[str, Any]] = None,
    ) -> Path:
        """Create a temporary config file; sections left as None are omitted."""
        config_data = {}
        if kernel is not None:
            config_data["kernel"] = kernel
        if gaussian is not None:
            config_data["gaussian"] = gaussian
        if logging is not None:
            config_data["logging"] = logging

        config_file = tmp_path / "test_config.yaml"
        config_file.write_text(yaml.dump(config_data))
        return config_file

    return _create_config
