import logging

import pytest

from blur_experiments.config import Config, configure_logging
from blur_experiments.exceptions import ConfigurationError
from blur_experiments.kernel import KernelFloat, KernelInt


def test_packaged_defaults():
    config = Config()

    assert config.kernel_size == 3
    assert config.sigma == 1.0
    assert config.max_size is None
    assert config.log_level == "WARNING"
    assert config.path.name == "config.yaml"


def test_config_overrides(tmp_path, create_test_config):
    # Arrange
    config_file = create_test_config(
        tmp_path,
        kernel={"size": 5},
        gaussian={"sigma": 0.8, "max_size": [9, 11]},
        logging={"level": "debug"},
    )

    # Act
    config = Config(path=config_file, verbose=True)

    # Assert
    assert config.verbose is True
    assert config.kernel_size == 5
    assert config.sigma == 0.8
    assert config.max_size == (9, 11)
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("size", [4, 0, -3, "three"])
def test_config_rejects_invalid_kernel_size(tmp_path, create_test_config, size):
    config = Config(create_test_config(tmp_path, kernel={"size": size}))
    with pytest.raises(ConfigurationError):
        config.kernel_size


def test_config_rejects_invalid_max_size(tmp_path, create_test_config):
    config = Config(create_test_config(tmp_path, gaussian={"max_size": [3]}))
    with pytest.raises(ConfigurationError):
        config.max_size


def test_config_rejects_invalid_log_level(tmp_path, create_test_config):
    config = Config(create_test_config(tmp_path, logging={"level": "LOUD"}))
    with pytest.raises(ConfigurationError):
        config.log_level


def test_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        Config(tmp_path / "missing.yaml")


def test_config_requires_mapping(tmp_path):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        Config(config_file)


def test_config_missing_sections_fall_back_to_defaults(tmp_path, create_test_config, caplog):
    caplog.set_level(logging.WARNING, logger="blur_experiments")
    config = Config(create_test_config(tmp_path))

    assert config.kernel_size == Config.DEFAULT_SIZE
    assert config.sigma == Config.DEFAULT_SIGMA
    assert config.log_level == Config.DEFAULT_LOG_LEVEL
    assert "'kernel' section not found" in caplog.text


def test_square_kernel_from_config(tmp_path, create_test_config):
    config = Config(create_test_config(tmp_path, kernel={"size": 5}))

    ki = config.square_kernel("int")
    kf = config.square_kernel()

    assert isinstance(ki, KernelInt) and ki.shape == (5, 5)
    assert isinstance(kf, KernelFloat) and kf.center == (2, 2)
    with pytest.raises(ConfigurationError):
        config.square_kernel("double")


def test_clone_with_does_not_touch_original():
    config = Config()
    clone = config.clone_with(kernel_size=7, sigma=2.5)

    assert clone.kernel_size == 7
    assert clone.sigma == 2.5
    assert config.kernel_size == 3
    assert config.sigma == 1.0


@pytest.fixture
def restore_package_level():
    pkg_logger = logging.getLogger("blur_experiments")
    level = pkg_logger.level
    yield
    pkg_logger.setLevel(level)


def test_configure_logging(restore_package_level):
    pkg_logger = configure_logging(Config().clone_with(log_level="ERROR"))
    assert pkg_logger.name == "blur_experiments"
    assert pkg_logger.level == logging.ERROR

    verbose_cfg = Config(verbose=True)
    assert configure_logging(verbose_cfg).level == logging.DEBUG


def test_clone_with_fills_empty_sections(tmp_path):
    config_file = tmp_path / "empty_sections.yaml"
    config_file.write_text("kernel:\ngaussian:\n  sigma: 1.0\n")

    clone = Config(config_file).clone_with(kernel_size=5, log_level="INFO")

    assert clone.kernel_size == 5
    assert clone.log_level == "INFO"
    assert clone.sigma == 1.0


def test_clone_with_rejects_non_mapping_section(tmp_path, create_test_config):
    config = Config(create_test_config(tmp_path, kernel=[3]))
    with pytest.raises(ConfigurationError):
        config.clone_with(kernel_size=5)


def test_missing_section_warning_is_logged_once(tmp_path, create_test_config, caplog):
    caplog.set_level(logging.WARNING, logger="blur_experiments")
    config = Config(create_test_config(tmp_path, gaussian={"sigma": 2.0}, logging={"level": "INFO"}))

    config.kernel_size
    config.square_kernel("int")
    config.kernel_size

    warnings = [r for r in caplog.records if "'kernel' section not found" in r.getMessage()]
    assert len(warnings) == 1
