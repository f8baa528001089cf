import pytest
from pointy_studio.conf import ConfigLoader, ENV_CONFIG, ENV_CONFIG_DIR


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    monkeypatch.setenv(ENV_CONFIG_DIR, str(tmp_path / "empty"))


def test_package_defaults_are_loaded():
    conf = ConfigLoader()
    assert conf.get("STORAGE_KEY") == "pipeline-state"
    assert conf.LAYOUT_MAX_X == 700
    assert conf.layout_row_spacing == 150
    assert "PIPELINE_STORE_CONFIG" in conf


def test_explicit_file_overrides_defaults(tmp_path):
    settings = tmp_path / "custom.py"
    settings.write_text("storage_key = 'custom-state'\nLAYOUT_MAX_X = 900\n")

    conf = ConfigLoader(config_file=str(settings))
    assert conf.STORAGE_KEY == "custom-state"
    assert conf.LAYOUT_MAX_X == 900
    assert conf.LAYOUT_ORIGIN_X == 100


def test_settings_file_in_config_dir(tmp_path, monkeypatch):
    config_dir = tmp_path / "project"
    config_dir.mkdir()
    (config_dir / "settings.py").write_text("DEFAULT_EVENT_NAME = 'step'\n")
    monkeypatch.setenv(ENV_CONFIG_DIR, str(config_dir))

    assert ConfigLoader().DEFAULT_EVENT_NAME == "step"


def test_env_config_file(tmp_path, monkeypatch):
    settings = tmp_path / "env_settings.py"
    settings.write_text("LAYOUT_ROW_SPACING = 10\n")
    monkeypatch.setenv(ENV_CONFIG, str(settings))

    assert ConfigLoader().LAYOUT_ROW_SPACING == 10


def test_callables_are_not_settings(tmp_path):
    settings = tmp_path / "custom.py"
    settings.write_text("def helper():\n    pass\n")
    conf = ConfigLoader(config_file=str(settings))
    assert "HELPER" not in conf


def test_missing_file_is_skipped(tmp_path):
    conf = ConfigLoader(config_file=str(tmp_path / "nope.py"))
    assert conf.STORAGE_KEY == "pipeline-state"


def test_get_default_and_environment(monkeypatch):
    conf = ConfigLoader()
    assert conf.get("NOT_A_SETTING", default=3) == 3

    monkeypatch.setenv("FROM_ENVIRONMENT", "yes")
    assert conf.get("FROM_ENVIRONMENT") == "yes"

    with pytest.raises(AttributeError):
        conf.get("NOT_A_SETTING")
    with pytest.raises(AttributeError):
        conf.not_a_setting


def test_lazily_loaded_config_is_shared():
    assert (
        ConfigLoader.get_lazily_loaded_config()
        is ConfigLoader.get_lazily_loaded_config()
    )
