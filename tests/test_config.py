import os
import pytest
from gitget.core import env
from gitget.core.errors import ConfigError
from gitget.repo import config


def test_missing_file_gives_defaults(isolated_settings):
    settings = config.load()
    assert settings == config.Settings()
    assert settings.host == "github.com"


def test_save_then_load(isolated_settings):
    config.save(config.Settings(host="git.example.org", git="/opt/git", update_gitignore=False))
    assert isolated_settings.exists()
    loaded = config.load()
    assert loaded.host == "git.example.org"
    assert loaded.git == "/opt/git"
    assert loaded.update_gitignore is False


def test_env_overrides_file(isolated_settings, monkeypatch):
    isolated_settings.write_text('[gitget]\nhost = "from-file.example"\n')
    monkeypatch.setenv("GITGET_HOST", "from-env.example")
    assert config.load().host == "from-env.example"


def test_malformed_file_is_config_error(isolated_settings):
    isolated_settings.write_text("[gitget\nhost = ")
    with pytest.raises(ConfigError):
        config.load()


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    f = tmp_path / "gitget.env"
    monkeypatch.setenv("GITGET_ENV_FILE", str(f))
    monkeypatch.setattr(env, "_loaded", False)
    for var in ("GITGET_TEST_A", "GITGET_TEST_B", "GIT_DIR"):
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)
    return f


def test_user_env_file_does_not_override(env_file, monkeypatch):
    env_file.write_text(
        "# comment\nexport GITGET_TEST_A='alpha'\nGITGET_TEST_B=beta\nbroken line\n"
    )
    monkeypatch.setenv("GITGET_TEST_B", "kept")

    exported = env.load_user_env()

    assert exported == {"GITGET_TEST_A": "alpha"}
    assert os.environ["GITGET_TEST_A"] == "alpha"
    assert os.environ["GITGET_TEST_B"] == "kept"


def test_user_env_file_only_exports_gitget_keys(env_file, caplog):
    env_file.write_text("GIT_DIR=/tmp/elsewhere/.git\nGITGET_TEST_A=1\n")

    env.load_user_env()

    assert "GIT_DIR" not in os.environ
    assert os.environ["GITGET_TEST_A"] == "1"
    assert "Ignoring GIT_DIR" in caplog.text


def test_user_env_loaded_once(env_file):
    env_file.write_text("GITGET_TEST_A=1\n")
    assert env.load_user_env() == {"GITGET_TEST_A": "1"}
    assert env.load_user_env() == {}
