import pytest

from lowfi.config import config_dir, data_dir, env


def test_env_true_only_for_one(monkeypatch):
    monkeypatch.setenv("LOWFI_DISABLE_UI", "1")
    assert env("LOWFI_DISABLE_UI") is True


@pytest.mark.parametrize("value", ["0", "true", "", "11"])
def test_env_false_for_other_values(monkeypatch, value):
    monkeypatch.setenv("LOWFI_DISABLE_UI", value)
    assert env("LOWFI_DISABLE_UI") is False


def test_env_false_when_unset(monkeypatch):
    monkeypatch.delenv("LOWFI_DISABLE_UI", raising=False)
    assert env("LOWFI_DISABLE_UI") is False


def test_data_dir_is_named_after_app():
    path = data_dir()
    assert path.name == "lowfi"
    assert path.is_absolute()


def test_config_dir_is_named_after_app():
    path = config_dir()
    assert path.name == "lowfi"
    assert path.is_absolute()