from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from wxproduct.config.loader import ConfigLocator, ConfigRepository
from wxproduct.config.models import GlobalConfig


def test_config_locator_uses_env_and_creates_directories(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("WXPRODUCT_HOME", str(tmp_path))
    locator = ConfigLocator()
    assert locator.project_root == tmp_path.resolve()
    assert locator.data_dir == (tmp_path / "data").resolve()
    assert locator.logs_dir == (tmp_path / "logs").resolve()
    assert locator.global_config_path() == locator.data_dir / "global_config.yaml"
    for path in (locator.data_dir, locator.logs_dir):
        assert path.exists()


def test_config_repository_creates_default_config(temp_config_repository: ConfigRepository) -> None:
    config = temp_config_repository.load_global_config()
    assert config == GlobalConfig()
    assert temp_config_repository.locator.global_config_path().exists()


def test_config_repository_global_roundtrip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WXPRODUCT_HOME", raising=False)
    repo = ConfigRepository(ConfigLocator(project_root=tmp_path))
    config = GlobalConfig(age_ceiling=12, fetch_retries=2, sources=["https://example.com/KOKX.TXT"])
    repo.save_global_config(config)

    fresh = ConfigRepository(ConfigLocator(project_root=tmp_path))
    loaded = fresh.load_global_config()
    assert loaded == config
    stored = yaml.safe_load(repo.locator.global_config_path().read_text(encoding="utf-8"))
    assert stored["age_ceiling"] == 12
    assert "user_agent" not in stored


def test_load_file_accepts_json(tmp_path: Path, temp_config_repository: ConfigRepository) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"age_ceiling": 6, "user_agent": "probe"}), encoding="utf-8")
    config = temp_config_repository.load_file(path)
    assert config.age_ceiling == 6
    assert config.user_agent == "probe"


def test_load_file_errors(tmp_path: Path, temp_config_repository: ConfigRepository) -> None:
    with pytest.raises(FileNotFoundError):
        temp_config_repository.load_file(tmp_path / "missing.yaml")
    with pytest.raises(ValueError):
        temp_config_repository.load_file(tmp_path / "config.ini")
    not_a_mapping = tmp_path / "list.yaml"
    not_a_mapping.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        temp_config_repository.load_file(not_a_mapping)
