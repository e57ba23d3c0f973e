import json

import pytest
from pydantic import ValidationError

from alioss.config import AliOssSettings, load_settings
from alioss.exceptions import ConfigurationError


class TestAliOssSettings:
    """测试配置模型"""

    def test_endpoint_properties(self):
        settings = AliOssSettings(endpoint="oss-cn.aliyuncs.com", access_id="id", access_key="secret")
        assert settings.endpoint_url == "https://oss-cn.aliyuncs.com"
        assert settings.endpoint_host == "oss-cn.aliyuncs.com"

    def test_endpoint_with_scheme_kept(self):
        settings = AliOssSettings(endpoint="http://oss-cn.aliyuncs.com/", access_id="id", access_key="secret")
        assert settings.endpoint_url == "http://oss-cn.aliyuncs.com/"
        assert settings.endpoint_host == "oss-cn.aliyuncs.com"

    def test_defaults(self):
        settings = AliOssSettings(endpoint="e", access_id="id", access_key="secret")
        assert settings.domain == ""
        assert settings.expire_seconds == 3600
        assert settings.connect_timeout is None

    def test_domain_scheme_stripped(self):
        settings = AliOssSettings(endpoint="e", access_id="id", access_key="secret", domain="https://cdn.example.com/")
        assert settings.domain == "cdn.example.com"

    def test_secret_hidden(self):
        settings = AliOssSettings(endpoint="e", access_id="id", access_key="super-secret")
        assert "super-secret" not in repr(settings)
        assert settings.access_key.get_secret_value() == "super-secret"

    def test_frozen(self):
        settings = AliOssSettings(endpoint="e", access_id="id", access_key="secret")
        with pytest.raises(ValidationError):
            settings.expire_seconds = 10

    @pytest.mark.parametrize(
        "values",
        [
            {"endpoint": "", "access_id": "id", "access_key": "secret"},
            {"endpoint": "e", "access_id": "  ", "access_key": "secret"},
            {"endpoint": "e", "access_id": "id", "access_key": ""},
            {"endpoint": "e", "access_id": "id", "access_key": "secret", "expire_seconds": 0},
            {"access_id": "id", "access_key": "secret"},
        ],
    )
    def test_invalid_values(self, values):
        with pytest.raises(ValidationError):
            AliOssSettings(**values)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ALIOSS_ENDPOINT", "oss-cn-env.aliyuncs.com")
        monkeypatch.setenv("ALIOSS_ACCESS_ID", "env-id")
        monkeypatch.setenv("ALIOSS_ACCESS_KEY", "env-secret")
        monkeypatch.setenv("ALIOSS_EXPIRE_SECONDS", "90")

        settings = AliOssSettings()
        assert settings.endpoint == "oss-cn-env.aliyuncs.com"
        assert settings.access_id == "env-id"
        assert settings.expire_seconds == 90


class TestLoadSettings:
    """测试配置加载"""

    def test_yaml_trellis_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "trellis:\n"
            "  alioss:\n"
            "    domain: cdn.example.com\n"
            "    end_point: oss-cn-hangzhou.aliyuncs.com\n"
            "    access_id: id\n"
            "    access_key: secret\n"
            "    expire_seconds: 300\n"
            "other:\n"
            "  key: value\n",
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.endpoint == "oss-cn-hangzhou.aliyuncs.com"
        assert settings.domain == "cdn.example.com"
        assert settings.expire_seconds == 300

    def test_json_alioss_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"alioss": {"endpoint": "e", "access_id": "id", "access_key": "secret"}}),
            encoding="utf-8",
        )
        assert load_settings(path).endpoint == "e"

    def test_toml_flat(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('endpoint = "e"\naccess_id = "id"\naccess_key = "secret"\nexpire_seconds = 5\n', encoding="utf-8")
        assert load_settings(path).expire_seconds == 5

    def test_env_fills_missing_fields(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ALIOSS_ACCESS_KEY", "env-secret")
        path = tmp_path / "config.yaml"
        path.write_text("alioss:\n  endpoint: e\n  access_id: id\n", encoding="utf-8")

        settings = load_settings(path)
        assert settings.access_key.get_secret_value() == "env-secret"

    def test_file_wins_over_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ALIOSS_ENDPOINT", "env-endpoint")
        path = tmp_path / "config.yaml"
        path.write_text("end_point: file-endpoint\naccess_id: id\naccess_key: secret\n", encoding="utf-8")

        assert load_settings(path).endpoint == "file-endpoint"

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("endpoint: e\naccess_id: id\naccess_key: secret\n", encoding="utf-8")
        assert load_settings(path, expire_seconds=42).expire_seconds == 42

    def test_env_only(self, monkeypatch):
        monkeypatch.setenv("ALIOSS_ENDPOINT", "e")
        monkeypatch.setenv("ALIOSS_ACCESS_ID", "id")
        monkeypatch.setenv("ALIOSS_ACCESS_KEY", "secret")
        assert load_settings().endpoint == "e"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(tmp_path / "nope.yaml")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.xml"
        path.write_text("<x/>", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_invalid_fields(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("endpoint: e\naccess_id: id\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_unreadable_path_wrapped(self, tmp_path):
        """目录等无法读取的路径同样报 ConfigurationError"""
        path = tmp_path / "config.yaml"
        path.mkdir()
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)
        assert isinstance(exc_info.value.__cause__, OSError)
