import pytest

from route_docgen.config import RenderConfig, build_config, load_config
from route_docgen.errors import ConfigError


class TestLoadConfig:
    def test_json_file(self, tmp_path):
        f = tmp_path / "docs.json"
        f.write_text('{"title": "Shop API", "servers": [{"url": "https://api.shop.test"}]}')
        assert load_config(f) == {"title": "Shop API", "servers": [{"url": "https://api.shop.test"}]}

    def test_yaml_file(self, tmp_path):
        f = tmp_path / "docs.yaml"
        f.write_text("title: Shop API\nversion: '2.1.0'\n")
        assert load_config(f) == {"title": "Shop API", "version": "2.1.0"}

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.json") == {}
        assert load_config(None) == {}

    def test_empty_file(self, tmp_path):
        f = tmp_path / "docs.yaml"
        f.write_text("")
        assert load_config(f) == {}

    def test_non_mapping_rejected(self, tmp_path):
        f = tmp_path / "docs.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(f)

    def test_invalid_yaml_rejected(self, tmp_path):
        f = tmp_path / "docs.yaml"
        f.write_text("title: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(f)


class TestBuildConfig:
    def test_defaults(self):
        config = build_config({})
        assert config == RenderConfig()
        assert config.title == "API Documentation"
        assert config.version == "1.0.0"
        assert config.servers == []
        assert config.generated_at is None

    def test_overrides_win(self):
        config = build_config(
            {"title": "File", "version": "0.1.0", "servers": [{"url": "https://a", "description": "A"}]},
            title="Flag",
            server="https://b",
        )
        assert config.title == "Flag"
        assert config.version == "0.1.0"
        assert [s.url for s in config.servers] == ["https://b"]

    def test_file_servers_kept_without_override(self):
        config = build_config({"servers": [{"url": "https://a", "description": "A"}]})
        assert config.servers[0].description == "A"

    def test_invalid_values_rejected(self):
        with pytest.raises(ConfigError):
            build_config({"servers": "https://a"})
