"""
Config system (config.py)

Tests ConfigLoader layering, value parsing and QuireConfig validation.
"""

import json
import logging

import pytest

from quire.config import LOG_FORMAT, ConfigLoader, QuireConfig, configure_logging
from quire.faults import ConfigInvalidFault, FaultDomain


PREFIX = "QTEST_"


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "a.yaml").write_text(
        "default_language: de\n"
        "environment: staging\n"
        "seo:\n"
        "  default_image: /a.png\n"
        "  site_name: Acme\n"
    )
    (tmp_path / "b.json").write_text(json.dumps({"seo": {"site_name": "Acme Shop"}}))
    (tmp_path / ".env").write_text("QTEST_ENVIRONMENT=production\nOTHER=ignored\n")
    return tmp_path


# ============================================================================
# Sources
# ============================================================================

class TestSources:

    def test_yaml_file(self, config_dir):
        loader = ConfigLoader.load(paths=[str(config_dir / "a.yaml")], env_prefix=PREFIX)
        assert loader.get("default_language") == "de"
        assert loader.get("seo.default_image") == "/a.png"

    def test_glob_merges_in_order(self, config_dir):
        loader = ConfigLoader.load(paths=[str(config_dir / "*.*")], env_prefix=PREFIX)
        assert loader.get("seo.site_name") == "Acme Shop"
        assert loader.get("seo.default_image") == "/a.png"

    def test_unknown_format_ignored(self, tmp_path):
        (tmp_path / "notes.txt").write_text("default_language: de")
        loader = ConfigLoader.load(paths=[str(tmp_path / "notes.txt")], env_prefix=PREFIX)
        assert loader.to_dict() == {}

    def test_empty_yaml(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")
        loader = ConfigLoader.load(paths=[str(tmp_path / "empty.yaml")], env_prefix=PREFIX)
        assert loader.to_dict() == {}

    def test_env_file_prefixed_keys_only(self, config_dir):
        loader = ConfigLoader.load(env_prefix=PREFIX, env_file=str(config_dir / ".env"))
        assert loader.to_dict() == {"environment": "production"}

    def test_missing_env_file(self, tmp_path):
        loader = ConfigLoader.load(env_prefix=PREFIX, env_file=str(tmp_path / "nope.env"))
        assert loader.to_dict() == {}

    def test_environment_nesting(self, monkeypatch):
        monkeypatch.setenv("QTEST_SEO__DEFAULT_IMAGE", "/b.png")
        loader = ConfigLoader.load(env_prefix=PREFIX)
        assert loader.get("seo") == {"default_image": "/b.png"}

    def test_default_prefix(self, monkeypatch):
        monkeypatch.setenv("QUIRE_VIEWS_PATH", "templates")
        loader = ConfigLoader.load()
        assert loader.get("views_path") == "templates"

    def test_precedence(self, config_dir, monkeypatch):
        paths = [str(config_dir / "a.yaml")]
        env_file = str(config_dir / ".env")

        loader = ConfigLoader.load(paths=paths, env_prefix=PREFIX, env_file=env_file)
        assert loader.get("environment") == "production"

        monkeypatch.setenv("QTEST_ENVIRONMENT", "testing")
        loader = ConfigLoader.load(paths=paths, env_prefix=PREFIX, env_file=env_file)
        assert loader.get("environment") == "testing"

        loader = ConfigLoader.load(
            paths=paths,
            env_prefix=PREFIX,
            env_file=env_file,
            overrides={"environment": "override"},
        )
        assert loader.get("environment") == "override"

    def test_overrides_merge_deeply(self, config_dir):
        loader = ConfigLoader.load(
            paths=[str(config_dir / "a.yaml")],
            env_prefix=PREFIX,
            overrides={"seo": {"site_name": "Other"}},
        )
        assert loader.get("seo") == {"default_image": "/a.png", "site_name": "Other"}


# ============================================================================
# Values
# ============================================================================

class TestValues:

    @pytest.mark.parametrize("raw, parsed", [
        ("true", True),
        ("no", False),
        ("3", 3),
        ("1.5", 1.5),
        ('{"a": 1}', {"a": 1}),
        ("[1, 2]", [1, 2]),
        ("{broken", "{broken"),
        ("text", "text"),
    ])
    def test_parse_value(self, raw, parsed):
        assert ConfigLoader()._parse_value(raw) == parsed

    def test_get_default(self):
        loader = ConfigLoader.load(env_prefix=PREFIX, overrides={"a": {"b": 1}})
        assert loader.get("a.b") == 1
        assert loader.get("a.c", "fallback") == "fallback"
        assert loader.get("a.b.c") is None

    def test_to_dict_is_copy(self):
        loader = ConfigLoader.load(env_prefix=PREFIX, overrides={"a": 1})
        loader.to_dict()["a"] = 2
        assert loader.get("a") == 1


# ============================================================================
# QuireConfig
# ============================================================================

class TestQuireConfig:

    def test_defaults(self):
        config = ConfigLoader.load(env_prefix=PREFIX).quire_config()
        assert config == QuireConfig()
        assert config.default_language == "en"
        assert config.views_path == "views"
        assert config.autoescape is True

    def test_values_applied(self, config_dir):
        config = ConfigLoader.load(
            paths=[str(config_dir / "a.yaml")],
            env_prefix=PREFIX,
            overrides={"autoescape": False},
        ).quire_config()
        assert config.default_language == "de"
        assert config.environment == "staging"
        assert config.autoescape is False

    def test_invalid_type(self):
        loader = ConfigLoader.load(env_prefix=PREFIX, overrides={"views_path": 42})
        with pytest.raises(ConfigInvalidFault) as exc_info:
            loader.quire_config()
        fault = exc_info.value
        assert fault.code == "CONFIG_INVALID"
        assert fault.domain == FaultDomain.CONFIG
        assert fault.metadata == {"key": "views_path", "reason": "expected str, got int"}


# ============================================================================
# Logging
# ============================================================================

class TestLogging:

    def test_configure_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging("debug")
        assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        configure_logging("chatty")
        assert calls[0]["level"] == logging.INFO
