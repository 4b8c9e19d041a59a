"""Configuration tests."""

import io
import json
import logging
import os

import pytest
import yaml
from httpbuilder.http.request import Request, ResponseRecorder
from httpbuilder.middleware.base import from_func
from httpbuilder.middleware.cors import CorsConfig, cors
from httpbuilder.utils.config import (
    chain,
    from_dict,
    from_env,
    from_file,
    from_json,
    from_yaml,
    load_cors_config,
)

DOCUMENT = {
    "allowOrigins": ["my-site.com", "localhost"],
    "allowMethods": ["GET", "POST"],
    "allowHeaders": ["Accept", "Upgrade"],
    "allowCredentials": ["false"],
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove CORS variables from the environment."""
    for key in list(os.environ):
        if key.startswith("HTTPBUILDER_CORS_"):
            monkeypatch.delenv(key)


def apply(callback):
    config = CorsConfig()
    callback(config)
    return config


class TestDocuments:
    """Test document decoding."""

    def test_from_dict(self):
        """Test decoded mapping."""
        assert apply(from_dict(DOCUMENT)).to_dict() == DOCUMENT

    def test_from_json(self):
        """Test JSON string and stream."""
        assert apply(from_json(json.dumps(DOCUMENT))).to_dict() == DOCUMENT
        assert apply(from_json(io.StringIO(json.dumps(DOCUMENT)))).to_dict() == DOCUMENT

    def test_from_yaml(self):
        """Test YAML document."""
        document = (
            "allowOrigins: [my-site.com, localhost]\n"
            "allowMethods:\n"
            "  - GET\n"
            "  - POST\n"
        )
        config = apply(from_yaml(document))
        assert config.allow_origins.to_header() == "my-site.com, localhost"
        assert config.allow_methods.to_header() == "GET, POST"
        assert config.allow_headers.to_header() == "*"

    def test_yaml_scalars_stay_strings(self):
        """Test unquoted booleans and numbers decode as strings."""
        config = apply(from_yaml(
            "allowCredentials: [true]\n"
            "allowOrigins: [localhost, 8080]\n"
        ))
        assert config.allow_credentials.to_header() == "true"
        assert config.allow_origins.to_header() == "localhost, 8080"

    def test_yaml_null_clears_field(self):
        """Test null and empty YAML fields decode to empty lists."""
        config = apply(from_yaml("allowHeaders: null\nallowMethods:\n"))
        assert config.allow_headers.to_header() == ""
        assert config.allow_methods.to_header() == ""
        assert config.allow_origins.to_header() == "*"

    def test_empty_yaml_keeps_defaults(self):
        """Test empty YAML document."""
        assert apply(from_yaml("")).to_dict() == CorsConfig().to_dict()

    def test_malformed_json(self):
        """Test malformed JSON raises at decode time."""
        with pytest.raises(json.JSONDecodeError):
            from_json('{"allowOrigins": [')

    def test_malformed_yaml(self):
        """Test malformed YAML raises at decode time."""
        with pytest.raises(yaml.YAMLError):
            from_yaml("allowOrigins: [a, b")

    def test_wrong_shape(self):
        """Test wrongly shaped documents raise TypeError."""
        with pytest.raises(TypeError):
            from_json('["allowOrigins"]')
        with pytest.raises(TypeError):
            from_json('{"allowMethods": "GET"}')

    def test_with_cors(self):
        """Test decoded config drives the middleware."""
        w = ResponseRecorder()
        handler = (
            from_func(lambda w, r: None)
            .with_middleware(cors(from_json(json.dumps(DOCUMENT))))
            .build()
        )
        handler(w, Request(method="GET", path="/"))

        assert w.headers.get("Access-Control-Allow-Origin") == "my-site.com, localhost"
        assert w.headers.get("Access-Control-Allow-Headers") == "Accept, Upgrade"
        assert w.headers.get("Access-Control-Allow-Methods") == "GET, POST"
        assert w.headers.get("Access-Control-Allow-Credentials") == "false"


class TestFiles:
    """Test file loading."""

    def test_json_file(self, tmp_path):
        """Test JSON file."""
        path = tmp_path / "cors.json"
        path.write_text(json.dumps(DOCUMENT))
        assert apply(from_file(path)).to_dict() == DOCUMENT

    def test_yaml_file(self, tmp_path):
        """Test YAML file."""
        path = tmp_path / "cors.yml"
        path.write_text(yaml.safe_dump(DOCUMENT))
        assert apply(from_file(str(path))).to_dict() == DOCUMENT

    def test_unknown_extension(self, tmp_path):
        """Test unsupported file format."""
        path = tmp_path / "cors.ini"
        path.write_text("")
        with pytest.raises(ValueError):
            from_file(path)

    def test_missing_file(self, tmp_path):
        """Test missing file."""
        with pytest.raises(OSError):
            from_file(tmp_path / "missing.json")


class TestEnv:
    """Test environment loading."""

    def test_from_env(self, monkeypatch):
        """Test comma separated values."""
        monkeypatch.setenv("HTTPBUILDER_CORS_ALLOW_METHODS", "GET, POST,PUT")
        monkeypatch.setenv("HTTPBUILDER_CORS_ALLOW_CREDENTIALS", "")
        monkeypatch.setenv("HTTPBUILDER_CORS_UNKNOWN", "x")

        config = apply(from_env())

        assert config.allow_methods == ["GET", "POST", "PUT"]
        assert config.allow_credentials.to_header() == ""
        assert config.allow_origins == ["*"]

    def test_custom_prefix(self, monkeypatch):
        """Test custom prefix."""
        monkeypatch.setenv("APP_ALLOW_ORIGINS", "example.com")
        assert apply(from_env("APP_")).allow_origins == ["example.com"]


class TestLoadCorsConfig:
    """Test layered loading."""

    def test_defaults(self):
        """Test no sources."""
        assert load_cors_config().to_dict() == CorsConfig().to_dict()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment has priority over file."""
        path = tmp_path / "cors.json"
        path.write_text(json.dumps(DOCUMENT))
        monkeypatch.setenv("HTTPBUILDER_CORS_ALLOW_METHODS", "DELETE")

        config = load_cors_config(str(path))

        assert config.allow_methods == ["DELETE"]
        assert config.allow_origins == ["my-site.com", "localhost"]

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test missing file is skipped."""
        config = load_cors_config(tmp_path / "missing.yaml")
        assert config.to_dict() == CorsConfig().to_dict()

    def test_unknown_format_warns(self, tmp_path, caplog):
        """Test unknown format is logged and skipped."""
        path = tmp_path / "cors.toml"
        path.write_text("allowOrigins = ['x']")

        with caplog.at_level(logging.WARNING, logger="httpbuilder.utils.config"):
            config = load_cors_config(path)

        assert config.allow_origins == ["*"]
        assert "Unknown config format" in caplog.text


class TestChain:
    """Test callback chaining."""

    def test_applied_in_order(self):
        """Test later callbacks win."""
        callback = chain(
            from_dict({"allowMethods": ["GET"]}),
            None,
            from_dict({"allowMethods": ["POST"], "allowOrigins": ["a.com"]}),
        )
        config = apply(callback)

        assert config.allow_methods == ["POST"]
        assert config.allow_origins == ["a.com"]
