# tests/test_config.py
"""
Tests for config loading, merging and startup validation.
"""

import os
from pathlib import Path

import pytest

from dirvec.config import (
    CliOverrides,
    DirvecConfig,
    build_config,
    ensure_destination_writable,
    find_config_file,
    load_config,
    load_config_file,
    validate_config,
)
from dirvec.config.schema import DEFAULT_INDEX_PATH, DEFAULT_METADATA_PATH
from dirvec.exceptions import ConfigError, CredentialError, DestinationNotWritableError

VALID_KEY = "sk-" + "x" * 40


class TestDefaults:
    def test_empty_config_is_valid(self):
        config = DirvecConfig()

        assert config.embedding.plugin_name == "openai"
        assert config.top_k == 5
        assert config.force_rebuild is False
        assert config.scan.include == ["*"]
        assert config.storage.index_path_explicit is False

    def test_default_storage_paths(self, tmp_path):
        storage = DirvecConfig().storage

        assert storage.resolved_index_path(tmp_path) == (tmp_path / DEFAULT_INDEX_PATH).resolve()
        assert storage.resolved_metadata_path(tmp_path) == (tmp_path / DEFAULT_METADATA_PATH).resolve()

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            build_config({"embeddings": {}})

    def test_bad_log_level_rejected(self):
        with pytest.raises(ConfigError):
            build_config({"logging": {"level": "chatty"}})

    def test_log_level_uppercased(self):
        assert build_config({"logging": {"level": "debug"}}).logging.level == "DEBUG"

    def test_top_k_must_be_positive(self):
        with pytest.raises(ConfigError):
            build_config({"top_k": 0})


class TestPrecedence:
    def test_cli_overrides_file(self):
        file_config = {
            "force_rebuild": False,
            "embedding": {"api_key": "file-key", "model": "m"},
            "storage": {"index_path": "from-file"},
        }
        overrides = CliOverrides(force_rebuild=True, api_key="cli-key", index_path=Path("from-cli"))

        config = build_config(file_config, overrides)

        assert config.force_rebuild is True
        assert config.embedding.api_key == "cli-key"
        assert config.embedding.model == "m"
        assert config.storage.index_path == Path("from-cli")

    def test_unset_overrides_leave_file_values(self):
        config = build_config({"force_rebuild": True}, CliOverrides())

        assert config.force_rebuild is True

    def test_as_config_dict_skips_none(self):
        assert CliOverrides().as_config_dict() == {}
        assert CliOverrides(metadata_path=Path("m.json")).as_config_dict() == {
            "storage": {"metadata_path": "m.json"}
        }


class TestConfigFile:
    def test_found_in_root(self, tmp_path):
        (tmp_path / "dirvec.yaml").write_text("top_k: 3\n")

        assert find_config_file(tmp_path) == tmp_path / "dirvec.yaml"
        assert load_config(tmp_path).top_k == 3

    def test_absent_file_gives_defaults(self, tmp_path):
        assert find_config_file(tmp_path) is None
        assert load_config(tmp_path) == DirvecConfig()

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            find_config_file(tmp_path, Path("nope.yaml"))

    def test_env_vars_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DIRVEC_TEST_KEY", VALID_KEY)
        path = tmp_path / "dirvec.yaml"
        path.write_text("embedding:\n  api_key: ${DIRVEC_TEST_KEY}\n")

        assert load_config_file(path)["embedding"]["api_key"] == VALID_KEY

    def test_unset_placeholder_reads_as_missing(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        path = tmp_path / "dirvec.yaml"
        path.write_text("embedding:\n  api_key: ${OPENAI_API_KEY}\n")

        config = load_config(tmp_path, path)

        assert config.embedding.api_key is None
        with pytest.raises(CredentialError, match="required"):
            validate_config(config, tmp_path)

    def test_unset_placeholder_inside_text_is_empty(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DIRVEC_UNSET_DIR", raising=False)
        monkeypatch.setenv("DIRVEC_TEST_DIR", "state")
        path = tmp_path / "dirvec.yaml"
        path.write_text("scan:\n  ignore: [\"$DIRVEC_TEST_DIR-*\", \"x${DIRVEC_UNSET_DIR}y\"]\n")

        assert load_config_file(path)["scan"]["ignore"] == ["state-*", "xy"]

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "dirvec.yaml"
        path.write_text("top_k: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "dirvec.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)

    def test_empty_file_is_defaults(self, tmp_path):
        path = tmp_path / "dirvec.yaml"
        path.write_text("")

        assert load_config_file(path) == {}


class TestDestinationCheck:
    def test_existing_parent_ok(self, tmp_path):
        ensure_destination_writable(tmp_path / "idx")

    def test_missing_parent_rejected(self, tmp_path):
        with pytest.raises(DestinationNotWritableError, match="does not exist"):
            ensure_destination_writable(tmp_path / "missing" / "idx")

    def test_parent_is_file_rejected(self, tmp_path):
        (tmp_path / "file").write_text("x")

        with pytest.raises(DestinationNotWritableError, match="not a directory"):
            ensure_destination_writable(tmp_path / "file" / "idx")

    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root bypasses permissions")
    def test_read_only_parent_rejected(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            with pytest.raises(DestinationNotWritableError, match="not writable"):
                ensure_destination_writable(locked / "idx")
        finally:
            locked.chmod(0o700)

    def test_check_creates_nothing(self, tmp_path):
        ensure_destination_writable(tmp_path / "idx")

        assert list(tmp_path.iterdir()) == []


class TestValidateConfig:
    def test_missing_key_rejected(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(CredentialError):
            validate_config(DirvecConfig(), tmp_path)

    def test_env_key_accepted(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", VALID_KEY)

        validate_config(DirvecConfig(), tmp_path)

    def test_local_plugin_skips_credential(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        validate_config(build_config({"embedding": {"plugin_name": "local"}}), tmp_path)

    def test_default_index_path_not_checked(self, tmp_path):
        """The default location is created on persist, so it is never preflighted."""
        config = build_config({"embedding": {"plugin_name": "local"}})

        validate_config(config, tmp_path / "does-not-exist")

    def test_explicit_index_path_checked(self, tmp_path):
        config = build_config(
            {"embedding": {"plugin_name": "local"}, "storage": {"index_path": "missing/idx"}}
        )

        with pytest.raises(DestinationNotWritableError):
            validate_config(config, tmp_path)
