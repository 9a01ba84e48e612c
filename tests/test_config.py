"""Tests for rpnmath.yaml configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpnmath import COMPLEX, REAL, ConfigError, Formula, load_config, table_from_config
from rpnmath.config import DEFAULT_CONFIG, write_default_config


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_user_values_override(self, tmp_path: Path) -> None:
        (tmp_path / "rpnmath.yaml").write_text("domain: complex\nlogging_fsync: true\n")
        cfg = load_config(tmp_path)
        assert cfg["domain"] == "complex"
        assert cfg["logging_fsync"] is True
        assert cfg["logging_tail_bytes"] == DEFAULT_CONFIG["logging_tail_bytes"]

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "rpnmath.yaml").write_text("")
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "rpnmath.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "rpnmath.yaml").write_text("domain: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_written_template_loads_as_defaults(self, tmp_path: Path) -> None:
        path = write_default_config(tmp_path)
        assert path.exists()
        assert load_config(tmp_path) == DEFAULT_CONFIG


class TestTableFromConfig:
    def test_real_by_default(self) -> None:
        assert table_from_config(dict(DEFAULT_CONFIG)).domain is REAL

    def test_complex(self, tmp_path: Path) -> None:
        (tmp_path / "rpnmath.yaml").write_text("domain: complex\n")
        table = table_from_config(load_config(tmp_path))
        assert table.domain is COMPLEX
        assert Formula("i * i", table=table).evaluate() == -1

    def test_fresh_table_each_call(self) -> None:
        cfg = dict(DEFAULT_CONFIG)
        assert table_from_config(cfg) is not table_from_config(cfg)

    def test_unknown_domain(self) -> None:
        with pytest.raises(ConfigError, match="quaternion"):
            table_from_config({"domain": "quaternion"})
