"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from fstree.copy.types import CopyOptions
from fstree.infrastructure.config import (
    CP_MAX_WORKERS,
    MAX_WORKERS_KEY,
    parse_max_workers,
    read_env_file,
    resolve_max_workers,
)


class TestResolveMaxWorkers:
    def test_default_when_nothing_set(self, tmp_path):
        assert resolve_max_workers({}, tmp_path / ".env") == 100

    def test_env_file_used_when_environment_unset(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{MAX_WORKERS_KEY}=12\n")

        assert resolve_max_workers({}, env_file) == 12

    def test_environment_beats_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{MAX_WORKERS_KEY}=12\n")

        assert resolve_max_workers({MAX_WORKERS_KEY: "40"}, env_file) == 40

    def test_empty_environment_value_falls_through(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{MAX_WORKERS_KEY}='7'\n")

        assert resolve_max_workers({MAX_WORKERS_KEY: ""}, env_file) == 7

    def test_junk_in_env_file_uses_default(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"# cap\n{MAX_WORKERS_KEY}=plenty\n")

        assert resolve_max_workers({}, env_file) == 100

    def test_reads_cwd_env_file_by_default(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text(f'{MAX_WORKERS_KEY}="3"\n')
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(MAX_WORKERS_KEY, raising=False)

        assert resolve_max_workers() == 3


class TestReadEnvFile:
    def test_ignores_comments_and_other_keys(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"#{MAX_WORKERS_KEY}=1\nLOG_LEVEL=DEBUG\n{MAX_WORKERS_KEY} = 9\n")

        assert read_env_file([MAX_WORKERS_KEY], env_file) == {MAX_WORKERS_KEY: "9"}

    def test_blank_value_is_unset(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{MAX_WORKERS_KEY}=\n")

        assert read_env_file([MAX_WORKERS_KEY], env_file) == {}

    def test_missing_file_returns_empty(self, tmp_path):
        assert read_env_file([MAX_WORKERS_KEY], tmp_path / "absent.env") == {}


class TestParseMaxWorkers:
    def test_parses_integer(self):
        assert parse_max_workers("25") == 25

    def test_clamps_to_one(self):
        assert parse_max_workers("0") == 1
        assert parse_max_workers("-4") == 1

    def test_junk_falls_back(self):
        assert parse_max_workers("lots", default=9) == 9


class TestCopyOptions:
    def test_default_cap(self):
        assert CopyOptions().max_workers == CP_MAX_WORKERS

    def test_rejects_zero(self):
        with pytest.raises(ValidationError):
            CopyOptions(max_workers=0)
