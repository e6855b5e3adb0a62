"""Tests for core infrastructure modules."""

import asyncio
import json
import logging
import pytest
from pydantic import ValidationError

from secretsjack.aws.utils import (
    convert_filters,
    convert_tags,
    drop_none,
    encode_secret_value,
    parse_secret_value,
)
from secretsjack.base.async_support import async_wrap, AsyncMixin
from secretsjack.base.config import AWSCredentials, SecretsManagerConfig, validate_config
from secretsjack.base.exceptions import SecretsManagerError, SecretNotFoundError
from secretsjack.base.logger import SecretsjackLogger, StructuredFormatter


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestSecretsManagerConfig:
    def test_explicit_values(self):
        cfg = SecretsManagerConfig(
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
            region_name="us-west-2",
        )
        assert cfg.aws_access_key_id == "AKIA"
        assert cfg.region_name == "us-west-2"

    def test_region_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
        assert SecretsManagerConfig().region_name == "eu-west-1"

    def test_default_region_env_fallback(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
        assert SecretsManagerConfig().region_name == "eu-central-1"

    def test_default_region(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
        assert SecretsManagerConfig().region_name == "us-east-1"

    def test_explicit_region_beats_env(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        assert SecretsManagerConfig(region="sa-east-1").region_name == "sa-east-1"

    def test_key_env_left_to_boto3(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        cfg = SecretsManagerConfig(region_name="us-east-1")
        assert cfg.aws_access_key_id is None
        assert cfg.client_kwargs() == {"region_name": "us-east-1"}

    def test_half_pair_is_ignored(self):
        cfg = SecretsManagerConfig(
            region_name="us-east-1",
            aws_access_key_id="only_key",
            credentials=AWSCredentials(access_key_id="k", secret_access_key="s"),
        )
        assert cfg.client_kwargs() == {
            "region_name": "us-east-1",
            "aws_access_key_id": "k",
            "aws_secret_access_key": "s",
        }

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            SecretsManagerConfig(project_id="nope")

    def test_frozen(self):
        cfg = SecretsManagerConfig(region_name="us-east-1")
        with pytest.raises(ValidationError):
            cfg.region_name = "eu-west-1"


class TestValidateConfig:
    def test_dict(self):
        cfg = validate_config({"accessKeyId": "k", "secretAccessKey": "s", "region": "us-east-1"})
        assert isinstance(cfg, SecretsManagerConfig)
        assert cfg.aws_access_key_id == "k"

    def test_model_passthrough(self):
        cfg = SecretsManagerConfig(region_name="us-east-1")
        assert validate_config(cfg) is cfg

    def test_none(self):
        assert isinstance(validate_config(None), SecretsManagerConfig)


# ══════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════

class TestParseSecretValue:
    def test_json(self):
        assert parse_secret_value('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_not_json(self):
        assert parse_secret_value("plain text") == "plain text"

    def test_truncated_json(self):
        assert parse_secret_value('{"a": ') == '{"a": '


class TestEncodeSecretValue:
    def test_string_unchanged(self):
        assert encode_secret_value('{"already": "json"}') == '{"already": "json"}'

    def test_structure(self):
        value = {"username": "testuser", "password": "testpass"}
        assert json.loads(encode_secret_value(value)) == value

    def test_number(self):
        assert encode_secret_value(42) == "42"


class TestConvertFilters:
    def test_none(self):
        assert convert_filters(None) is None

    def test_both_spellings(self):
        assert convert_filters([
            {"Key": "tag-value", "Values": ["prod"]},
            {"key": "name", "values": ["db"]},
        ]) == [
            {"Key": "tag-value", "Values": ["prod"]},
            {"Key": "name", "Values": ["db"]},
        ]

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            convert_filters([{"Key": "colour", "Values": ["red"]}])


class TestConvertTags:
    def test_none(self):
        assert convert_tags(None) is None

    def test_dicts(self):
        assert convert_tags([{"key": "a", "value": "b"}]) == [{"Key": "a", "Value": "b"}]


def test_drop_none():
    assert drop_none(A=1, B=None, C=False) == {"A": 1, "C": False}


# ══════════════════════════════════════════════════════════════════════
# Exceptions
# ══════════════════════════════════════════════════════════════════════

class TestExceptions:
    def test_carries_cause(self):
        cause = RuntimeError("boom")
        err = SecretNotFoundError('Secret "x" not found.', cause)
        assert isinstance(err, SecretsManagerError)
        assert err.original_error is cause
        assert str(err) == 'Secret "x" not found.'

    def test_cause_optional(self):
        assert SecretsManagerError("plain").original_error is None


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestSecretsjackLogger:
    def test_log_operation(self, capfd):
        logger = SecretsjackLogger("test_sj")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("test message", operation="get_secret", secret_name="prod/db")
        captured = capfd.readouterr()
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["message"] == "test message"
        assert record["provider"] == "aws"
        assert record["service"] == "secretsmanager"
        assert record["secret_name"] == "prod/db"
        assert len(record["request_id"]) == 12

    def test_below_level_is_skipped(self, capfd):
        logger = SecretsjackLogger("test_sj_quiet")
        logger.logger.setLevel(logging.WARNING)
        logger.debug("hidden")
        assert "hidden" not in capfd.readouterr().err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.operation = "list_secrets"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"operation": "list_secrets"' in output
        assert '"request_id": "abc"' in output
        assert "secret_name" not in output


# ══════════════════════════════════════════════════════════════════════
# Async Support
# ══════════════════════════════════════════════════════════════════════

class TestAsyncWrap:
    def test_basic(self):
        def sync_fn(x: int) -> int:
            return x * 2

        async_fn = async_wrap(sync_fn)
        result = asyncio.run(async_fn(5))
        assert result == 10

    def test_preserves_name(self):
        def my_func():
            pass

        wrapped = async_wrap(my_func)
        assert wrapped.__name__ == "my_func"


class TestAsyncMixin:
    def test_auto_generates(self):
        class MyService(AsyncMixin):
            def do_work(self) -> str:
                return "done"

        svc = MyService()
        assert hasattr(svc, "ado_work")
        result = asyncio.run(svc.ado_work())
        assert result == "done"

    def test_skips_private_and_static(self):
        class MyService(AsyncMixin):
            def _hidden(self) -> None:
                pass

            @staticmethod
            def helper() -> None:
                pass

        assert not hasattr(MyService, "a_hidden")
        assert not hasattr(MyService, "ahelper")
