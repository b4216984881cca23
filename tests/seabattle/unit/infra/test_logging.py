import json
import logging

from seabattle.game.infra.logging import (
    JsonFormatter,
    LoggingConfig,
    build_logging_config,
    configure_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="attack_resolved side=%s",
        args=("pc",),
        exc_info=None,
        extra={"row": 3},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "attack_resolved side=pc"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"row": 3}


def test_build_logging_config_reads_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.delenv("SEABATTLE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")
    config = build_logging_config()
    assert config.level_name == "DEBUG"
    assert config.console_format == "text"
    assert config.file_path is not None
    assert config.file_path.endswith(".jsonl")


def test_configure_logging_writes_jsonl_under_app_data_logs(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "json")
    configure_logging(build_logging_config())

    logging.getLogger("test.logging.file.path").info("hello")
    configure_logging(LoggingConfig())

    files = list((tmp_path / "appdata" / "logs").glob("seabattle_run_*.jsonl"))
    assert files
    lines = files[0].read_text(encoding="utf-8").splitlines()
    assert any(json.loads(line)["msg"] == "hello" for line in lines)


def test_configure_logging_console_only_sets_level() -> None:
    configure_logging(LoggingConfig(level_name="warning"))
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    configure_logging(LoggingConfig())
