import logging
from pathlib import Path

from util.logging_setup import LOG_FILE_NAME, setup_logging


def _reset():
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


def test_file_handler_writes_debug_log(tmp_path: Path):
    try:
        path = setup_logging(tmp_path)
        assert path == tmp_path / LOG_FILE_NAME
        logging.getLogger("plaintasks.storage").debug("hello from storage")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello from storage" in path.read_text(encoding="utf-8")
    finally:
        _reset()


def test_console_only_without_dir():
    try:
        assert setup_logging(None) is None
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
    finally:
        _reset()


def test_third_party_noise_filtered_on_console(capsys):
    try:
        setup_logging(None, console_level=logging.DEBUG)
        logging.getLogger("asyncio").warning("noisy library")
        logging.getLogger("plaintasks.cli").warning("ours")
        err = capsys.readouterr().err
        assert "ours" in err
        assert "noisy library" not in err
    finally:
        _reset()


def test_unwritable_log_dir_disables_file_logging(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    try:
        assert setup_logging(blocker / "sub") is None
    finally:
        _reset()
