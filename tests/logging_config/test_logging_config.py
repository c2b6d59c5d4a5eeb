import pytest
import logging
import os
import subprocess
import sys
from pathlib import Path
from crossval.logging_config import LoggingConfigurator, ColoredFormatter


@pytest.fixture
def reset_library_logger():
    yield
    logger = logging.getLogger('crossval')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_logger_creation(tmp_path, reset_library_logger):
    # Change CWD to tmp_path to avoid creating logs in project root
    old_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        config = {'logging': {'level': 'DEBUG', 'log_to_file': True}}
        lc = LoggingConfigurator(config)
        lc.setup()

        logger = lc.get_logger('search_engine')
        logger.info("Test message")

        assert Path("logs/crossval.log").exists()
        with open("logs/crossval.log", 'r', encoding='utf-8') as f:
            assert "Test message" in f.read()
    finally:
        logging.shutdown()
        os.chdir(old_cwd)


def test_setup_is_idempotent(reset_library_logger):
    lc = LoggingConfigurator({'logging': {'level': 'WARNING'}})
    lc.setup()
    logger = lc.setup()
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_console_can_be_disabled(reset_library_logger):
    logger = LoggingConfigurator({'logging': {'log_to_console': False}}).setup()
    assert logger.handlers == []


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord('crossval', logging.ERROR, __file__, 1, "boom", None, None)
    text = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "ERROR" in text
    assert "boom" in text
    assert record.levelname == "ERROR"


def test_import_leaves_standard_streams_alone():
    code = (
        "import sys\n"
        "out, err = sys.stdout, sys.stderr\n"
        "import crossval\n"
        "print(sys.stdout is out and sys.stderr is err)\n"
    )
    root = str(Path(__file__).resolve().parents[2])
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [root, os.environ.get("PYTHONPATH")]))}
    result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True, env=env)
    assert result.stdout.strip() == "True"


def test_colorful_setup_keeps_stdout(reset_library_logger):
    before = sys.stdout
    LoggingConfigurator({'logging': {'colorful_console': True}}).setup()
    assert sys.stdout is before
