"""Pytest configuration and fixtures for the MT942 Interim Statement Parser."""

import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from mt942.config.settings import Settings

BLOCK1 = "F01BANKBEBBAXXX0000000000"
BLOCK2 = "O9421200210101BANKDEFFAXXX00000000002101011200N"


def wrap_body(body: str, block3: str = "", trailer: str = "") -> str:
    """Wrap a block 4 body (ending in a lone "-" line) in a message envelope."""
    return f"{{1:{BLOCK1}}}{{2:{BLOCK2}}}{block3}{{4:\n{body}}}{trailer}"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def make_document():
    """Factory wrapping a body in the standard envelope."""
    return wrap_body


@pytest.fixture
def sample_body():
    """Minimal block 4 body with one statement line and its information."""
    return (
        ":20:REF123\n"
        ":25:1234567\n"
        ":61:2101011210C100,00NTRFNONREF//INST1\n"
        ":86:Payment details\n"
        ":28C:1/1\n"
        "-"
    )


@pytest.fixture
def sample_document(sample_body):
    """Minimal MT942 message."""
    return wrap_body(sample_body)


@pytest.fixture
def full_body():
    """Block 4 body using every supported tag, wrapped lines included."""
    return (
        ":20:STMT20210101\n"
        ":21:NONREF\n"
        ":25:DE89370400440532013000\n"
        ":28C:00001/001\n"
        ":34F:EURD0,\n"
        ":34F:EURC100,00\n"
        ":13D:2101011200+0100\n"
        ":61:2101010101D25,50NMSCREF001//BANKREF1\n"
        "INVOICE 4711\n"
        ":86:ELECTRICITY BILL\n"
        "JANUARY 2021\n"
        ":86:Second info line\n"
        ":61:210101C1000,NTRFNONREF//TRF123\n"
        ":86:Salary\n"
        ":61:210102RC5,NCHGNONREF\n"
        ":90D:1EUR25,50\n"
        ":90C:1EUR1000,\n"
        "-"
    )


@pytest.fixture
def full_document(full_body):
    """MT942 message with a block 3 user header and a block 5 trailer."""
    return wrap_body(
        full_body,
        block3="{3:{108:MT942REF}}",
        trailer="{5:{CHK:ABCDEF123456}}",
    )


@pytest.fixture
def sample_settings(temp_dir):
    """Create sample settings for testing."""
    return Settings(
        orphan_information="notes",
        apply_time_offset=False,
        reports_dir=str(temp_dir / "reports"),
        logs_dir=str(temp_dir / "logs"),
        log_level="INFO",
    )


@pytest.fixture
def message_file(temp_dir, full_document):
    """Write the full message to disk."""
    path = temp_dir / "statement.mt942"
    path.write_text(full_document, encoding="utf-8")
    return str(path)


@pytest.fixture
def sample_environment(temp_dir):
    """Create sample environment variables for testing."""
    env_vars = {
        "ORPHAN_INFORMATION": "drop",
        "APPLY_TIME_OFFSET": "true",
        "LOG_LEVEL": "DEBUG",
        "LOGS_DIR": str(temp_dir / "logs"),
        "REPORTS_DIR": str(temp_dir / "reports"),
        "MAX_FILE_SIZE_MB": "2",
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars
