from __future__ import annotations

from pathlib import Path

import pytest

from xorcracker.core.scoring import FrequencyModel

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="session")
def english_model() -> FrequencyModel:
    return FrequencyModel.from_package_data()


@pytest.fixture(scope="session")
def committee_text() -> bytes:
    """About 1 KB of English prose, long enough for key length estimation."""
    return (DATA_DIR / "committee.txt").read_bytes()
