from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_TSV = "date\tclose\n01-Jan-15\t100.0\n02-Jan-15\t110.0\n03-Jan-15\t90.0\n"


@pytest.fixture()
def sample_tsv() -> str:
    return SAMPLE_TSV


@pytest.fixture()
def sample_path(tmp_path: Path) -> Path:
    path = tmp_path / "line.tsv"
    path.write_text(SAMPLE_TSV, encoding="utf-8")
    return path
