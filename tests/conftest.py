from pathlib import Path

import pytest

FULL_DOCUMENT = """
Sales (
    3010..3010 => Webshop
    3010..4000 => Other sales
) => Sum sales

(
    4000..5000 => Material
) => Sum material

(
    5000..5000 => Direct labor
    5010..6000 => Other labor costs
) => Sum labor costs

Other costs (
    6000..6010 => Leasing
    (
        6020..6100 => Office supplies
        6100..6200 => Consumables
    ) => Sum miscellaneous costs
) => Sum other costs
"""


@pytest.fixture  # type: ignore[misc]
def full_document() -> str:
    return FULL_DOCUMENT


@pytest.fixture  # type: ignore[misc]
def qa_file(tmp_path: Path, full_document: str) -> Path:
    path = tmp_path / "report.qa"
    path.write_text(full_document, encoding="utf-8")
    return path
