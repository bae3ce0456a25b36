# tests/conftest.py

import csv
import pytest
import httpx
from unittest.mock import AsyncMock, Mock, patch

from leadgen.icp_engine.core.field_mapper import DEFAULT_COLUMN_MAPPINGS
from leadgen.icp_engine.records import BusinessRecord, IcpDefinition


DATASET_HEADER = [mapping.split("|")[0] for mapping in DEFAULT_COLUMN_MAPPINGS.values()]

_REAL_ASYNC_CLIENT = httpx.AsyncClient


def dataset_row(**fields):
    """CSV row keyed by dataset column, built from BusinessRecord field names."""
    row = {column: "" for column in DATASET_HEADER}
    for record_field, value in fields.items():
        column = DEFAULT_COLUMN_MAPPINGS[record_field].split("|")[0]
        row[column] = value
    return row


@pytest.fixture
def write_dataset(tmp_path):
    """Factory writing a dataset CSV; returns its path as a string."""
    def _write(rows, header=None, name="business_dataset.csv"):
        path = tmp_path / name
        header = header or DATASET_HEADER
        with open(path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=header)
            writer.writeheader()
            for row in rows:
                writer.writerow({k: v for k, v in row.items() if k in header})
        return str(path)
    return _write


@pytest.fixture
def scenario_rows():
    """Three-record dataset: A and C software in Austin, B retail in Dallas."""
    return [
        dataset_row(business_name="A Corp", sic_name="software consulting",
                    city="Austin", state="TX", sales_volume="50 Million"),
        dataset_row(business_name="B Corp", sic_name="retail",
                    city="Dallas", state="TX", sales_volume="Unknown"),
        dataset_row(business_name="C Corp", sic_name="software development",
                    city="Austin", state="TX", sales_volume="200 Million"),
    ]


@pytest.fixture
def austin_record():
    return BusinessRecord(
        business_name="Lone Star Code Works",
        sic_name="Computer Programming Services",
        city="Austin",
        state="TX",
        zip_code="78701",
        sales_volume="$10 to 20 Million",
    )


@pytest.fixture
def empty_icp():
    return IcpDefinition()


@pytest.fixture
def mock_db():
    """Mock AsyncSession; add/add_all are sync like the real session."""
    db = AsyncMock()
    db.add = Mock()
    db.add_all = Mock()
    return db


@pytest.fixture
def mock_http():
    """
    Route httpx.AsyncClient through a MockTransport.

    Usage: mock_http(handler) inside a test, handler(request) -> httpx.Response
    """
    patches = []

    def _install(handler):
        transport = httpx.MockTransport(handler)
        p = patch(
            "httpx.AsyncClient",
            side_effect=lambda *args, **kwargs: _REAL_ASYNC_CLIENT(transport=transport)
        )
        p.start()
        patches.append(p)

    yield _install

    for p in patches:
        p.stop()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
