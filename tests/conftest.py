import pytest
from unittest.mock import AsyncMock

from plotpad.charts import ChartPipeline, ChartSettings, CsvProfiler
from plotpad.sheets import SheetService
from plotpad.storage import InMemorySheetRepository
from plotpad.vault import VaultCodec, InMemorySecretStore

SALES_CSV = "region,units,price\nnorth,10,2.5\nsouth,4,3.0\nnorth,6,2.0\neast,8,4.5"
NUMBERS_CSV = "h1,h2\n1,2\n3,4\n5,6"
CATEGORICAL_CSV = "name,city\nann,paris\nbob,rome\ncy,oslo"


@pytest.fixture
def profiler():
    return CsvProfiler()


@pytest.fixture
def mock_text_service():
    """Text generation service returning a fixed response."""
    mock = AsyncMock()
    mock.complete = AsyncMock(return_value="[]")
    return mock


@pytest.fixture
def settings():
    return ChartSettings()


@pytest.fixture
def pipeline(mock_text_service, settings):
    return ChartPipeline(mock_text_service, settings)


@pytest.fixture
def secret_store():
    return InMemorySecretStore()


@pytest.fixture
def codec(secret_store):
    return VaultCodec(secret_store)


@pytest.fixture
def repository():
    return InMemorySheetRepository()


@pytest.fixture
def sheet_service(repository, codec, pipeline):
    return SheetService(repository=repository, codec=codec, pipeline=pipeline)


@pytest.fixture
def sales_csv():
    return SALES_CSV


@pytest.fixture
def numbers_csv():
    return NUMBERS_CSV


@pytest.fixture
def categorical_csv():
    return CATEGORICAL_CSV
