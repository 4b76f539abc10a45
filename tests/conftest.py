import pytest

from sorting_analysis_app import SortingAnalysisAPI


@pytest.fixture
def api():
    return SortingAnalysisAPI()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    import main_fastapi

    main_fastapi.api.reset()
    with TestClient(main_fastapi.app) as test_client:
        yield test_client
    main_fastapi.api.reset()
