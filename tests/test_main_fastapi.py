import json
import sys

import pytest


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok"}
    response = client.get("/")
    assert response.status_code == 200
    assert "Sorting Algorithm Analyzer" in response.text


def test_algorithms_endpoint(client):
    assert client.get("/algorithms").json()["merge"] == "Merge Sort"


def test_validate_and_analyze(client):
    response = client.post("/validate", json={"data": "5, 3, 1", "data_type": "integer"})
    assert response.status_code == 200
    assert response.json()["count"] == 3

    response = client.post("/analyze", json={"algorithms": ["bubble", "merge"]})
    assert response.status_code == 200
    table = response.json()["results"]["table"]
    assert [row["algorithm"] for row in table] == ["bubble", "merge"]

    results = client.get("/results")
    assert results.status_code == 200
    assert results.json()["sorted_preview"][0]["items"] == [1, 3, 5]


def test_analyze_defaults_to_all_algorithms(client):
    client.post("/validate", json={"data": "b, a", "data_type": "text"})
    response = client.post("/analyze", json={})
    assert response.status_code == 200
    assert len(response.json()["results"]["table"]) == 4


def test_validation_error_is_400(client):
    response = client.post("/validate", json={"data": "1, nope", "data_type": "integer"})
    assert response.status_code == 400
    assert response.json()["detail"] == '"nope" is not a valid integer'


def test_analyze_without_data_is_400(client):
    response = client.post("/analyze", json={"algorithms": ["bubble"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please validate input data first"


def test_analyze_without_algorithms_is_400(client):
    client.post("/validate", json={"data": "2, 1", "data_type": "integer"})
    response = client.post("/analyze", json={"algorithms": []})
    assert response.status_code == 400


def test_upload_text(client):
    files = {"file": ("files.txt", b"report.pdf, archive.zip", "text/plain")}
    response = client.post("/upload-text?data_type=text", files=files)
    assert response.status_code == 200
    assert response.json()["count"] == 2


def test_sample(client):
    response = client.post("/sample", json={"data_type": "text", "size": 4, "seed": 9})
    assert response.status_code == 200
    assert len(response.json()["data"].split(", ")) == 4


def test_start_and_status(client):
    import main_fastapi

    client.post("/validate", json={"data": "9, 8, 7", "data_type": "integer"})
    response = client.post("/analyze/start", json={"algorithms": ["insertion"]})
    assert response.status_code == 200
    main_fastapi.api.analysis_thread.join(timeout=10)

    status = client.get("/status").json()
    assert status["progress"] == 100
    assert status["results"]["most_efficient"] == "insertion"
    assert isinstance(status["logs"], list)


def test_exports(client):
    assert client.get("/export/csv").status_code == 404
    assert client.get("/results").status_code == 404

    client.post("/validate", json={"data": "5, 3, 1", "data_type": "integer"})
    client.post("/analyze", json={"algorithms": ["selection"]})

    csv_response = client.get("/export/csv")
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert 'filename="sorting-analysis.csv"' in csv_response.headers["content-disposition"]

    json_response = client.get("/export/json")
    payload = json.loads(json_response.text)
    assert payload["summary"]["totalAlgorithms"] == 1


def test_reset_endpoint(client):
    client.post("/validate", json={"data": "5, 3, 1", "data_type": "integer"})
    assert client.post("/reset").json()["success"] is True
    assert client.post("/analyze", json={"algorithms": ["bubble"]}).status_code == 400


def test_upload_text_requires_file(client):
    response = client.post("/upload-text?data_type=text")
    assert response.status_code == 422


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no integer string conversion limit")
def test_integer_too_long_to_convert_is_400(client):
    response = client.post("/validate", json={"data": "1, " + "9" * 5000, "data_type": "integer"})
    assert response.status_code == 400
    assert response.json()["detail"].endswith("is not a valid integer")
