import json
import sys

import pytest

from sorting_analysis_app import PREVIEW_COUNT


def test_validate_input_success(api):
    result = api.validate_input("5, 3, 1", "integer")
    assert result == {"success": True, "message": "Validated 3 items successfully!", "count": 3}
    assert api.current_data == [5, 3, 1]


def test_validate_input_failure_clears_data(api):
    api.validate_input("5, 3, 1", "integer")
    result = api.validate_input("5, x", "integer")
    assert result["success"] is False
    assert result["message"] == '"x" is not a valid integer'
    assert api.current_data == []


def test_load_file_content(api):
    result = api.load_file_content(b"b.txt, a.txt", "text")
    assert result["success"] is True
    assert result["message"] == "Loaded 2 items from file successfully!"
    assert api.current_data == ["b.txt", "a.txt"]


def test_load_file_content_bad_encoding(api):
    result = api.load_file_content(b"\xff\xfe\xfa", "text")
    assert result["success"] is False
    assert result["message"].startswith("Error reading file")


def test_generate_sample_data(api):
    result = api.generate_sample_data("integer", seed=4)
    assert result["success"] is True
    assert len(result["data"].split(", ")) == 15
    assert api.generate_sample_data("binary")["success"] is False


def test_run_analysis_requires_data(api):
    result = api.run_analysis(["bubble"])
    assert result["success"] is False
    assert result["message"] == "Please validate input data first"


def test_run_analysis_requires_algorithm(api):
    api.validate_input("3, 1", "integer")
    result = api.run_analysis([])
    assert result["success"] is False
    assert result["level"] == "warning"
    assert result["message"] == "Please select at least one algorithm"


def test_run_analysis_unknown_algorithm(api):
    api.validate_input("3, 1", "integer")
    result = api.run_analysis(["bogo"])
    assert result["success"] is False
    assert result["message"].startswith("Error during analysis")


def test_run_analysis_payload(api):
    api.validate_input(", ".join(str(v) for v in range(20, 0, -1)), "integer")
    result = api.run_analysis(["bubble", "selection", "insertion", "merge"])
    assert result["success"] is True

    payload = result["results"]
    assert payload["most_efficient"] in {"bubble", "selection", "insertion", "merge"}

    table = payload["table"]
    assert [row["algorithm"] for row in table] == ["bubble", "selection", "insertion", "merge"]
    assert sum(row["most_efficient"] for row in table) == 1
    bubble = table[0]
    assert bubble["name"] == "Bubble Sort"
    assert bubble["comparisons"] == 190
    assert bubble["operations"] == 190

    charts = payload["charts"]
    assert charts["labels"] == ["Bubble Sort", "Selection Sort", "Insertion Sort", "Merge Sort"]
    assert len(charts["execution_time"]) == 4
    assert charts["comparisons"][0] == 190

    preview = payload["sorted_preview"][0]
    assert preview["items"] == list(range(1, PREVIEW_COUNT + 1))
    assert preview["remaining"] == 20 - PREVIEW_COUNT
    assert preview["total"] == 20


def test_start_analysis_in_background(api):
    api.validate_input("b, c, a", "text")
    result = api.start_analysis(["merge"])
    assert result["success"] is True

    api.analysis_thread.join(timeout=10)
    status = api.get_status()
    assert status["phase"] == "analysis"
    assert status["progress"] == 100
    assert status["results"]["most_efficient"] == "merge"
    assert api.current_results["merge"].sorted == ["a", "b", "c"]


def test_export_requires_results(api):
    assert api.export_csv()["success"] is False
    assert api.export_json()["message"] == "No results to export"


def test_export_after_analysis(api):
    api.validate_input("5, 3, 1", "integer")
    api.run_analysis(["bubble"])

    csv_result = api.export_csv()
    assert csv_result["filename"] == "sorting-analysis.csv"
    assert '"1;3;5"' in csv_result["content"]

    json_result = api.export_json()
    payload = json.loads(json_result["content"])
    assert payload["originalData"] == [5, 3, 1]
    assert payload["summary"]["mostEfficient"] == "bubble"


def test_reset(api):
    api.validate_input("5, 3, 1", "integer")
    api.run_analysis(["bubble"])
    result = api.reset()
    assert result["success"] is True
    assert api.current_data == []
    assert api.current_results == {}
    assert api.get_status()["phase"] == "idle"


def test_log_buffer_is_capped(api):
    api.max_log_lines = 5
    for i in range(12):
        api.log(f"line {i}")
    assert len(api.log_buffer) == 5
    assert api.log_buffer[-1].endswith("line 11")


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no integer string conversion limit")
def test_validate_input_integer_too_long_to_convert(api):
    result = api.validate_input("1, " + "9" * 5000, "integer")
    assert result["success"] is False
    assert result["message"].endswith("is not a valid integer")
    assert api.current_data == []


def test_background_analysis_reports_unexpected_errors(api, monkeypatch):
    def broken(data, algorithms):
        raise RuntimeError("analyzer crashed")

    api.validate_input("3, 1, 2", "integer")
    monkeypatch.setattr(api.analyzer, "run_all_algorithms", broken)
    assert api.start_analysis(["bubble"])["success"] is True

    api.analysis_thread.join(timeout=10)
    status = api.get_status()
    assert status["phase"] == "error"
    assert status["message"] == "❌ Error: analyzer crashed"
    assert any("analyzer crashed" in line for line in status["logs"])
