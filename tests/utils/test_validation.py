from puml_ld.utils.validation import ValidationCollector, ValidationSeverity


def test_collector_records_and_reports(tmp_path):
    collector = ValidationCollector()
    collector.add_result(ValidationSeverity.INFO, "Line matches no rule", line_number=3, line="}", diagram_type="Class")
    collector.add_result(ValidationSeverity.WARNING, "Attribute declared outside of any element", line_number=2, line="-x: int")

    assert collector.has_warnings
    assert len(collector.get_results_by_severity(ValidationSeverity.INFO)) == 1

    report = tmp_path / "reports" / "extraction.log"
    collector.save_report(report)
    content = report.read_text(encoding="utf-8")
    assert "Total Issues: 2" in content
    assert "Line 3: }" in content
    assert "WARNING Issues (1)" in content


def test_warnings_are_logged(caplog):
    collector = ValidationCollector()
    collector.add_result(ValidationSeverity.WARNING, "Method declared outside of any element", line_number=5, line="+f()")

    assert "Method declared outside of any element" in caplog.text


def test_empty_collector():
    collector = ValidationCollector()
    assert not collector.has_warnings
    assert collector.results == []
