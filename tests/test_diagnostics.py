import logging

from condann.diagnostics import Diagnostic, DiagnosticCollector


def test_diagnostic_format():
    diag = Diagnostic(message="A is not defined", filename="src/a.js", line=3, column=2)
    assert diag.location == "src/a.js:3:2"
    assert diag.format() == "[WARN] A is not defined at src/a.js:3:2"
    assert diag.to_dict() == {
        "message": "A is not defined",
        "filename": "src/a.js",
        "line": 3,
        "column": 2,
        "severity": "warning",
    }


def test_diagnostic_without_filename():
    diag = Diagnostic(message="m", filename=None, line=1, column=0, severity="error")
    assert diag.format() == "[ERROR] m at <unknown>:1:0"


def test_collector_logs_and_keeps(caplog):
    collector = DiagnosticCollector("a.js")
    with caplog.at_level(logging.WARNING, logger="condann"):
        collector.warn("first", 1, 0)
        collector.report(Diagnostic("second", "a.js", 2, 4, severity="error"))

    assert len(collector) == 2
    assert [d.message for d in collector] == ["first", "second"]
    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.WARNING, logging.ERROR]
    assert "[WARN] first at a.js:1:0" in caplog.text
