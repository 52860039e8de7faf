"""Tests for the diagnostics collection and its report rendering."""

from __future__ import annotations

from attrbind.diag import Diagnostic, Diagnostics, Severity, error, warning
from attrbind.models.report import ConversionReport
from attrbind.path import Path


class TestDiagnostics:
    def test_empty_has_no_error(self) -> None:
        diags = Diagnostics()
        assert not diags
        assert not diags.has_error()

    def test_add_error_has_no_path(self) -> None:
        diags = Diagnostics()
        diags.add_error("Broken", "whole value is broken", code="BROKEN")
        assert diags.has_error()
        assert diags[0].path is None
        assert diags.errors()[0].code == "BROKEN"

    def test_warning_only_has_no_error(self) -> None:
        diags = Diagnostics()
        diags.add_warning("Heads Up", "something looks odd")
        assert diags
        assert not diags.has_error()
        assert len(diags.warnings()) == 1

    def test_append_preserves_order_and_duplicates(self) -> None:
        first = error("A", "a")
        second = warning("B", "b")
        diags = Diagnostics()
        diags.append(first, second, first)
        assert list(diags) == [first, second, first]
        assert diags.has_error()

    def test_concatenation_appends_callee_after_caller(self) -> None:
        caller = Diagnostics([warning("Caller", "c")])
        callee = Diagnostics([error("Callee", "e")])
        merged = caller + callee
        assert [d.summary for d in merged] == ["Caller", "Callee"]
        # operands unchanged
        assert len(caller) == 1
        assert len(callee) == 1

    def test_attribute_diagnostics_carry_path(self) -> None:
        path = Path().attribute("name")
        diags = Diagnostics()
        diags.add_attribute_error(path, "Bad", "bad value", code="BAD")
        assert diags[0] == Diagnostic(Severity.ERROR, "Bad", "bad value", path, "BAD")

    def test_equality_with_list(self) -> None:
        diag = error("A", "a")
        assert Diagnostics([diag]) == [diag]
        assert Diagnostics([diag]) == Diagnostics([diag])
        assert Diagnostics([diag]) != Diagnostics()


class TestReport:
    def test_report_splits_errors_and_warnings(self) -> None:
        diags = Diagnostics(
            [
                error("Bad", "bad value", Path().attribute("servers").index(0), code="BAD"),
                warning("Odd", "odd value"),
            ]
        )
        report = diags.to_report()
        assert isinstance(report, ConversionReport)
        assert report.valid is False
        assert report.errors[0].path == "servers[0]"
        assert report.errors[0].code == "BAD"
        assert report.warnings[0].path is None

    def test_report_dumps_to_plain_data(self) -> None:
        report = Diagnostics([warning("Odd", "odd value")]).to_report()
        data = report.model_dump()
        assert data["valid"] is True
        assert data["warnings"][0]["severity"] == "warning"
