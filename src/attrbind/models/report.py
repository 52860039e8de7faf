"""Serializable report models for conversion diagnostics."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from attrbind.diag import Diagnostic, Severity


class DiagnosticInfo(BaseModel):
    """A single diagnostic with its path rendered as a string."""

    code: str
    severity: Severity
    summary: str
    detail: str
    path: str | None = None

    @classmethod
    def from_diagnostic(cls, diag: Diagnostic) -> DiagnosticInfo:
        return cls(
            code=diag.code,
            severity=diag.severity,
            summary=diag.summary,
            detail=diag.detail,
            path=str(diag.path) if diag.path is not None else None,
        )


class ConversionReport(BaseModel):
    """Result of a conversion pass."""

    valid: bool
    errors: list[DiagnosticInfo] = []
    warnings: list[DiagnosticInfo] = []

    @classmethod
    def from_diagnostics(cls, diags: Iterable[Diagnostic]) -> ConversionReport:
        errors: list[DiagnosticInfo] = []
        warnings: list[DiagnosticInfo] = []
        for d in diags:
            info = DiagnosticInfo.from_diagnostic(d)
            if d.severity == Severity.ERROR:
                errors.append(info)
            else:
                warnings.append(info)
        return cls(valid=not errors, errors=errors, warnings=warnings)
