"""Pydantic report models for attrbind."""

from attrbind.models.report import ConversionReport, DiagnosticInfo

__all__ = [
    "ConversionReport",
    "DiagnosticInfo",
]
