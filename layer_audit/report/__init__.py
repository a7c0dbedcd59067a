"""Grouped dependency report."""

from layer_audit.report.assembler import ReportAssembler, report_rows
from layer_audit.report.columns import format_columns

__all__ = ["ReportAssembler", "format_columns", "report_rows"]
