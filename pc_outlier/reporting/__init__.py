"""Reporting module for statistics and report generation."""

from pc_outlier.reporting.statistics import (
    calculate_classification_stats,
    calculate_outlier_stats,
)
from pc_outlier.reporting.report_writer import (
    generate_config_summary,
    write_json_report,
)

__all__ = [
    # statistics
    "calculate_classification_stats",
    "calculate_outlier_stats",
    # report_writer
    "generate_config_summary",
    "write_json_report",
]
