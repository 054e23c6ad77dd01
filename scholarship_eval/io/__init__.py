"""Formatting and persistence of evaluation results."""

from scholarship_eval.io.results import format_results, summarize_outcomes, write_results

__all__ = ["format_results", "summarize_outcomes", "write_results"]
