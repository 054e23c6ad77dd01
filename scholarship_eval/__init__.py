"""Scholarship application evaluation."""
