"""Reporting of tool usage evaluation results."""
