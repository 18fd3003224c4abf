"""Payroll reconciliation and split-pay settlement engine."""

__version__ = "0.3.0"
