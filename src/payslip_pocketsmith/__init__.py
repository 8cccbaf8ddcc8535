"""
Payslip → PocketSmith Import

A deterministic, testable pipeline that turns a Zedra payslip into signed
PocketSmith transactions, balanced by a single net-pay transfer, and either
prints them for inspection or publishes them to a transaction account.
"""

__version__ = "0.1.0"
