"""
CLI runner module.

Provides commands:
- import: Convert a payslip, print it or publish it to PocketSmith
- categories: List PocketSmith categories for the mapping table
- init-config: Write a default config file
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
