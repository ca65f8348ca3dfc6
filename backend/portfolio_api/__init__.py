# backend/portfolio_api/__init__.py
"""Portfolio Performance API."""

__version__ = "0.1.0"
