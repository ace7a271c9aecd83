"""Sincronización de datos del marketplace (sales, orders, stocks, incomes) hacia PostgreSQL."""
__version__ = "1.0.0"
