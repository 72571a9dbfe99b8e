"""Budget server: a REST API for budgets, categories and transactions shared between users."""

__version__ = "1.0.0"
