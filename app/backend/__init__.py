"""
Contract Analyzer Backend Application.

A FastAPI service that sells one-time access through Stripe Checkout and
answers questions about uploaded contracts using OpenAI (GPT-4o).
"""

__version__ = "1.0.0"
