"""
LaneList - Freight carrier directory with AI-assisted suggestions.

This package provides a FastAPI-based backend for carrier search over a
PostgreSQL store, an AI suggestion fallback with guardrails, and a contact
form mail relay.
"""

__version__ = "1.0.0"
