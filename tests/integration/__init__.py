"""
Integration tests that make real API calls.

These tests are slow and costly - run selectively:
    pytest tests/integration -v

Requires GOOGLE_API_KEY (or GEMINI_API_KEY) in .env.
"""
