"""Steadyline services.

- Risk Classifier runs before any assistant reply is generated
- All services hash user identifiers with hash_pii() before logging
"""
