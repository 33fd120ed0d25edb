"""
Test suite for billing-recalc

Contains:
- tests/unit/          : Unit tests for domain models, engine, session and presentation
"""
