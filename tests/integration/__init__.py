# tests/integration/__init__.py
"""Integration tests for MARC Toolkit"""
