# marc_toolkit/adapters/__init__.py

"""Adapters: command line interface and report exporters"""
