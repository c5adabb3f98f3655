# marc_toolkit/application/__init__.py

"""Application layer: record processing and run models"""
