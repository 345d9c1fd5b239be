"""
Validation, versioning and release tooling for Markdown skill packs.
"""
__version__ = "0.1.0"
