"""Unit tests for LingoSphere.

This package contains test modules for all components of the LingoSphere translation engine.
Tests use pytest with asyncio support and mock SDK/network calls via monkeypatch.
"""
