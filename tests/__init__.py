"""
Test Suite

Contains unit tests for the Bitcoin.co.id client.

Structure:
- tests/unit/: Tests for individual components (signing, schemas, config, client)

Uses pytest with pytest-asyncio for testing async functionality, and an
in-process aiohttp server as the stub exchange.
"""
