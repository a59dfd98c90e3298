"""
mintmedia Test Suite

Test Categories:
- unit/: Fast, isolated unit tests with in-memory HTTP transports
- integration/: HTTP API tests through the FastAPI test client
- fixtures/: Shared fakes and mock responses
"""
