"""
Test fixtures for the Yildiz client.

- common: config and mock-transport client factories
- stub_server: threaded HTTP stub server for integration tests
"""
