"""Test Fixtures Package

Fixtures:
- database: in-memory SQLite engine, store, repositories, services
- gait_data: controllable clock and batch builders
"""
