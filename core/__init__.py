"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- Key-value store, encryption and locking infrastructure
- Middleware components
- Metrics and health views
"""
