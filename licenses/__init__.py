"""
Licenses module - plugin license lifecycle.

This module handles:
- Storage map of plugin license material and its storage locations
- Encrypted license record persistence
- Remote licensing API client
- License lifecycle (provision, activate, status, validity check)
"""
