"""
Academy Shared Kernel
=====================

Client-side engagement state layer for the course platform.

Architecture:
- core: EventBus, configuration, error taxonomy
- infrastructure: Technical adapters (HTTP transport, token persistence)
- domain: API models, resource clients, session store, screen states
"""

__all__ = []
