"""Multi-tenant notification dispatch and delivery service.

The package intentionally re-exports nothing; callers import the layer they
need (``notifier.application.notifications`` for the engines,
``notifier.interfaces.api`` for the HTTP surface).
"""
