"""Application package for the hall notifier service.

The package is laid out in layers: ``domain`` holds immutable value types,
``application`` the notification use cases, ``infrastructure`` the adapters
for persistence and push delivery and ``interfaces`` the HTTP ingress.
"""
