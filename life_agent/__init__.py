"""Life Agent notification service.

The package is laid out in layers: ``domain`` holds entities and errors,
``application`` the use cases, ``infrastructure`` persistence and delivery
adapters, and ``interfaces`` the HTTP surface.
"""
