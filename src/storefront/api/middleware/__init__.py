"""API middleware package.

Cross-cutting concerns (request ids, timing, error mapping) live here so
routers stay focused on calling the ops layer.
"""
