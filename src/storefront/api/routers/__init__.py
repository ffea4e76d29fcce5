"""API routers package.

Each router module owns one area (products, categories, pages, …) and
delegates to ``storefront.ops`` or ``storefront.site`` for the work.
"""
