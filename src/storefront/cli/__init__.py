"""Command line interface (``storefront``)."""
