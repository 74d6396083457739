"""Storefront catalog view.

Client-side state for a product catalog storefront: the filter
pipeline, the view orchestrator, the wishlist and the product
detail selection.
"""

__version__ = "0.1.0"
