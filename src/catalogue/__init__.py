"""Catalogue bounded context: products and the product list."""
