"""Storefront catalog: a CRUD HTTP API over products and orders."""
