"""
Version 1 of the API.

This subpackage bundles the storefront endpoints: lessons, search,
orders, images and health.
"""
