"""
Storefront logic that runs over already-fetched rows.
"""
