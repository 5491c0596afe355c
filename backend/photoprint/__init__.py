"""Photo print storefront backend."""
