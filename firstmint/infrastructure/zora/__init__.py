"""Adapters for the Zora universal GraphQL API."""
