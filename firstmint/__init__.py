"""firstmint: find the first artwork a wallet minted or collected.

Queries the Zora indexing GraphQL API for a wallet's collected tokens and
returns the preview media URI of the first one, with local rate limiting
and classified retries around the single outbound call.
"""

__version__ = "0.1.0"
