"""Request Builder for the Zora profile/collected-tokens query."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from firstmint.core.exceptions import InvalidInputError

ZORA_GRAPHQL_ENDPOINT = "https://api.zora.co/universal/graphql"

PROFILE_AND_MINTS_QUERY = """
  query ProfileAndMints($address: String!) {
    profile(identifier: $address) {
      collectedCollectionsOrTokens(first: 0) {
        edges {
          node {
            media {
              previewImage {
                previewImage {
                  downloadableUri
                }
              }
            }
          }
        }
      }
    }
  }
"""


@dataclass(frozen=True)
class GraphQLRequest:
    """A ready-to-send GraphQL POST."""
    url: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


def validate_address(address: Any) -> str:
    """Raises InvalidInputError unless `address` is a non-empty string."""
    if not isinstance(address, str) or not address:
        raise InvalidInputError("Invalid address provided", address=address if isinstance(address, str) else None)
    return address


def build_request(
    address: str,
    endpoint: str = ZORA_GRAPHQL_ENDPOINT,
    user_agent: Optional[str] = None,
) -> GraphQLRequest:
    """Builds the ProfileAndMints request for `address`.

    The query text is a static constant; `address` is bound as its only
    variable.

    Raises:
        InvalidInputError: If `address` is empty or not a string.
    """
    validate_address(address)
    headers = {"Content-Type": "application/json"}
    if user_agent:
        headers["User-Agent"] = user_agent
    return GraphQLRequest(
        url=endpoint,
        body={"query": PROFILE_AND_MINTS_QUERY, "variables": {"address": address}},
        headers=headers,
    )
