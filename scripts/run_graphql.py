#!/usr/bin/env python3
"""
Run a single GraphQL query or mutation through the RequestGateway.

Handy for checking an endpoint from a developer workstation or CI job. The
result is printed as JSON; queries include the typenames found in the
response.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from query_gateway.app.gateway import RequestGateway
from query_gateway.app.models import GraphQLRequest
from shared.config import get_settings
from shared.errors import ConfigurationError
from shared.logging import configure_logging

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


def parse_headers(values: List[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for value in values:
        if "=" not in value:
            raise ConfigurationError(f"Invalid header '{value}', expected KEY=VALUE")
        key, header_value = value.split("=", 1)
        headers[key.strip()] = header_value.strip()
    return headers


async def run(
    *,
    url: str,
    query: str,
    variables: Dict[str, Any],
    headers: Dict[str, str],
    mutation: bool,
) -> Any:
    """Execute one operation and return a JSON-serializable result."""
    settings = get_settings(url=url)
    gateway = RequestGateway.from_settings(settings, fetch_options={"headers": headers})
    request = GraphQLRequest(query=query, variables=variables)

    if mutation:
        return await gateway.execute_mutation(request)

    result = await gateway.execute_query(request)
    return result.model_dump(by_alias=True)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a GraphQL operation through the query gateway.")
    parser.add_argument("--url", default=os.getenv("GRAPHQL_GATEWAY_URL", ""), help="GraphQL endpoint URL")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--query", help="Operation document")
    source.add_argument("--query-file", type=Path, help="Path to a file holding the operation document")
    parser.add_argument("--variables", default="{}", help="Variables as a JSON object")
    parser.add_argument("--mutation", action="store_true", help="Send as a mutation (no cache, broadcast)")
    parser.add_argument("--header", action="append", default=[], help="Extra header KEY=VALUE (repeatable)")
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVELS,
        default=os.getenv("GRAPHQL_GATEWAY_LOG_LEVEL", "warning"),
        help="Log level",
    )
    return parser.parse_args()


def main() -> int:
    args = _parse_args()

    try:
        configure_logging("query_gateway", args.log_level)
        query = args.query if args.query is not None else args.query_file.read_text()
        try:
            variables = json.loads(args.variables)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"--variables is not valid JSON: {exc}")
        if not isinstance(variables, dict):
            raise ConfigurationError("--variables must be a JSON object")
        result = asyncio.run(
            run(
                url=args.url,
                query=query,
                variables=variables,
                headers=parse_headers(args.header),
                mutation=args.mutation,
            )
        )
    except KeyboardInterrupt:
        return 130
    except ConfigurationError as exc:
        print(f"[graphql] configuration error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - CLI surface
        print(f"[graphql] failed: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
