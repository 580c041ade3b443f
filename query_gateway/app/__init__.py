"""
Application package for the GraphQL query gateway.

The gateway sends queries and mutations to a single endpoint:
- Queries are cached by a hash of their canonical JSON body
- Mutations broadcast the typenames in their response to subscribers
- No retries, no eviction, no in-flight de-duplication

Structure:
- app.gateway: RequestGateway, the composition root.
- app.adapters: transport boundary and fetch options.
- app.caching: response cache.
- app.subscriptions: observer registry and broadcast.
- app.hashing / app.typenames / app.models: pure helpers and data types.
"""
