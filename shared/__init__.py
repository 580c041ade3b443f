"""
Shared utilities for the GraphQL query gateway.

This package aggregates cross-cutting building blocks:

- config: Gateway configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- tracing: OpenTelemetry span helpers
- errors: Canonical error types and responses
- test_helpers: Fakes and factories used by the test suites

Nothing here imports from query_gateway.
"""
