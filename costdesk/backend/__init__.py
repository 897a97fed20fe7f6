"""Backend package: HTTP API, health probes and the data-service client."""
