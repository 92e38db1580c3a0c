"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They coordinate between entities, ports, and external systems.

This layer contains:
- Metadata providers (search, scrape, episode list) built on a remote catalog
- Language fallback reconciliation
- Provider registry and the bounded scrape pool
"""
