"""Application layer - Use cases and port definitions.

This layer contains:
- Use Cases: Create (command), Get and List (queries)
- Ports: Abstract interfaces for the store, the processor and the clock
- Pagination: Page request and page result types

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
