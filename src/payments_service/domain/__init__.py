"""Domain layer - Core business logic, entities, and rules.

This layer contains:
- Entities: Objects with identity and lifecycle (e.g., Payment)
- Value Objects: Immutable objects defined by their attributes (e.g., Money, Metadata)
- Lifecycle types: Transient vs Persisted identity (see entities.base)
- Domain Exceptions: Business rule violations

The domain layer has NO dependencies on external frameworks or infrastructure.
"""
