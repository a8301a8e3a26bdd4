"""Application-level exceptions.

These are not domain errors: they describe failures of the collaborators
behind the ports, not violations of business rules.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Raised by a repository adapter when the store itself fails.

    The original driver error is chained as __cause__. Use cases do not catch
    or retry it; retry policy belongs to the store collaborator.
    """
