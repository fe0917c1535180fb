"""Exception hierarchy for tree-seeder.

All exceptions raised by the package inherit from TreeSeederError. Failures
coming from a store backend's own save/delete are propagated unchanged.
"""


class TreeSeederError(Exception):
    """Base exception for all tree-seeder errors."""


class SeedingRequiredError(TreeSeederError):
    """Raised when an operation needs a materialized tree but got a template."""


class FieldPathError(TreeSeederError, ValueError):
    """Raised when a field path declaration is malformed."""


class StoreError(TreeSeederError):
    """Raised by the bundled store backends for store-level failures."""
