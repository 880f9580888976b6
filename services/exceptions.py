class ERPError(Exception):
    """Base class for business-rule violations raised by the services layer."""


class InvalidInput(ERPError, ValueError):
    """A calculator received a value outside its domain (non-positive quantity, negative cost...)."""


class MutationNotAllowed(ERPError):
    """A change was attempted on a record whose state forbids it."""


class InvalidStatusTransition(MutationNotAllowed):
    """A purchase order status change that the workflow does not permit."""
