"""
Licensing Workflow Errors

Failure kinds returned by the workflow use cases. Every error is an
Error(code, message) so routes can branch on the code the same way for
all of them; the class tells callers whether a retry is safe.
"""

from licensing.libs.result import Error


class WorkflowError(Error):
    """Base for all workflow failures"""

    default_code = "WORKFLOW_ERROR"
    retryable = False

    def __init__(self, message: str, code: str = None):
        super().__init__(code or self.default_code, message)


class ValidationError(WorkflowError):
    """Malformed or missing input, rejected before any store access"""

    default_code = "VALIDATION_ERROR"


class NotFoundError(WorkflowError):
    default_code = "APPLICATION_NOT_FOUND"


class IllegalTransitionError(WorkflowError):
    """Action is not legal from the application's current status"""

    default_code = "ILLEGAL_TRANSITION"


class ForbiddenError(WorkflowError):
    """Actor role (or identity) is not authorized for the action"""

    default_code = "FORBIDDEN"


class PersistenceError(WorkflowError):
    """Store failure; nothing was written and the whole call may be retried"""

    default_code = "PERSISTENCE_ERROR"
    retryable = True


class ConcurrentUpdateError(PersistenceError):
    """Another transition advanced the application first"""

    default_code = "CONCURRENT_UPDATE"


class IntegrityError(WorkflowError):
    """
    Stored event chain does not reconcile with the current status.

    Signals data corruption; needs operator intervention, never retried.
    """

    default_code = "INTEGRITY_ERROR"
