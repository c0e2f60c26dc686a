"""
Errors surfaced by the reconciler.
"""
from typing import Optional


class ReconcileError(Exception):
    """A Kubernetes call made on behalf of a managed resource failed."""

    action = "reconcile"

    def __init__(self, kind: str, name: str, namespace: str, cause: Optional[BaseException] = None):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        self.cause = cause
        super().__init__(f"Could not {self.action} {kind} {namespace}/{name}: {cause}")


class ResourceLookupError(ReconcileError):
    """The existence check itself failed (anything other than not-found)."""

    action = "get"


class ResourceMutationError(ReconcileError):
    """A create/update/delete call failed."""

    action = "mutate"
