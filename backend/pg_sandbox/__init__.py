"""
Ephemeral single-replica PostgreSQL for tests, provisioned on Kubernetes.
"""
from pg_sandbox.reconciler import ResourceReconciler, build_reconciler
from pg_sandbox.kube_types import ReconcileResult

__all__ = ["ResourceReconciler", "ReconcileResult", "build_reconciler"]
