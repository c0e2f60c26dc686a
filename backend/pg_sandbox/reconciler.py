"""
Create-if-absent provisioning and best-effort teardown of the sandbox postgres.
"""
import logging
from dataclasses import replace
from typing import Callable

from kubernetes.client.rest import ApiException

from pg_sandbox import adapters
from pg_sandbox.config import Settings, settings as default_settings
from pg_sandbox.errors import ResourceLookupError, ResourceMutationError
from pg_sandbox.kube_client import KubeClient
from pg_sandbox.kube_types import (
    EndpointSpec,
    ReconcileResult,
    WorkloadSpec,
    postgres_endpoint_spec,
    postgres_workload_spec,
)

logger = logging.getLogger(__name__)


class ResourceReconciler:
    """
    Ensures the postgres Deployment and Service exist, and removes them again.

    Holds no state beyond its collaborators. Existing objects are never diffed
    or updated: desired state is applied once, at creation. Two callers racing
    on the same name can both observe "absent"; the API server's conflict
    error on the second create is the only guard.
    """

    def __init__(
        self,
        kube_client: KubeClient,
        settings: Settings | None = None,
        log: logging.Logger | None = None,
    ):
        self.kube_client = kube_client
        self.settings = settings or default_settings
        self.log = log or logger

    def _ensure(
        self,
        kind: str,
        name: str,
        namespace: str,
        get: Callable,
        create: Callable,
        build: Callable,
    ) -> ReconcileResult:
        try:
            existing = get(namespace, name)
        except Exception as e:
            self.log.error(f"❌ Could not get {kind} {namespace}/{name}: {e}")
            return ReconcileResult(False, ResourceLookupError(kind, name, namespace, e))

        if existing is not None:
            self.log.debug(f"{kind} {namespace}/{name} already exists")
            return ReconcileResult(True)

        self.log.info(f"{kind} {namespace}/{name} not found, creating...")
        try:
            create(namespace, build())
        except Exception as e:
            self.log.error(f"❌ Could not create {kind} {namespace}/{name}: {e}")
            return ReconcileResult(False, ResourceMutationError(kind, name, namespace, e))

        self.log.info(f"✅ Created {kind} {namespace}/{name}")
        return ReconcileResult(True, created=True)

    def ensure_workload(self, namespace: str, spec: WorkloadSpec | None = None) -> ReconcileResult:
        """Create the Deployment named by spec in namespace if it does not exist yet."""
        spec = spec or postgres_workload_spec(namespace, self.settings)
        spec = replace(spec, namespace=namespace)
        return self._ensure(
            "deployment",
            spec.name,
            namespace,
            self.kube_client.get_deployment,
            self.kube_client.create_deployment,
            lambda: adapters.to_deployment(spec),
        )

    def ensure_endpoint(self, namespace: str, spec: EndpointSpec | None = None) -> ReconcileResult:
        """Create the Service named by spec in namespace if it does not exist yet."""
        spec = spec or postgres_endpoint_spec(namespace, self.settings)
        spec = replace(spec, namespace=namespace)
        return self._ensure(
            "service",
            spec.name,
            namespace,
            self.kube_client.get_service,
            self.kube_client.create_service,
            lambda: adapters.to_service(spec),
        )

    def provision(self, namespace: str) -> ReconcileResult:
        """Ensure the default workload, then the default endpoint."""
        result = self.ensure_workload(namespace)
        if not result:
            return result
        return self.ensure_endpoint(namespace)

    def _delete(self, kind: str, namespace: str, name: str, delete: Callable) -> None:
        try:
            delete(namespace, name)
        except ApiException as e:
            if e.status == 404:
                self.log.warning(f"{kind} {namespace}/{name} already absent")
            else:
                self.log.error(f"❌ Could not delete {kind} {namespace}/{name}: {e}")
        except Exception as e:
            self.log.error(f"❌ Could not delete {kind} {namespace}/{name}: {e}")
        else:
            self.log.info(f"Deleted {kind}: {namespace}/{name}")

    def _get(self, kind: str, namespace: str, name: str, get: Callable):
        try:
            found = get(namespace, name)
        except Exception as e:
            self.log.error(f"❌ Could not get {kind} {namespace}/{name}: {e}")
            return None
        if found is None:
            self.log.warning(f"{kind} {namespace}/{name} not found")
        return found

    def teardown(self, namespace: str, name: str | None = None) -> None:
        """
        Remove the service, scale the deployment to zero, delete it, then delete
        the replica set sharing its name.

        Every step is attempted regardless of earlier failures; failures are
        logged and never raised.
        """
        name = name or self.settings.PG_NAME
        kc = self.kube_client

        self._delete("service", namespace, name, kc.delete_service)

        deployment = self._get("deployment", namespace, name, kc.get_deployment)

        # Scale to zero before deleting so pods drain instead of being killed.
        try:
            body = adapters.scaled_to_zero(name, deployment)
        except Exception as e:
            self.log.error(f"❌ Could not prepare scale-down of deployment {namespace}/{name}: {e}")
            body = adapters.scaled_to_zero(name)
        try:
            kc.update_deployment(namespace, body)
        except Exception as e:
            self.log.error(f"❌ Could not scale deployment {namespace}/{name}: {e}")
        else:
            self.log.info(f"Scaled deployment {namespace}/{name} to zero")

        self._delete("deployment", namespace, name, kc.delete_deployment)

        self._get("replica set", namespace, name, kc.get_replica_set)
        self._delete("replica set", namespace, name, kc.delete_replica_set)


def build_reconciler(settings: Settings | None = None) -> ResourceReconciler:
    """Create a reconciler with a KubeClient configured from settings."""
    s = settings or default_settings
    kube_client = KubeClient(in_cluster=s.K8S_IN_CLUSTER, context=s.K8S_CONTEXT)
    return ResourceReconciler(kube_client, settings=s)
