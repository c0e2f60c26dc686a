"""
Kubernetes client for the sandbox resources.
"""
import logging
from typing import Optional
from kubernetes import client, config
from kubernetes.client.rest import ApiException

logger = logging.getLogger(__name__)


class KubeClient:
    """Get/create/update/delete for Deployments, Services and ReplicaSets."""

    def __init__(
        self,
        in_cluster: bool = False,
        context: str | None = None,
        apps_api: client.AppsV1Api | None = None,
        core_api: client.CoreV1Api | None = None,
    ):
        """
        Initialize Kubernetes client.

        Args:
            in_cluster: Whether running inside cluster (default: False)
            context: Kubernetes context name (optional)
            apps_api: Preconfigured AppsV1Api; skips config loading when both APIs are given
            core_api: Preconfigured CoreV1Api
        """
        self.in_cluster = in_cluster

        if apps_api is not None and core_api is not None:
            self.apps_v1 = apps_api
            self.v1 = core_api
            return

        try:
            if in_cluster:
                config.load_incluster_config()
            else:
                if context:
                    config.load_kube_config(context=context)
                else:
                    config.load_kube_config()

            self.v1 = core_api or client.CoreV1Api()
            self.apps_v1 = apps_api or client.AppsV1Api()
            logger.info(f"✅ Kubernetes client initialized (in_cluster={in_cluster}, context={context})")

        except Exception as e:
            logger.error(f"❌ Failed to initialize Kubernetes client: {e}")
            raise

    @staticmethod
    def _absent(e: ApiException) -> bool:
        return e.status == 404

    # Deployments

    def get_deployment(self, namespace: str, name: str) -> Optional[client.V1Deployment]:
        """Return the deployment, or None if it does not exist. Other API errors propagate."""
        try:
            return self.apps_v1.read_namespaced_deployment(name=name, namespace=namespace)
        except ApiException as e:
            if self._absent(e):
                return None
            raise

    def create_deployment(self, namespace: str, body: client.V1Deployment) -> client.V1Deployment:
        return self.apps_v1.create_namespaced_deployment(namespace=namespace, body=body)

    def update_deployment(self, namespace: str, body: client.V1Deployment) -> client.V1Deployment:
        return self.apps_v1.replace_namespaced_deployment(
            name=body.metadata.name,
            namespace=namespace,
            body=body,
        )

    def delete_deployment(self, namespace: str, name: str) -> None:
        self.apps_v1.delete_namespaced_deployment(
            name=name,
            namespace=namespace,
            body=client.V1DeleteOptions(),
        )

    # Services

    def get_service(self, namespace: str, name: str) -> Optional[client.V1Service]:
        """Return the service, or None if it does not exist. Other API errors propagate."""
        try:
            return self.v1.read_namespaced_service(name=name, namespace=namespace)
        except ApiException as e:
            if self._absent(e):
                return None
            raise

    def create_service(self, namespace: str, body: client.V1Service) -> client.V1Service:
        return self.v1.create_namespaced_service(namespace=namespace, body=body)

    def delete_service(self, namespace: str, name: str) -> None:
        self.v1.delete_namespaced_service(
            name=name,
            namespace=namespace,
            body=client.V1DeleteOptions(),
        )

    # ReplicaSets

    def get_replica_set(self, namespace: str, name: str) -> Optional[client.V1ReplicaSet]:
        """Return the replica set, or None if it does not exist. Other API errors propagate."""
        try:
            return self.apps_v1.read_namespaced_replica_set(name=name, namespace=namespace)
        except ApiException as e:
            if self._absent(e):
                return None
            raise

    def delete_replica_set(self, namespace: str, name: str) -> None:
        self.apps_v1.delete_namespaced_replica_set(
            name=name,
            namespace=namespace,
            body=client.V1DeleteOptions(),
        )
