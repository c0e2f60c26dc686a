import pytest
from kubernetes.client.rest import ApiException

from pg_sandbox.config import Settings


def _api_error(status: int, reason: str = "") -> ApiException:
    return ApiException(status=status, reason=reason or f"HTTP {status}")


class RecordingKubeClient:
    """In-memory stand-in for KubeClient that records every call in order."""

    def __init__(self):
        self.calls = []
        self.deployments = {}
        self.services = {}
        self.replica_sets = {}
        self.fail = {}  # method name -> exception to raise

    def _record(self, method, *args):
        self.calls.append((method, *args))
        if method in self.fail:
            raise self.fail[method]

    def get_deployment(self, namespace, name):
        self._record("get_deployment", namespace, name)
        return self.deployments.get((namespace, name))

    def create_deployment(self, namespace, body):
        self._record("create_deployment", namespace, body)
        self.deployments[(namespace, body.metadata.name)] = body
        return body

    def update_deployment(self, namespace, body):
        self._record("update_deployment", namespace, body)
        key = (namespace, body.metadata.name)
        if key not in self.deployments:
            raise _api_error(404, "Not Found")
        self.deployments[key] = body
        return body

    def delete_deployment(self, namespace, name):
        self._record("delete_deployment", namespace, name)
        if self.deployments.pop((namespace, name), None) is None:
            raise _api_error(404, "Not Found")

    def get_service(self, namespace, name):
        self._record("get_service", namespace, name)
        return self.services.get((namespace, name))

    def create_service(self, namespace, body):
        self._record("create_service", namespace, body)
        self.services[(namespace, body.metadata.name)] = body
        return body

    def delete_service(self, namespace, name):
        self._record("delete_service", namespace, name)
        if self.services.pop((namespace, name), None) is None:
            raise _api_error(404, "Not Found")

    def get_replica_set(self, namespace, name):
        self._record("get_replica_set", namespace, name)
        return self.replica_sets.get((namespace, name))

    def delete_replica_set(self, namespace, name):
        self._record("delete_replica_set", namespace, name)
        if self.replica_sets.pop((namespace, name), None) is None:
            raise _api_error(404, "Not Found")

    def methods(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def api_error():
    """Factory for ApiException with a given HTTP status."""
    return _api_error


@pytest.fixture
def kube():
    return RecordingKubeClient()


@pytest.fixture
def test_settings():
    return Settings(_env_file=None)
