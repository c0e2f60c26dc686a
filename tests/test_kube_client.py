from unittest.mock import MagicMock, patch

import pytest
from kubernetes import client
from kubernetes.client.rest import ApiException

from pg_sandbox import adapters
from pg_sandbox.kube_client import KubeClient


@pytest.fixture
def apis():
    return MagicMock(spec=client.AppsV1Api), MagicMock(spec=client.CoreV1Api)


@pytest.fixture
def kube_client(apis):
    apps, core = apis
    return KubeClient(apps_api=apps, core_api=core)


def test_get_deployment_not_found_returns_none(kube_client, apis, api_error):
    apps, _ = apis
    apps.read_namespaced_deployment.side_effect = api_error(404)

    assert kube_client.get_deployment("default", "postgres") is None
    apps.read_namespaced_deployment.assert_called_once_with(name="postgres", namespace="default")


def test_get_service_other_errors_raise(kube_client, apis, api_error, caplog):
    _, core = apis
    core.read_namespaced_service.side_effect = api_error(500)

    with pytest.raises(ApiException):
        kube_client.get_service("default", "postgres")
    assert caplog.records == []


def test_get_replica_set_returns_object(kube_client, apis):
    apps, _ = apis
    rs = client.V1ReplicaSet(
        metadata=client.V1ObjectMeta(name="postgres"),
        spec=client.V1ReplicaSetSpec(selector=client.V1LabelSelector(match_labels={"app": "postgres"})),
    )
    apps.read_namespaced_replica_set.return_value = rs

    assert kube_client.get_replica_set("default", "postgres") is rs


def test_update_uses_body_name(kube_client, apis):
    apps, _ = apis
    body = adapters.scaled_to_zero("postgres")

    kube_client.update_deployment("default", body)

    apps.replace_namespaced_deployment.assert_called_once_with(name="postgres", namespace="default", body=body)


def test_deletes_send_delete_options(kube_client, apis):
    apps, core = apis

    kube_client.delete_service("default", "postgres")
    kube_client.delete_deployment("default", "postgres")
    kube_client.delete_replica_set("default", "postgres")

    for method in (
        core.delete_namespaced_service,
        apps.delete_namespaced_deployment,
        apps.delete_namespaced_replica_set,
    ):
        kwargs = method.call_args.kwargs
        assert kwargs["name"] == "postgres"
        assert kwargs["namespace"] == "default"
        assert isinstance(kwargs["body"], client.V1DeleteOptions)


def test_loads_kube_config_with_context():
    with patch("pg_sandbox.kube_client.config") as kube_config, \
            patch("pg_sandbox.kube_client.client.AppsV1Api"), \
            patch("pg_sandbox.kube_client.client.CoreV1Api"):
        KubeClient(in_cluster=False, context="kind-sandbox")

    kube_config.load_kube_config.assert_called_once_with(context="kind-sandbox")
    kube_config.load_incluster_config.assert_not_called()


def test_config_failure_is_raised():
    with patch("pg_sandbox.kube_client.config") as kube_config:
        kube_config.load_incluster_config.side_effect = RuntimeError("no service account")
        with pytest.raises(RuntimeError):
            KubeClient(in_cluster=True)


def test_defaults_to_kube_config_outside_cluster():
    with patch("pg_sandbox.kube_client.config") as kube_config, \
            patch("pg_sandbox.kube_client.client.AppsV1Api"), \
            patch("pg_sandbox.kube_client.client.CoreV1Api"):
        kube_client = KubeClient()

    assert kube_client.in_cluster is False
    kube_config.load_kube_config.assert_called_once_with()
    kube_config.load_incluster_config.assert_not_called()
