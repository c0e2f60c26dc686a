"""
Adapters from sandbox specs to Kubernetes API objects.
"""
from kubernetes import client

from pg_sandbox.kube_types import EndpointSpec, WorkloadSpec


def to_deployment(spec: WorkloadSpec) -> client.V1Deployment:
    """Build the full V1Deployment for a workload spec."""
    container = client.V1Container(
        name=spec.name,
        image=spec.image,
        image_pull_policy=spec.image_pull_policy,
        env=[client.V1EnvVar(name=k, value=v) for k, v in spec.env.items()],
        ports=[
            client.V1ContainerPort(name=p.name, container_port=p.port, protocol=p.protocol)
            for p in spec.ports
        ],
        volume_mounts=[
            client.V1VolumeMount(name=m.name, mount_path=m.mount_path)
            for m in spec.volume_mounts
        ],
    )

    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels),
        ),
        spec=client.V1DeploymentSpec(
            replicas=spec.replicas,
            selector=client.V1LabelSelector(match_labels=dict(spec.labels)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=dict(spec.labels)),
                spec=client.V1PodSpec(
                    containers=[container],
                    volumes=[
                        client.V1Volume(name=v.name, empty_dir=client.V1EmptyDirVolumeSource())
                        for v in spec.volumes
                    ],
                ),
            ),
        ),
    )


def scaled_to_zero(name: str, deployment: client.V1Deployment | None = None) -> client.V1Deployment:
    """
    Return a deployment with replicas set to 0.

    When nothing was fetched, a skeleton carrying only the name is returned so
    the update can still be attempted.
    """
    if deployment is None or deployment.spec is None:
        return client.V1Deployment(
            metadata=client.V1ObjectMeta(name=name),
            spec=client.V1DeploymentSpec(
                replicas=0,
                selector=client.V1LabelSelector(),
                template=client.V1PodTemplateSpec(),
            ),
        )
    deployment.spec.replicas = 0
    return deployment


def to_service(spec: EndpointSpec) -> client.V1Service:
    """Build the V1Service for an endpoint spec."""
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels),
        ),
        spec=client.V1ServiceSpec(
            selector=dict(spec.selector),
            ports=[
                client.V1ServicePort(
                    name=p.name,
                    port=p.port,
                    target_port=p.target_port if p.target_port is not None else p.port,
                    protocol=p.protocol,
                )
                for p in spec.ports
            ],
            type=spec.type,
        ),
    )
