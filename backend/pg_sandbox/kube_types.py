"""
Type definitions for the managed Kubernetes objects.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pg_sandbox.config import Settings, settings as default_settings
from pg_sandbox.errors import ReconcileError


@dataclass
class PortSpec:
    """Container or service port."""
    name: str
    port: int
    protocol: str = "TCP"
    target_port: Optional[int] = None  # services only; defaults to port


@dataclass
class VolumeMountSpec:
    name: str
    mount_path: str


@dataclass
class VolumeSpec:
    """Pod volume. Only emptyDir (ephemeral) storage is supported."""
    name: str


@dataclass
class WorkloadSpec:
    """Desired single-container Deployment."""
    name: str
    namespace: str
    image: str
    replicas: int = 1
    image_pull_policy: str = "Always"
    env: Dict[str, str] = field(default_factory=dict)
    ports: List[PortSpec] = field(default_factory=list)
    volume_mounts: List[VolumeMountSpec] = field(default_factory=list)
    volumes: List[VolumeSpec] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.labels:
            self.labels = {"app": self.name}


@dataclass
class EndpointSpec:
    """Desired ClusterIP Service."""
    name: str
    namespace: str
    selector: Dict[str, str]
    ports: List[PortSpec] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    type: str = "ClusterIP"

    def __post_init__(self):
        if not self.labels:
            self.labels = {"name": self.name}


@dataclass
class ReconcileResult:
    """Outcome of a single ensure call."""
    success: bool
    error: Optional[ReconcileError] = None
    created: bool = False

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def postgres_workload_spec(namespace: str, settings: Settings | None = None) -> WorkloadSpec:
    """Build the sandbox postgres Deployment spec from settings."""
    s = settings or default_settings
    return WorkloadSpec(
        name=s.PG_NAME,
        namespace=namespace,
        image=s.PG_IMAGE,
        replicas=s.PG_REPLICAS,
        image_pull_policy=s.PG_IMAGE_PULL_POLICY,
        env={
            "POSTGRES_USER": s.PG_USER,
            "POSTGRES_PASSWORD": s.PG_PASSWORD,
            "POSTGRES_DB": s.PG_DATABASE,
            "PGDATA": s.PG_DATA_DIR,
        },
        ports=[PortSpec(name=s.PG_PORT_NAME, port=s.PG_PORT)],
        volume_mounts=[VolumeMountSpec(name=s.PG_VOLUME_NAME, mount_path=s.PG_MOUNT_PATH)],
        volumes=[VolumeSpec(name=s.PG_VOLUME_NAME)],
    )


def postgres_endpoint_spec(namespace: str, settings: Settings | None = None) -> EndpointSpec:
    """Build the sandbox postgres Service spec; selects the workload's app label."""
    s = settings or default_settings
    return EndpointSpec(
        name=s.PG_NAME,
        namespace=namespace,
        selector={"app": s.PG_NAME},
        ports=[PortSpec(name=s.PG_SERVICE_PORT_NAME, port=s.PG_PORT, target_port=s.PG_PORT)],
    )
