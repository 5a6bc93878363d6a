"""
Static reference data: products, keyword routing and REST API tables.

Everything here is read-only and built once at import time.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Product:
    name: str
    docs_path: str
    description: str


@dataclass(frozen=True)
class ApiReference:
    rest_path: str
    resources: tuple[str, ...]


PRODUCTS: Mapping[str, Product] = MappingProxyType({
    "compute": Product("Compute Engine", "compute/docs", "Virtual machines and infrastructure"),
    "storage": Product("Cloud Storage", "storage/docs", "Object storage service"),
    "bigquery": Product("BigQuery", "bigquery/docs", "Data warehouse and analytics"),
    "kubernetes": Product("Google Kubernetes Engine", "kubernetes-engine/docs", "Managed Kubernetes service"),
    "functions": Product("Cloud Functions", "functions/docs", "Serverless compute platform"),
    "run": Product("Cloud Run", "run/docs", "Serverless containers"),
    "pubsub": Product("Pub/Sub", "pubsub/docs", "Messaging and event ingestion"),
    "sql": Product("Cloud SQL", "sql/docs", "Managed relational databases"),
    "firestore": Product("Firestore", "firestore/docs", "NoSQL document database"),
    "spanner": Product("Cloud Spanner", "spanner/docs", "Globally distributed database"),
    "ai": Product("Vertex AI", "vertex-ai/docs", "Machine learning platform"),
    "vision": Product("Cloud Vision", "vision/docs", "Image analysis API"),
    "speech": Product("Cloud Speech-to-Text", "speech-to-text/docs", "Speech recognition API"),
    "translate": Product("Cloud Translation", "translate/docs", "Translation API"),
    "iam": Product("IAM", "iam/docs", "Identity and Access Management"),
    "vpc": Product("VPC", "vpc/docs", "Virtual Private Cloud networking"),
    "loadbalancing": Product("Cloud Load Balancing", "load-balancing/docs", "Global load balancing"),
    "cdn": Product("Cloud CDN", "cdn/docs", "Content delivery network"),
    "logging": Product("Cloud Logging", "logging/docs", "Log management and analysis"),
    "monitoring": Product("Cloud Monitoring", "monitoring/docs", "Infrastructure monitoring"),
})

# Keyword substring -> documentation paths. Every keyword found in a query
# contributes all of its paths; order here is the order paths are proposed.
TOPIC_PATHS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    # Storage & encryption
    "encrypt": ("storage/docs/encryption", "kms/docs", "storage/docs/encryption/customer-managed-keys"),
    "customer managed": ("storage/docs/encryption/customer-managed-keys", "kms/docs/cmek"),
    "share": ("storage/docs/access-control", "iam/docs/granting-changing-revoking-access"),
    "cross account": ("iam/docs/granting-changing-revoking-access", "storage/docs/access-control/cross-project"),
    "cross project": ("storage/docs/access-control/cross-project", "iam/docs/granting-changing-revoking-access"),
    "bucket": ("storage/docs/creating-buckets", "storage/docs/access-control", "storage/docs"),
    "object storage": ("storage/docs", "storage/docs/objects"),
    "permission": ("iam/docs/understanding-roles", "iam/docs/granting-changing-revoking-access"),
    # IAM & security
    "iam": ("iam/docs", "iam/docs/understanding-roles"),
    "role": ("iam/docs/understanding-roles", "iam/docs/creating-custom-roles"),
    "kms": ("kms/docs", "kms/docs/quickstart"),
    "cmek": ("storage/docs/encryption/customer-managed-keys", "kms/docs/cmek"),
    "service account": ("iam/docs/service-accounts", "iam/docs/creating-managing-service-accounts"),
    "impersonat": ("iam/docs/service-account-impersonation", "iam/docs/impersonating-service-accounts"),
    "workload": ("iam/docs/workload-identity-federation", "kubernetes-engine/docs/how-to/workload-identity"),
    # Networking
    "vpc": ("vpc/docs", "vpc/docs/shared-vpc", "vpc/docs/vpc-peering"),
    "peering": ("vpc/docs/vpc-peering", "vpc/docs/using-vpc-peering"),
    "shared vpc": ("vpc/docs/shared-vpc", "vpc/docs/provisioning-shared-vpc"),
    "firewall": ("vpc/docs/firewalls", "vpc/docs/using-firewalls"),
    "load balancer": ("load-balancing/docs", "load-balancing/docs/load-balancing-overview"),
    "ingress": ("kubernetes-engine/docs/concepts/ingress", "load-balancing/docs/https"),
    "ssl": ("load-balancing/docs/ssl-certificates", "certificate-manager/docs"),
    "dns": ("dns/docs", "dns/docs/overview"),
    "private access": ("vpc/docs/private-google-access", "vpc/docs/configure-private-google-access"),
    "private service": ("vpc/docs/private-service-connect", "vpc/docs/configure-private-service-connect-services"),
    "nat": ("vpc/docs/nat-service", "vpc/docs/using-nat"),
    # Cloud SQL
    "cloud sql": ("sql/docs", "sql/docs/introduction"),
    "high availability": ("sql/docs/high-availability", "sql/docs/configure-ha"),
    "ha": ("sql/docs/high-availability", "sql/docs/configure-ha"),
    "mysql": ("sql/docs/mysql", "sql/docs/mysql/quickstart"),
    "postgres": ("sql/docs/postgres", "sql/docs/postgres/quickstart"),
    "sql server": ("sql/docs/sqlserver", "sql/docs/sqlserver/quickstart"),
    "replica": ("sql/docs/replication", "sql/docs/mysql/replication/create-replica"),
    "failover": ("sql/docs/high-availability", "sql/docs/configure-ha"),
    "read replica": ("sql/docs/replication", "sql/docs/mysql/replication"),
    "point in time": ("sql/docs/backup-recovery/pitr", "sql/docs/mysql/backup-recovery/pitr"),
    # BigQuery
    "bigquery": ("bigquery/docs", "bigquery/docs/introduction"),
    "partition": ("bigquery/docs/partitioned-tables", "bigquery/docs/creating-partitioned-tables"),
    "cluster": ("bigquery/docs/clustered-tables", "bigquery/docs/creating-clustered-tables"),
    "materialized view": ("bigquery/docs/materialized-views-intro", "bigquery/docs/materialized-views-create"),
    "schedule": ("bigquery/docs/scheduling-queries", "bigquery/docs/scheduled-queries"),
    # GKE
    "gke": ("kubernetes-engine/docs", "kubernetes-engine/docs/concepts/kubernetes-engine-overview"),
    "kubernetes": ("kubernetes-engine/docs", "kubernetes-engine/docs/quickstart"),
    "autoscal": ("kubernetes-engine/docs/concepts/cluster-autoscaler", "kubernetes-engine/docs/how-to/cluster-autoscaler"),
    "node pool": ("kubernetes-engine/docs/concepts/node-pools", "kubernetes-engine/docs/how-to/node-pools"),
    "horizontal pod": ("kubernetes-engine/docs/concepts/horizontalpodautoscaler", "kubernetes-engine/docs/how-to/horizontal-pod-autoscaling"),
    "helm": ("kubernetes-engine/docs/how-to/deploying-workloads-using-helm",),
    # Serverless
    "cloud run": ("run/docs", "run/docs/quickstarts"),
    "environment variable": ("run/docs/configuring/environment-variables", "functions/docs/configuring/env-var"),
    "cloud function": ("functions/docs", "functions/docs/quickstart"),
    "app engine": ("appengine/docs", "appengine/docs/standard"),
    "deploy": ("run/docs/deploying", "functions/docs/deploy", "kubernetes-engine/docs/deploy-app-cluster"),
    # Containers & artifacts
    "container": ("run/docs", "kubernetes-engine/docs", "artifact-registry/docs"),
    "docker": ("artifact-registry/docs/docker", "cloud-build/docs/building/build-containers"),
    "artifact registry": ("artifact-registry/docs", "artifact-registry/docs/docker"),
    "container registry": ("container-registry/docs",),
    "cloud build": ("cloud-build/docs", "cloud-build/docs/quickstart-build"),
    # Secrets & config
    "secret": ("secret-manager/docs", "secret-manager/docs/quickstart"),
    "secret manager": ("secret-manager/docs", "secret-manager/docs/creating-and-accessing-secrets"),
    "config": ("runtime-config/docs", "deployment-manager/docs"),
    # Pub/Sub
    "pubsub": ("pubsub/docs", "pubsub/docs/overview"),
    "pub/sub": ("pubsub/docs", "pubsub/docs/overview"),
    "topic": ("pubsub/docs/create-topic", "pubsub/docs/admin"),
    "subscription": ("pubsub/docs/subscriber", "pubsub/docs/create-subscription"),
    # Data processing
    "dataflow": ("dataflow/docs", "dataflow/docs/quickstarts"),
    "dataproc": ("dataproc/docs", "dataproc/docs/quickstarts"),
    "composer": ("composer/docs", "composer/docs/quickstart"),
    "airflow": ("composer/docs", "composer/docs/concepts/airflow"),
    "spark": ("dataproc/docs/spark", "dataproc/docs/concepts/spark"),
    # Monitoring & logging
    "logging": ("logging/docs", "logging/docs/view/overview"),
    "log": ("logging/docs", "logging/docs/view/logs-viewer-interface"),
    "monitoring": ("monitoring/docs", "monitoring/docs/monitoring-overview"),
    "metric": ("monitoring/docs/metrics", "monitoring/docs/custom-metrics"),
    "alert": ("monitoring/docs/alerting", "monitoring/docs/alerting/policies"),
    "dashboard": ("monitoring/docs/dashboards", "monitoring/docs/dashboards/build-dashboards"),
    "trace": ("trace/docs", "trace/docs/quickstart"),
    # Infrastructure
    "terraform": ("docs/terraform", "docs/terraform/quickstart"),
    "deployment manager": ("deployment-manager/docs",),
    "gcloud": ("sdk/gcloud/reference",),
    "cloud shell": ("shell/docs", "shell/docs/quickstart"),
    # Misc
    "backup": ("storage/docs/lifecycle", "sql/docs/backup-recovery/backups"),
    "snapshot": ("compute/docs/disks/create-snapshots", "compute/docs/disks/snapshots"),
    "api": ("apis/docs/overview", "endpoints/docs"),
    "authentication": ("docs/authentication", "iam/docs/authentication"),
    "cloud scheduler": ("scheduler/docs", "scheduler/docs/quickstart"),
    "cloud tasks": ("tasks/docs", "tasks/docs/quickstart"),
    "budget": ("billing/docs/how-to/budgets", "billing/docs/how-to/budgets-programmatic"),
    "cost": ("billing/docs/how-to/export-data-bigquery", "billing/docs/onboarding-checklist"),
})

API_REFERENCES: Mapping[str, ApiReference] = MappingProxyType({
    "compute": ApiReference(
        "compute/docs/reference/rest/v1",
        ("instances", "disks", "networks", "firewalls", "images", "machineTypes"),
    ),
    "storage": ApiReference("storage/docs/json_api/v1", ("buckets", "objects", "notifications")),
    "bigquery": ApiReference("bigquery/docs/reference/rest", ("datasets", "tables", "jobs", "routines")),
    "pubsub": ApiReference("pubsub/docs/reference/rest", ("topics", "subscriptions", "snapshots")),
    "sql": ApiReference(
        "sql/docs/mysql/admin-api/rest/v1",
        ("instances", "databases", "users", "backupRuns"),
    ),
    "kubernetes": ApiReference(
        "kubernetes-engine/docs/reference/rest",
        ("clusters", "nodePools", "operations"),
    ),
    "functions": ApiReference(
        "functions/docs/reference/rest/v2",
        ("functions", "operations", "locations"),
    ),
    "run": ApiReference("run/docs/reference/rest", ("services", "configurations", "routes", "revisions")),
    "iam": ApiReference("iam/docs/reference/rest", ("roles", "serviceAccounts", "policies")),
})


@dataclass(frozen=True)
class DocsCatalog:
    """Read-only lookup tables injected into the resolver and the service"""

    products: Mapping[str, Product] = field(default_factory=lambda: PRODUCTS)
    topics: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: TOPIC_PATHS)
    api_references: Mapping[str, ApiReference] = field(default_factory=lambda: API_REFERENCES)

    def product_paths_for(self, query_lower: str) -> list[str]:
        """Docs paths of products whose id or name occurs in the query."""
        return [
            product.docs_path
            for key, product in self.products.items()
            if key in query_lower or product.name.lower() in query_lower
        ]

    def topic_paths_for(self, query_lower: str) -> list[str]:
        """Paths of every topic keyword occurring in the query."""
        paths: list[str] = []
        for keyword, topic_paths in self.topics.items():
            if keyword in query_lower:
                paths.extend(topic_paths)
        return paths


DEFAULT_CATALOG = DocsCatalog()
