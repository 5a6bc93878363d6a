"""
Google Cloud documentation tools exposed over MCP
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..docs.service import DocsService
from .decorators import tool

logger = logging.getLogger(__name__)

_service: Optional[DocsService] = None


def get_docs_service() -> DocsService:
    """The process-wide service, built from environment settings on first use"""
    global _service
    if _service is None:
        _service = DocsService()
        logger.debug(f"Docs service created for {_service.settings.docs_base_url}")
    return _service


def set_docs_service(service: Optional[DocsService]) -> None:
    """Replace the process-wide service; ``None`` rebuilds it lazily"""
    global _service
    _service = service


class FetchDocInput(BaseModel):
    path: str = Field(
        description=(
            "The documentation path after cloud.google.com/ (e.g., "
            "'compute/docs/instances/create-start-instance', 'storage/docs/creating-buckets')"
        )
    )

    @field_validator("path")
    @classmethod
    def path_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("path must not be empty")
        return value


class SearchDocsInput(BaseModel):
    query: str = Field(
        description=(
            "Free-form search query in natural language (e.g., 'how to share encrypted "
            "bucket cross account', 'vpc peering between projects', 'cloud sql high availability')"
        )
    )
    product: Optional[str] = Field(
        default=None,
        description=(
            "Optional: Filter by Google Cloud product (e.g., 'compute', 'storage', "
            "'bigquery', 'kubernetes', 'sql', 'run')"
        ),
    )

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be empty")
        return value


class ListProductsInput(BaseModel):
    pass


class ApiReferenceInput(BaseModel):
    service: str = Field(
        description=(
            "The Google Cloud service name (e.g., 'compute', 'storage', 'bigquery', "
            "'pubsub', 'sql', 'kubernetes', 'functions', 'run', 'iam')"
        )
    )
    resource: Optional[str] = Field(
        default=None,
        description="Optional: Specific API resource (e.g., 'instances', 'buckets', 'datasets', 'topics')",
    )


FETCH_DOC_DESCRIPTION = """\
Fetch and extract content from a specific Google Cloud documentation page.

**WHEN TO USE**: Use this tool when you already know the exact documentation path you need, \
or when you want to get detailed content from a specific GCP documentation page.

**INPUT**: Documentation path after cloud.google.com/ \
(e.g., 'compute/docs/instances/create-start-instance', 'storage/docs/creating-buckets')

**OUTPUT**: Returns JSON with:
- title: Page title
- url: Full URL
- content: Markdown-formatted documentation content (max 20,000 chars)
- contentLength: Total content length
- truncated: Whether content was truncated

**COMMON PATHS**:
- Compute: compute/docs/instances/create-start-instance
- Storage: storage/docs/creating-buckets, storage/docs/encryption
- BigQuery: bigquery/docs/partitioned-tables, bigquery/docs/clustered-tables
- Cloud SQL: sql/docs/high-availability, sql/docs/replication
- GKE: kubernetes-engine/docs/how-to/cluster-autoscaler
- IAM: iam/docs/understanding-roles, iam/docs/service-accounts
- VPC: vpc/docs/vpc-peering, vpc/docs/shared-vpc
- Cloud Run: run/docs/configuring/environment-variables

**TIP**: If you don't know the exact path, use 'search_google_cloud_docs' first \
to find relevant documentation."""

SEARCH_DOCS_DESCRIPTION = """\
Search Google Cloud documentation with any free-form query. \
Returns relevant documentation with actual content.

**WHEN TO USE**: Use this tool when the user asks about Google Cloud Platform (GCP) services, \
configurations, best practices, or how-to questions. This is the primary tool for GCP-related queries.

**TRIGGERS**:
- Any GCP service (Compute Engine, Cloud Storage, BigQuery, Cloud SQL, GKE, Cloud Run, IAM, VPC)
- Configuration questions ("how to configure...", "how to setup...")
- Troubleshooting GCP issues
- Security, encryption and permissions in GCP
- Networking in GCP (VPC, peering, firewall, load balancer)
- Database configurations (Cloud SQL HA, replicas, backups)
- Container orchestration (GKE autoscaling, node pools)
- Serverless (Cloud Run, Cloud Functions environment variables)

**INPUT**:
- query (required): Free-form search query in natural language
- product (optional): Filter by specific GCP product

**EXAMPLE QUERIES**:
- "how to share encrypted bucket cross account"
- "vpc peering between two projects"
- "cloud sql high availability setup"
- "gke autoscaling configuration"
- "bigquery partition table"
- "cloud run environment variables"
- "iam service account impersonation"

**OUTPUT**: Returns JSON with:
- query: Original search query
- product: Product filter, "all" when none was given
- totalResults: Number of results found
- results: Array of top 3 docs with full content (title, url, content)
- otherRelatedDocs: Additional related documentation URLs

**SUPPORTED TOPICS** (80+ keyword mappings):
- Storage & Encryption: encrypt, bucket, cmek, kms, customer managed, object storage
- IAM & Security: iam, role, service account, impersonation, workload identity
- Networking: vpc, peering, shared vpc, firewall, load balancer, dns, nat, private access
- Database: cloud sql, high availability, mysql, postgres, replica, failover
- BigQuery: partition, cluster, materialized view, schedule
- GKE: gke, autoscaling, node pool, horizontal pod autoscaler, helm
- Serverless: cloud run, environment variable, cloud function, deploy
- Container: docker, artifact registry, cloud build
- Pub/Sub: pubsub, topic, subscription
- Data Processing: dataflow, dataproc, composer, airflow, spark
- Monitoring: logging, monitoring, metric, alert, dashboard, trace
- Infrastructure: terraform, deployment manager, gcloud"""

LIST_PRODUCTS_DESCRIPTION = """\
List all available Google Cloud products with their documentation paths.

**WHEN TO USE**:
- User wants to see what GCP services are available
- You need to find the correct product ID for other tools
- User asks "what GCP services are there?" or similar

**OUTPUT**: Returns JSON with:
- totalProducts: Number of products listed
- products: Array of products with id, name, docsPath, docsUrl, description

**PRODUCTS INCLUDED** (20):
- Compute: compute, kubernetes, functions, run
- Storage: storage, firestore, spanner
- Database: sql, bigquery
- AI/ML: ai (Vertex AI), vision, speech, translate
- Networking: vpc, loadbalancing, cdn
- Security: iam
- Messaging: pubsub
- Monitoring: logging, monitoring

**TIP**: Use the returned 'docsPath' with 'fetch_google_cloud_doc' to get detailed documentation."""

API_REFERENCE_DESCRIPTION = """\
Get REST API reference documentation for a specific Google Cloud service.

**WHEN TO USE**:
- User needs API endpoints, methods, or parameters
- User is developing integrations with GCP APIs
- User needs to know available API resources for a service

**INPUT**:
- service (required): GCP service name (compute, storage, bigquery, pubsub, sql, kubernetes, functions, run, iam)
- resource (optional): Specific API resource (instances, buckets, datasets, topics, etc.)

**SUPPORTED SERVICES & RESOURCES**:
- compute: instances, disks, networks, firewalls, images, machineTypes
- storage: buckets, objects, notifications
- bigquery: datasets, tables, jobs, routines
- pubsub: topics, subscriptions, snapshots
- sql: instances, databases, users, backupRuns
- kubernetes: clusters, nodePools, operations
- functions: functions, operations, locations
- run: services, configurations, routes, revisions
- iam: roles, serviceAccounts, policies

**OUTPUT**: Returns JSON with:
- service: Service name
- description: Service description
- apiReferenceUrl: Full URL to API reference
- availableResources: List of available resources for this service
- documentation: Content of the selected resource page when a resource is given,
  otherwise of the REST reference root (if available)
- fetchCommand, fetchError: Present instead of documentation when the page could not be fetched

**EXAMPLE USAGE**:
- Get Compute Engine API overview: service="compute"
- Get Storage buckets API: service="storage", resource="buckets"
- Get BigQuery datasets API: service="bigquery", resource="datasets\""""


@tool(
    name="fetch_google_cloud_doc",
    description=FETCH_DOC_DESCRIPTION,
    input_model=FetchDocInput,
)
async def fetch_google_cloud_doc(path: str) -> dict[str, Any]:
    outcome = await get_docs_service().fetch_doc(path)
    return outcome.to_payload()


@tool(
    name="search_google_cloud_docs",
    description=SEARCH_DOCS_DESCRIPTION,
    input_model=SearchDocsInput,
)
async def search_google_cloud_docs(query: str, product: Optional[str] = None) -> dict[str, Any]:
    report = await get_docs_service().search_docs(query, product)
    return report.to_payload()


@tool(
    name="list_google_cloud_products",
    description=LIST_PRODUCTS_DESCRIPTION,
    input_model=ListProductsInput,
)
def list_google_cloud_products() -> dict[str, Any]:
    return get_docs_service().list_products()


@tool(
    name="get_api_reference",
    description=API_REFERENCE_DESCRIPTION,
    input_model=ApiReferenceInput,
)
async def get_api_reference(service: str, resource: Optional[str] = None) -> dict[str, Any]:
    return await get_docs_service().get_api_reference(service, resource)
