"""Catalog of SUBJCT API endpoints exposed as MCP tools.

Every tool is declared once here, so the tool listing and the call dispatch
always agree on which names exist.
"""

import logging
from typing import Dict, Iterable, List

from mcp import types as mcp_types

from .errors import UnknownToolError
from .models import BodySource, EndpointSpec, HTTPMethod

ORGANISATION_ID = {"type": "string", "description": "Organisation ID"}
PROPERTY_ID = {"type": "string", "description": "Property ID"}
ARTICLE_ID = {"type": "string", "description": "Article ID"}
SEARCH_QUERY = {"type": "string", "description": "Search query"}
RESULT_SIZE = {"type": "integer", "description": "Number of results"}
RESULT_FROM = {"type": "integer", "description": "Offset for pagination"}


def _object_schema(properties: dict, required: Iterable[str] = ()) -> dict:
    schema = {"type": "object", "properties": properties}
    required = list(required)
    if required:
        schema["required"] = required
    return schema


def _article_schema(**extra) -> dict:
    return _object_schema(
        {
            "organisationId": ORGANISATION_ID,
            "propertyId": PROPERTY_ID,
            "articleId": ARTICLE_ID,
            **extra,
        },
        ["organisationId", "propertyId", "articleId", *extra],
    )


ARTICLE_INPUT = _object_schema(
    {
        "externalId": {"type": "string", "description": "External ID"},
        "url": {"type": "string", "description": "Article URL"},
        "title": {"type": "string", "description": "Article title"},
        "content": {"type": "string", "description": "Article content"},
        "html": {"type": "string", "description": "Article HTML"},
        "datePublished": {"type": "string", "description": "Publication date"},
        "language": {"type": "string", "description": "Article language"},
        "authors": {
            "type": "array",
            "items": _object_schema({
                "name": {"type": "string"},
                "url": {"type": "string"},
            }),
        },
        "images": {
            "type": "array",
            "items": _object_schema({
                "title": {"type": "string"},
                "alt": {"type": "string"},
                "url": {"type": "string"},
            }),
        },
    },
    ["url", "title", "content"],
)

ARTICLE_UPDATE = _object_schema({
    "title": {"type": "string", "description": "Article title"},
    "content": {"type": "string", "description": "Article content"},
    "html": {"type": "string", "description": "Article HTML"},
    "url": {"type": "string", "description": "Article URL"},
})

TOPIC_INPUT = _object_schema(
    {
        "externalId": {"type": "string", "description": "External ID"},
        "url": {"type": "string", "description": "Topic URL"},
        "text": {"type": "string", "description": "Topic text"},
    },
    ["url", "text"],
)

PROPERTY_INPUT = _object_schema({
    "target": _object_schema({
        "name": {"type": "string"},
        "url": {"type": "string"},
        "type": {"type": "string"},
    }),
})


ENDPOINTS = (
    # Authentication
    EndpointSpec(
        name="login",
        description="Login to SUBJCT API with email and password",
        method=HTTPMethod.POST,
        path="/auth/login",
        input_schema=_object_schema(
            {
                "email": {"type": "string", "format": "email", "description": "User email"},
                "password": {"type": "string", "description": "User password"},
            },
            ["email", "password"],
        ),
        body_source=BodySource.FIELDS,
        body_fields=("email", "password"),
    ),
    EndpointSpec(
        name="signup",
        description="Sign up for SUBJCT API",
        method=HTTPMethod.POST,
        path="/auth/signup",
        input_schema=_object_schema(
            {
                "email": {"type": "string", "format": "email", "description": "User email"},
                "password": {"type": "string", "description": "User password"},
                "orgName": {"type": "string", "description": "Organisation name (for new org)"},
                "orgId": {"type": "string", "description": "Organisation ID (to join existing org)"},
            },
            ["email", "password"],
        ),
        body_source=BodySource.FIELDS,
        body_fields=("email", "password", "orgName", "orgId"),
    ),

    # Organisation
    EndpointSpec(
        name="get_organisation",
        description="Get organisation information",
        method=HTTPMethod.GET,
        path="/org",
    ),
    EndpointSpec(
        name="get_organisation_users",
        description="Get list of users in the organisation",
        method=HTTPMethod.GET,
        path="/org/users",
        input_schema=_object_schema({
            "page": {"type": "integer", "default": 1, "description": "Page number"},
            "size": {"type": "integer", "default": 20, "description": "Page size"},
        }),
        query_fields=("page", "size"),
    ),

    # Search
    EndpointSpec(
        name="search_articles",
        description="Search for articles",
        method=HTTPMethod.POST,
        path="/search/articles",
        scope_field="organisationId",
        scoped_path="/search/{organisationId}/articles",
        input_schema=_object_schema(
            {
                "query": SEARCH_QUERY,
                "properties": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Property IDs to search in",
                },
                "size": RESULT_SIZE,
                "from": RESULT_FROM,
                "organisationId": {"type": "string", "description": "Organisation ID (optional)"},
            },
            ["query"],
        ),
        body_source=BodySource.FIELDS,
        body_fields=("query", "properties", "size", "from"),
    ),
    EndpointSpec(
        name="search_topics_in_property",
        description="Search for topics in a specific property",
        method=HTTPMethod.POST,
        path="/search/{organisationId}/{propertyId}/topics",
        input_schema=_object_schema(
            {
                "organisationId": ORGANISATION_ID,
                "propertyId": PROPERTY_ID,
                "query": SEARCH_QUERY,
                "size": RESULT_SIZE,
                "from": RESULT_FROM,
            },
            ["organisationId", "propertyId", "query"],
        ),
        body_source=BodySource.FIELDS,
        body_fields=("query", "size", "from"),
    ),
    EndpointSpec(
        name="search_article_by_url",
        description="Search for article by URL",
        method=HTTPMethod.POST,
        path="/search/{organisationId}/{propertyId}/articles",
        input_schema=_object_schema(
            {
                "organisationId": ORGANISATION_ID,
                "propertyId": PROPERTY_ID,
                "url": {"type": "string", "description": "Article URL"},
            },
            ["organisationId", "propertyId", "url"],
        ),
        body_source=BodySource.FIELDS,
        body_fields=("url",),
    ),

    # Articles
    EndpointSpec(
        name="add_article",
        description="Add a new article to a property",
        method=HTTPMethod.POST,
        path="/ingest/{organisationId}/{propertyId}/article",
        input_schema=_object_schema(
            {
                "organisationId": ORGANISATION_ID,
                "propertyId": PROPERTY_ID,
                "article": ARTICLE_INPUT,
            },
            ["organisationId", "propertyId", "article"],
        ),
        use_secret_key=True,
        body_source=BodySource.ARGUMENT,
        body_argument="article",
    ),
    EndpointSpec(
        name="get_article_with_analysis",
        description="Get article with analysis and links",
        method=HTTPMethod.GET,
        path="/article/{organisationId}/{propertyId}/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="update_article",
        description="Update an existing article",
        method=HTTPMethod.PUT,
        path="/article/{organisationId}/{propertyId}/{articleId}",
        input_schema=_article_schema(article=ARTICLE_UPDATE),
        use_secret_key=True,
        body_source=BodySource.ARGUMENT,
        body_argument="article",
    ),
    EndpointSpec(
        name="get_similar_articles",
        description="Get articles similar to a given article",
        method=HTTPMethod.GET,
        path="/article/{organisationId}/{propertyId}/{articleId}/similar_articles",
        input_schema=_article_schema(),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="autolink_article",
        description="Trigger auto-linking process for an article",
        method=HTTPMethod.POST,
        path="/autolink/{organisationId}/{propertyId}/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
        empty_response_text="Auto-linking triggered successfully",
    ),

    # Topics
    EndpointSpec(
        name="add_topic",
        description="Add a new topic to a property",
        method=HTTPMethod.POST,
        path="/ingest/{organisationId}/{propertyId}/topic",
        input_schema=_object_schema(
            {
                "organisationId": ORGANISATION_ID,
                "propertyId": PROPERTY_ID,
                "topic": TOPIC_INPUT,
            },
            ["organisationId", "propertyId", "topic"],
        ),
        use_secret_key=True,
        body_source=BodySource.ARGUMENT,
        body_argument="topic",
    ),

    # Properties
    EndpointSpec(
        name="get_properties",
        description="Get all properties for the authenticated organisation",
        method=HTTPMethod.GET,
        path="/property",
    ),
    EndpointSpec(
        name="get_property_by_id",
        description="Get a property by ID",
        method=HTTPMethod.GET,
        path="/property/{id}",
        input_schema=_object_schema({"id": PROPERTY_ID}, ["id"]),
    ),
    EndpointSpec(
        name="create_property",
        description="Create a new property",
        method=HTTPMethod.POST,
        path="/property",
        input_schema=_object_schema({"property": PROPERTY_INPUT}, ["property"]),
        body_source=BodySource.ARGUMENT,
        body_argument="property",
    ),
    EndpointSpec(
        name="create_property_from_url",
        description="Find or create a property for a given URL",
        method=HTTPMethod.POST,
        path="/property/{organisationId}/from/url",
        input_schema=_object_schema(
            {
                "organisationId": ORGANISATION_ID,
                "url": {"type": "string", "description": "URL to create property from"},
            },
            ["organisationId", "url"],
        ),
        use_secret_key=True,
        body_source=BodySource.FIELDS,
        body_fields=("url",),
    ),

    # Metrics
    EndpointSpec(
        name="get_organisation_metrics",
        description="Get organisation-wide metrics",
        method=HTTPMethod.GET,
        path="/metrics/{organisationId}",
        input_schema=_object_schema({"organisationId": ORGANISATION_ID}, ["organisationId"]),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="get_property_metrics",
        description="Get property-level metrics",
        method=HTTPMethod.GET,
        path="/metrics/{organisationId}/{propertyId}",
        input_schema=_object_schema(
            {"organisationId": ORGANISATION_ID, "propertyId": PROPERTY_ID},
            ["organisationId", "propertyId"],
        ),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="get_article_metrics",
        description="Get metrics for a specific article",
        method=HTTPMethod.GET,
        path="/metrics/{organisationId}/{propertyId}/article/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
    ),

    # Analysis
    EndpointSpec(
        name="get_article_analysis",
        description="Get article analysis results",
        method=HTTPMethod.GET,
        path="/analysis/{organisationId}/{propertyId}/article/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="get_article_links",
        description="Get article links results",
        method=HTTPMethod.GET,
        path="/analysis/{organisationId}/{propertyId}/links/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
    ),
    EndpointSpec(
        name="trigger_jsonld_generation",
        description="Trigger JSON-LD generation for an article",
        method=HTTPMethod.POST,
        path="/analysis/{organisationId}/{propertyId}/jsonLd/{articleId}",
        input_schema=_article_schema(),
        use_secret_key=True,
        empty_response_text="JSON-LD generation triggered successfully",
    ),
)


class EndpointCatalog:
    """Name-keyed lookup over a fixed set of endpoint specs

    Listing order follows the order the specs were given in.
    """

    def __init__(self, endpoints: Iterable[EndpointSpec] = ENDPOINTS):
        self.endpoints: Dict[str, EndpointSpec] = {}
        for endpoint in endpoints:
            if endpoint.name in self.endpoints:
                raise ValueError(f"Endpoint '{endpoint.name}' already exists")
            self.endpoints[endpoint.name] = endpoint
        logging.info(f"[EndpointCatalog] Loaded {len(self.endpoints)} endpoints")

    def __contains__(self, name: str) -> bool:
        return name in self.endpoints

    def __len__(self) -> int:
        return len(self.endpoints)

    def get_endpoint(self, name: str) -> EndpointSpec:
        """Look up the endpoint for a tool name

        Raises:
            UnknownToolError: If no endpoint is registered under the name
        """
        try:
            return self.endpoints[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> List[mcp_types.Tool]:
        return [endpoint.to_tool() for endpoint in self.endpoints.values()]


__all__ = [
    "ENDPOINTS",
    "EndpointCatalog",
]
