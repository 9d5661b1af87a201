#!/usr/bin/env python3
"""Demonstration of building GraphQL operations from typed shapes.

This script shows how to:
1. Describe a selection with dataclasses
2. Build queries and mutations with variables
3. Build the JSON payload handed to a transport

Note: This demo doesn't make real API calls - it just prints the
generated operations.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Optional

from gql_shapes.core import (
    EMBED,
    String,
    Var,
    build_mutation,
    build_query,
    build_request,
    graphql_name,
    with_operation_name,
)


@dataclass
class Timestamps:
    created_at: datetime
    updated_at: datetime


@dataclass
class Issue:
    number: int
    title: str
    stamps: Annotated[Timestamps, EMBED]


@dataclass
class Repository:
    name_with_owner: str
    issues: Annotated[list[Issue], graphql_name("issues(first: $first, after: $after)")]


@dataclass
class RepositoryQuery:
    repository: Annotated[Repository, graphql_name("repository(owner: $owner, name: $name)")]


@dataclass
class Starrable:
    id: str
    stargazer_count: int


@dataclass
class AddStarPayload:
    starrable: Starrable


@dataclass
class AddStar:
    add_star: Annotated[AddStarPayload, graphql_name("addStar(input: {starrableId: $id})")]


def main():
    print("=== Typed Shape Demo ===\n")

    variables = {
        "owner": String("octocat"),
        "name": String("Hello-World"),
        "first": 10,
        "after": Var(None, Optional[String]),
    }

    print("1. Query:")
    print(f"   {build_query(RepositoryQuery, variables, with_operation_name('Issues'))}")

    print("\n2. Mutation:")
    print(f"   {build_mutation(AddStar, {'id': 'MDEwOlJlcG9zaXRvcnkxMjk2MjY5'})}")

    print("\n3. Request payload:")
    payload = build_request("query", RepositoryQuery, variables, with_operation_name("Issues"))
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
