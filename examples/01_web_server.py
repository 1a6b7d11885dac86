"""
Web Server Example
==================

This example describes a small EC2 web server with stackdsl. It covers:

1. Declaring resource schemas as Resource subclasses
2. Building nodes through fluent setters
3. Referencing one node from another
4. Default behaviors that call back into the schema
5. Serializing and restoring nodes

Only single nodes are serialized here; collecting them into a template is
left to the caller (a dict keyed by node id is enough).
"""

from __future__ import annotations

import json
from typing import Self

from stackdsl import Resource, default, from_dict, named, to_dict, to_json


# ============================================================================
# Step 1: Declare Schemas
# ============================================================================
# Method bodies are ignored; the adapter routes every call to a property
# document. Variadic methods append to an array property.


class Vpc(Resource, type="AWS::EC2::VPC"):
    def cidr_block(self, value: str) -> Self: ...

    def enable_dns_hostnames(self, value: bool) -> Self: ...


class Subnet(Resource, type="AWS::EC2::Subnet"):
    def vpc_id(self, value: object) -> Self: ...

    def cidr_block(self, value: str) -> Self: ...

    def map_public_ip_on_launch(self, value: bool) -> Self: ...


class SecurityGroup(Resource, type="AWS::EC2::SecurityGroup"):
    def group_description(self, value: str) -> Self: ...

    def vpc_id(self, value: object) -> Self: ...

    def security_group_ingress(self, *rules: dict[str, object]) -> Self: ...

    @default
    def allow(self, port: int, cidr: str = "0.0.0.0/0") -> Self:
        """Open a TCP port to a CIDR range."""
        return self.security_group_ingress(
            {"IpProtocol": "tcp", "FromPort": port, "ToPort": port, "CidrIp": cidr}
        )


class Instance(Resource, type="AWS::EC2::Instance"):
    def availability_zone(self, *values: object) -> Self: ...

    def instance_type(self, value: object) -> Self: ...

    def image_id(self, value: object) -> Self: ...

    def instance_profile(self, value: object) -> Self: ...

    def key_name(self, value: object) -> Self: ...

    def security_group_ids(self, *values: object) -> Self: ...

    def subnet_id(self, subnet_id: object) -> Self: ...

    def user_data(self, user_data: object) -> Self: ...

    def get_image_id(self) -> str | None: ...

    @default
    def name(self, name: str) -> Self:
        self.tag("Name", name)
        return self


class Bucket(Resource, type="AWS::S3::Bucket"):
    def bucket_name(self, value: str) -> Self: ...

    @named("SSEAlgorithm")
    def sse_algorithm(self, value: str) -> Self: ...


# ============================================================================
# Step 2: Build Nodes
# ============================================================================


def build_stack() -> dict[str, Resource]:
    """Describe a VPC with one public web server."""

    vpc = Vpc.create("Vpc").cidr_block("10.0.0.0/16").enable_dns_hostnames(True)

    # Handles are stored as Refs wherever they are passed as values
    subnet = (
        Subnet.create("PublicSubnet")
        .vpc_id(vpc)
        .cidr_block("10.0.1.0/24")
        .map_public_ip_on_launch(True)
    )

    web_sg = (
        SecurityGroup.create("WebSG")
        .group_description("Web traffic")
        .vpc_id(vpc.ref())
        .allow(80)
        .allow(443)
    )

    web = (
        Instance.create("Web1")
        .name("web-1")
        .image_id("ami-0abcdef1234567890")
        .instance_type("t3.micro")
        .key_name(None)  # optional values can be passed through unchanged
        .subnet_id(subnet)
        .security_group_ids(web_sg, None)
    )
    web.tag("Env", "demo")

    logs = Bucket.create("Logs").bucket_name("web-logs").sse_algorithm("aws:kms")

    return {node.get_id(): node for node in (vpc, subnet, web_sg, web, logs)}


# ============================================================================
# Step 3: Serialize and Restore
# ============================================================================


def example_serialization() -> None:
    nodes = build_stack()

    resources = {node_id: to_dict(node) for node_id, node in nodes.items()}
    print(json.dumps({"Resources": resources}, indent=2))
    print()

    # Nodes restore from their dict form; the schema is found by type
    restored = from_dict("Web1", resources["Web1"])
    assert isinstance(restored, Instance)
    assert restored.get_image_id() == "ami-0abcdef1234567890"
    assert to_json(restored) == to_json(nodes["Web1"])
    print(f"Restored {restored!r}")


def main() -> None:
    example_serialization()


if __name__ == "__main__":
    main()
