"""Resource kinds handled during default VPC teardown."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional


class KindSpec(NamedTuple):
    """EC2 API metadata for listing and deleting one resource kind."""

    noun: str
    describe_method: Optional[str]
    response_key: Optional[str]
    id_field: str
    vpc_filter: Optional[str]
    delete_method: str
    delete_param: str


class ResourceKind(Enum):
    """VPC-scoped resource kinds, declared in deletion order."""

    INTERNET_GATEWAY = KindSpec(
        noun="igws",
        describe_method="describe_internet_gateways",
        response_key="InternetGateways",
        id_field="InternetGatewayId",
        vpc_filter="attachment.vpc-id",
        delete_method="delete_internet_gateway",
        delete_param="InternetGatewayId",
    )
    SUBNET = KindSpec(
        noun="subnets",
        describe_method="describe_subnets",
        response_key="Subnets",
        id_field="SubnetId",
        vpc_filter="vpc-id",
        delete_method="delete_subnet",
        delete_param="SubnetId",
    )
    ROUTE_TABLE = KindSpec(
        noun="rtbs",
        describe_method="describe_route_tables",
        response_key="RouteTables",
        id_field="RouteTableId",
        vpc_filter="vpc-id",
        delete_method="delete_route_table",
        delete_param="RouteTableId",
    )
    NETWORK_ACL = KindSpec(
        noun="nacls",
        describe_method="describe_network_acls",
        response_key="NetworkAcls",
        id_field="NetworkAclId",
        vpc_filter="vpc-id",
        delete_method="delete_network_acl",
        delete_param="NetworkAclId",
    )
    SECURITY_GROUP = KindSpec(
        noun="sgs",
        describe_method="describe_security_groups",
        response_key="SecurityGroups",
        id_field="GroupId",
        vpc_filter="vpc-id",
        delete_method="delete_security_group",
        delete_param="GroupId",
    )
    # Deleted by id, never listed
    VPC = KindSpec(
        noun="vpc",
        describe_method=None,
        response_key=None,
        id_field="VpcId",
        vpc_filter=None,
        delete_method="delete_vpc",
        delete_param="VpcId",
    )

    @property
    def noun(self) -> str:
        return self.value.noun

    @property
    def is_listable(self) -> bool:
        return self.value.describe_method is not None


# Dependent kinds, in the order the provider's referential constraints require
DEPENDENT_KINDS = (
    ResourceKind.INTERNET_GATEWAY,
    ResourceKind.SUBNET,
    ResourceKind.ROUTE_TABLE,
    ResourceKind.NETWORK_ACL,
    ResourceKind.SECURITY_GROUP,
)
