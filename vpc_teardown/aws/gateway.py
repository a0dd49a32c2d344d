"""EC2 provider gateway.

Thin layer over the boto3 EC2 client exposing exactly the list, detach and
delete calls needed to tear down a VPC. Every botocore failure is re-raised
as a ProviderError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..models.resource_kind import ResourceKind
from .client import create_boto_client
from .errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_BOOTSTRAP_REGION = "us-east-1"
DEFAULT_VPC_ATTRIBUTE = "default-vpc"


@dataclass(frozen=True)
class GatewayConfig:
    """Process-wide connection settings, read once and passed to every region.

    Attributes:
        profile_name: AWS profile name (optional)
        bootstrap_region: Region used for region discovery
    """

    profile_name: Optional[str] = None
    bootstrap_region: str = DEFAULT_BOOTSTRAP_REGION


def _vpc_filter(name: str, value: str) -> list[dict[str, Any]]:
    return [{"Name": name, "Values": [value]}]


class RegionGateway:
    """EC2 operations scoped to one region.

    Attributes:
        config: Connection settings
        region: AWS region this gateway talks to
    """

    def __init__(self, config: GatewayConfig, region: str) -> None:
        self.config = config
        self.region = region
        self._client: Any = None

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = create_boto_client(
                service_name="ec2",
                region_name=self.region,
                profile_name=self.config.profile_name,
            )
        return self._client

    def _call(self, method: str, **params: Any) -> Any:
        logger.debug(f"{self.region} ec2.{method}({params})")
        try:
            return getattr(self.client, method)(**params)
        except (ClientError, BotoCoreError) as e:
            raise ProviderError.from_exception(e, operation=method) from e

    def describe_default_vpc_attribute(self) -> list[list[str]]:
        """Describe the account's default-vpc attribute.

        Returns:
            One list of attribute values per attribute record returned

        Raises:
            ProviderError: If the API call fails
        """
        response = self._call("describe_account_attributes", AttributeNames=[DEFAULT_VPC_ATTRIBUTE])
        return [
            [value.get("AttributeValue", "") for value in record.get("AttributeValues", [])]
            for record in response.get("AccountAttributes", [])
        ]

    def list_resource_ids(self, kind: ResourceKind, vpc_id: str) -> list[str]:
        """List ids of resources of a kind that belong to a VPC.

        Args:
            kind: Listable resource kind
            vpc_id: VPC identifier used in the server-side filter

        Returns:
            Resource ids in the order the provider returned them

        Raises:
            ValueError: If the kind cannot be listed
            ProviderError: If the API call fails
        """
        if not kind.is_listable:
            raise ValueError(f"{kind.name} cannot be listed by VPC")

        spec = kind.value
        resource_ids = []
        try:
            paginator = self.client.get_paginator(spec.describe_method)
            for page in paginator.paginate(Filters=_vpc_filter(spec.vpc_filter, vpc_id)):
                for item in page.get(spec.response_key, []):
                    resource_ids.append(item[spec.id_field])
        except (ClientError, BotoCoreError) as e:
            raise ProviderError.from_exception(e, operation=spec.describe_method) from e

        logger.debug(f"Found {len(resource_ids)} {kind.noun} in {self.region} {vpc_id}")
        return resource_ids

    def detach_internet_gateway(self, internet_gateway_id: str, vpc_id: str) -> None:
        """Detach an internet gateway from a VPC.

        Raises:
            ProviderError: If the API call fails
        """
        self._call("detach_internet_gateway", InternetGatewayId=internet_gateway_id, VpcId=vpc_id)

    def delete_resource(self, kind: ResourceKind, resource_id: str) -> None:
        """Delete a resource by id.

        Raises:
            ProviderError: If the API call fails
        """
        spec = kind.value
        self._call(spec.delete_method, **{spec.delete_param: resource_id})

    def delete_vpc(self, vpc_id: str) -> None:
        """Delete a VPC by id.

        Raises:
            ProviderError: If the API call fails
        """
        self.delete_resource(ResourceKind.VPC, vpc_id)


class ProviderGateway:
    """Account-wide entry point: region discovery and region-scoped gateways."""

    def __init__(self, config: Optional[GatewayConfig] = None) -> None:
        self.config = config or GatewayConfig()

    def list_regions(self) -> list[str]:
        """List every region enabled for the account.

        Uses the bootstrap region's endpoint.

        Returns:
            Region names

        Raises:
            ProviderError: If the API call fails
        """
        try:
            client = create_boto_client(
                service_name="ec2",
                region_name=self.config.bootstrap_region,
                profile_name=self.config.profile_name,
            )
            response = client.describe_regions()
        except (ClientError, BotoCoreError) as e:
            raise ProviderError.from_exception(e, operation="describe_regions") from e

        return [region["RegionName"] for region in response.get("Regions", [])]

    def for_region(self, region: str) -> RegionGateway:
        """Open a gateway scoped to one region."""
        return RegionGateway(self.config, region)
