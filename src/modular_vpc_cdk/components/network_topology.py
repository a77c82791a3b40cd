"""Network topology builder.

Decides how many subnets, gateways and routes a VPC gets from a CIDR
block, a list of availability zones and the public/private subnet CIDR
lists, and declares them in a fixed order:

1. VPC
2. Internet Gateway, public route table (default route via the gateway),
   public subnets, each associated with the public route table
3. Elastic IP and NAT Gateway in the first public subnet, private route
   table (default route via the NAT Gateway, if one exists), private
   subnets, each associated with the private route table

Subnet ``i`` of either list is placed in ``availability_zones[i]``.
"""
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from aws_cdk import Annotations, CfnTag
from aws_cdk import aws_ec2 as ec2
from constructs import Construct
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import validate_cidr
from ..exceptions import InsufficientZonesError, ResourceCreationError
from ..logger import LogContext, get_logger
from ..project_settings import ANY_IPV4, subnet_name
from ..tags import DeploymentContext, common_tags, named_tags, to_cfn_tags

logger = get_logger(__name__)

ISOLATED_PRIVATE_SUBNETS_WARNING = "modular-vpc:isolated-private-subnets"


class SubnetSpec(BaseModel):
    """A subnet CIDR bound to the availability zone it is created in."""

    model_config = ConfigDict(frozen=True)

    cidr: str
    availability_zone: str


class TopologyRequest(BaseModel):
    """Inputs of the topology builder."""

    model_config = ConfigDict(frozen=True)

    vpc_cidr: str
    availability_zones: list[str]
    public_subnet_cidrs: list[str] = Field(default_factory=list)
    private_subnet_cidrs: list[str] = Field(default_factory=list)

    @field_validator("vpc_cidr")
    @classmethod
    def validate_vpc_cidr(cls, v: str) -> str:
        return validate_cidr(v)

    @field_validator("public_subnet_cidrs", "private_subnet_cidrs")
    @classmethod
    def validate_subnet_cidrs(cls, v: list[str]) -> list[str]:
        return [validate_cidr(cidr) for cidr in v]

    def validate_zones(self) -> None:
        """Check that every requested subnet has an availability zone.

        Raises:
            InsufficientZonesError: If either subnet list is longer than
                the zone list
        """
        zone_count = len(self.availability_zones)
        if (
            len(self.public_subnet_cidrs) > zone_count
            or len(self.private_subnet_cidrs) > zone_count
        ):
            raise InsufficientZonesError(
                "not enough availability zones provided",
                zones=zone_count,
                public_subnets=len(self.public_subnet_cidrs),
                private_subnets=len(self.private_subnet_cidrs),
            )

    def public_subnets(self) -> list[SubnetSpec]:
        """Public subnet CIDRs paired with their zones, in input order."""
        return self._bind_zones(self.public_subnet_cidrs)

    def private_subnets(self) -> list[SubnetSpec]:
        """Private subnet CIDRs paired with their zones, in input order."""
        return self._bind_zones(self.private_subnet_cidrs)

    def _bind_zones(self, cidrs: list[str]) -> list[SubnetSpec]:
        self.validate_zones()
        return [
            SubnetSpec(cidr=cidr, availability_zone=zone)
            for cidr, zone in zip(cidrs, self.availability_zones)
        ]


@dataclass
class TopologyPlan:
    """Handles of everything a topology build created.

    Gateways and route tables that were not needed are ``None``.
    """

    vpc: ec2.CfnVPC
    public_subnets: list[ec2.CfnSubnet] = field(default_factory=list)
    private_subnets: list[ec2.CfnSubnet] = field(default_factory=list)
    internet_gateway: ec2.CfnInternetGateway | None = None
    public_route_table: ec2.CfnRouteTable | None = None
    nat_eip: ec2.CfnEIP | None = None
    nat_gateway: ec2.CfnNatGateway | None = None
    private_route_table: ec2.CfnRouteTable | None = None

    @property
    def vpc_id(self) -> str:
        return self.vpc.ref

    @property
    def public_subnet_ids(self) -> list[str]:
        return [subnet.ref for subnet in self.public_subnets]

    @property
    def private_subnet_ids(self) -> list[str]:
        return [subnet.ref for subnet in self.private_subnets]


class NetworkTopology(Construct):
    """VPC with public and private subnet tiers built from a TopologyRequest.

    The request is validated before the construct is added to ``scope``;
    an ``InsufficientZonesError`` therefore leaves the tree untouched.
    Any failure while declaring a resource is raised as
    ``ResourceCreationError`` labelled with the stage that failed.

    Attributes:
        plan: TopologyPlan with the created resources
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        request: TopologyRequest,
        context: DeploymentContext,
    ) -> None:
        request.validate_zones()
        super().__init__(scope, construct_id)

        self._request = request
        self._context = context

        with LogContext(
            logger, topology=context.name, vpc_cidr=request.vpc_cidr
        ) as log:
            self._log = log
            self.plan = self._build()

    @contextmanager
    def _stage(self, stage: str) -> Iterator[None]:
        self._log.debug("topology_stage", stage=stage)
        try:
            yield
        except Exception as e:
            raise ResourceCreationError(f"while {stage}: {e}", stage=stage) from e

    def _tags(self, name: str) -> list[CfnTag]:
        return to_cfn_tags(named_tags(self._context, name))

    def _build(self) -> TopologyPlan:
        with self._stage("creating VPC"):
            vpc = ec2.CfnVPC(
                self,
                "Vpc",
                cidr_block=self._request.vpc_cidr,
                enable_dns_support=True,
                enable_dns_hostnames=True,
                tags=self._tags("vpc"),
            )

        plan = TopologyPlan(vpc=vpc)

        if self._request.public_subnet_cidrs:
            self._build_public_tier(plan)

        if self._request.private_subnet_cidrs:
            self._build_private_tier(plan)

        self._log.info(
            "topology_built",
            public_subnets=len(plan.public_subnets),
            private_subnets=len(plan.private_subnets),
            internet_gateway=plan.internet_gateway is not None,
            nat_gateway=plan.nat_gateway is not None,
        )
        return plan

    def _build_public_tier(self, plan: TopologyPlan) -> None:
        with self._stage("creating internet gateway"):
            plan.internet_gateway = ec2.CfnInternetGateway(
                self, "InternetGateway", tags=self._tags("igw")
            )
            attachment = ec2.CfnVPCGatewayAttachment(
                self,
                "InternetGatewayAttachment",
                vpc_id=plan.vpc.ref,
                internet_gateway_id=plan.internet_gateway.ref,
            )

        with self._stage("creating public route table"):
            plan.public_route_table = ec2.CfnRouteTable(
                self,
                "PublicRouteTable",
                vpc_id=plan.vpc.ref,
                tags=self._tags("public-rt"),
            )
            route = ec2.CfnRoute(
                self,
                "PublicDefaultRoute",
                route_table_id=plan.public_route_table.ref,
                destination_cidr_block=ANY_IPV4,
                gateway_id=plan.internet_gateway.ref,
            )
            # The route is rejected until the gateway is attached to the VPC
            route.add_dependency(attachment)

        with self._stage("creating public subnets"):
            for index, spec in enumerate(self._request.public_subnets()):
                subnet = self._subnet(
                    plan, "public", index, spec, plan.public_route_table
                )
                plan.public_subnets.append(subnet)

    def _build_private_tier(self, plan: TopologyPlan) -> None:
        if plan.public_subnets:
            with self._stage("creating NAT gateway"):
                plan.nat_eip = ec2.CfnEIP(
                    self, "NatEip", domain="vpc", tags=self._tags("nat-eip")
                )
                plan.nat_gateway = ec2.CfnNatGateway(
                    self,
                    "NatGateway",
                    subnet_id=plan.public_subnets[0].ref,
                    allocation_id=plan.nat_eip.attr_allocation_id,
                    tags=to_cfn_tags(common_tags(self._context)),
                )
        else:
            message = (
                "private subnets are isolated: no public subnet to host a "
                "NAT gateway, the private route table has no default route"
            )
            self._log.warning(
                "private_subnets_isolated",
                private_subnets=len(self._request.private_subnet_cidrs),
            )
            Annotations.of(self).add_warning_v2(ISOLATED_PRIVATE_SUBNETS_WARNING, message)

        with self._stage("creating private route table"):
            plan.private_route_table = ec2.CfnRouteTable(
                self,
                "PrivateRouteTable",
                vpc_id=plan.vpc.ref,
                tags=self._tags("private-rt"),
            )
            if plan.nat_gateway is not None:
                ec2.CfnRoute(
                    self,
                    "PrivateDefaultRoute",
                    route_table_id=plan.private_route_table.ref,
                    destination_cidr_block=ANY_IPV4,
                    nat_gateway_id=plan.nat_gateway.ref,
                )

        with self._stage("creating private subnets"):
            for index, spec in enumerate(self._request.private_subnets()):
                subnet = self._subnet(
                    plan, "private", index, spec, plan.private_route_table
                )
                plan.private_subnets.append(subnet)

    def _subnet(
        self,
        plan: TopologyPlan,
        kind: str,
        index: int,
        spec: SubnetSpec,
        route_table: ec2.CfnRouteTable,
    ) -> ec2.CfnSubnet:
        name = subnet_name(kind, index)
        construct_id = f"{kind.capitalize()}Subnet{index}"

        subnet = ec2.CfnSubnet(
            self,
            construct_id,
            vpc_id=plan.vpc.ref,
            cidr_block=spec.cidr,
            availability_zone=spec.availability_zone,
            map_public_ip_on_launch=kind == "public",
            tags=self._tags(name),
        )
        ec2.CfnSubnetRouteTableAssociation(
            self,
            f"{construct_id}RouteTableAssociation",
            route_table_id=route_table.ref,
            subnet_id=subnet.ref,
        )
        self._log.debug(
            "subnet_declared",
            subnet=name,
            cidr=spec.cidr,
            availability_zone=spec.availability_zone,
        )
        return subnet
