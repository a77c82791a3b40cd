"""VPC Stack for the modular network deployment.

Creates a VPC with public/private subnets, an Internet Gateway and a NAT
gateway, and exports the VPC and subnet IDs for the application stack.
"""
from aws_cdk import Stack
from constructs import Construct

from ..components.network_topology import NetworkTopology, TopologyRequest
from ..config import NetworkConfig
from ..logger import get_logger
from ..outputs import export_list_output, export_output
from ..project_settings import (
    PRIVATE_SUBNET_IDS_OUTPUT,
    PUBLIC_SUBNET_IDS_OUTPUT,
    VPC_ID_OUTPUT,
)
from ..tags import DeploymentContext

logger = get_logger(__name__)


class VPCStack(Stack):
    """VPC Stack with public/private subnets and cross-stack exports."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        config: NetworkConfig,
        context: DeploymentContext,
        **kwargs,
    ) -> None:
        """Initialize VPC Stack.

        Args:
            scope: CDK app or parent stack
            construct_id: Unique identifier for this stack
            config: Network section of the environment configuration
            context: Project/stack the resources are tagged and exported under
            **kwargs: Additional stack properties
        """
        super().__init__(scope, construct_id, **kwargs)

        # Explicit zones win over the zones discovered for the target region
        availability_zones = list(config.availability_zones) or self.availability_zones
        logger.info(
            "vpc_stack_zones",
            stack=construct_id,
            discovered=not config.availability_zones,
            zone_count=len(availability_zones),
        )

        request = TopologyRequest(
            vpc_cidr=config.vpc_cidr,
            availability_zones=availability_zones,
            public_subnet_cidrs=config.public_subnet_cidrs,
            private_subnet_cidrs=config.private_subnet_cidrs,
        )
        self.topology = NetworkTopology(
            self, "Network", request=request, context=context
        )
        plan = self.topology.plan

        # CDK Outputs for the application stack
        export_output(
            self,
            context.name,
            VPC_ID_OUTPUT,
            plan.vpc_id,
            description="VPC ID",
        )

        # CloudFormation rejects empty output values
        if plan.public_subnets:
            export_list_output(
                self,
                context.name,
                PUBLIC_SUBNET_IDS_OUTPUT,
                plan.public_subnet_ids,
                description="Comma-separated list of public subnet IDs",
            )

        if plan.private_subnets:
            export_list_output(
                self,
                context.name,
                PRIVATE_SUBNET_IDS_OUTPUT,
                plan.private_subnet_ids,
                description="Comma-separated list of private subnet IDs",
            )
