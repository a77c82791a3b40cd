"""Application Stack for the modular web server deployment.

Consumes the VPC and public subnet IDs exported by the VPC stack and
creates security groups, a classic load balancer and a single-instance
auto-scaling group running nginx.
"""
from aws_cdk import Fn, Stack
from constructs import Construct

from ..components.auto_scaling import AutoScalingGroup
from ..components.load_balancer import ClassicLoadBalancer, ListenerSpec
from ..components.security_group import SecurityGroup, SecurityGroupRule
from ..config import ServerConfig
from ..outputs import export_output, import_list_output, import_output
from ..project_settings import (
    LOAD_BALANCER_DNS_OUTPUT,
    PUBLIC_SUBNET_IDS_OUTPUT,
    VPC_ID_OUTPUT,
)
from ..tags import DeploymentContext


class AppStack(Stack):
    """Load-balanced single web server in the public subnets of the VPC stack."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        config: ServerConfig,
        network_ref: str,
        user_data: str,
        context: DeploymentContext,
        **kwargs,
    ) -> None:
        """Initialize Application Stack.

        Args:
            scope: CDK app or parent stack
            construct_id: Unique identifier for this stack
            config: App section of the environment configuration
            network_ref: Stack reference the VPC stack exported its outputs under
            user_data: Plain-text instance bootstrap script
            context: Project/stack the resources are tagged and exported under
            **kwargs: Additional stack properties
        """
        super().__init__(scope, construct_id, **kwargs)

        name = context.name
        port = config.http_port

        vpc_id = import_output(network_ref, VPC_ID_OUTPUT)
        public_subnet_ids = import_list_output(network_ref, PUBLIC_SUBNET_IDS_OUTPUT)

        http = SecurityGroupRule(description="http", from_port=port, to_port=port)

        self.instance_security_group = SecurityGroup(
            self,
            "InstanceSecurityGroup",
            name=f"{name}-ec2",
            vpc_id=vpc_id,
            ingress=[http],
            egress=[
                SecurityGroupRule(
                    description="all", from_port=0, to_port=0, protocol="all"
                )
            ],
            context=context,
        )

        self.load_balancer_security_group = SecurityGroup(
            self,
            "LoadBalancerSecurityGroup",
            name=f"{name}-elb",
            vpc_id=vpc_id,
            ingress=[http],
            egress=[http],
            context=context,
        )

        self.load_balancer = ClassicLoadBalancer(
            self,
            "LoadBalancer",
            name=name,
            subnet_ids=public_subnet_ids,
            listeners=[ListenerSpec(lb_port=port, instance_port=port)],
            security_group_ids=[self.load_balancer_security_group.security_group_id],
            context=context,
        )

        self.auto_scaling_group = AutoScalingGroup(
            self,
            "WebServer",
            name=name,
            ami_id=config.ami_id,
            instance_type=config.instance_type,
            user_data=Fn.base64(user_data),
            subnet_ids=public_subnet_ids,
            load_balancer_name=self.load_balancer.load_balancer_name,
            security_group_ids=[self.instance_security_group.security_group_id],
        )

        export_output(
            self,
            name,
            LOAD_BALANCER_DNS_OUTPUT,
            self.load_balancer.dns_name,
            description="DNS name of the web server load balancer",
        )
