"""Classic load balancer composer."""
from typing import Annotated

from aws_cdk import aws_elasticloadbalancing as elb
from constructs import Construct
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..tags import DeploymentContext, named_tags, to_cfn_tags

Port = Annotated[int, Field(ge=1, le=65535)]


class ListenerSpec(BaseModel):
    """Load balancer port and protocol forwarded to an instance port."""

    model_config = ConfigDict(frozen=True)

    lb_port: Port
    lb_protocol: str = "HTTP"
    instance_port: Port
    instance_protocol: str = "HTTP"

    @field_validator("lb_protocol", "instance_protocol")
    @classmethod
    def uppercase_protocol(cls, v: str) -> str:
        return v.upper()


class ClassicLoadBalancer(Construct):
    """Internet-facing classic load balancer spanning the given subnets."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        name: str,
        subnet_ids: list[str],
        listeners: list[ListenerSpec],
        security_group_ids: list[str],
        context: DeploymentContext,
    ) -> None:
        super().__init__(scope, construct_id)

        self.load_balancer = elb.CfnLoadBalancer(
            self,
            "Resource",
            subnets=subnet_ids,
            security_groups=security_group_ids,
            listeners=[
                elb.CfnLoadBalancer.ListenersProperty(
                    load_balancer_port=str(listener.lb_port),
                    protocol=listener.lb_protocol,
                    instance_port=str(listener.instance_port),
                    instance_protocol=listener.instance_protocol,
                )
                for listener in listeners
            ],
            tags=to_cfn_tags(named_tags(context, name)),
        )

    @property
    def load_balancer_name(self) -> str:
        return self.load_balancer.ref

    @property
    def dns_name(self) -> str:
        return self.load_balancer.attr_dns_name
