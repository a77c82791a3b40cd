"""Security group composer."""
from typing import Annotated

from aws_cdk import aws_ec2 as ec2
from constructs import Construct
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import validate_cidr
from ..project_settings import ANY_IPV4
from ..tags import DeploymentContext, named_tags, to_cfn_tags

# CloudFormation spells "all protocols" as -1
_ALL_PROTOCOLS = "-1"


class SecurityGroupRule(BaseModel):
    """One ingress or egress rule."""

    model_config = ConfigDict(frozen=True)

    description: str
    from_port: Annotated[int, Field(ge=0, le=65535)]
    to_port: Annotated[int, Field(ge=0, le=65535)]
    protocol: str = "tcp"
    cidr_blocks: list[str] = Field(default_factory=lambda: [ANY_IPV4])

    @field_validator("protocol")
    @classmethod
    def normalize_protocol(cls, v: str) -> str:
        v = v.lower()
        return _ALL_PROTOCOLS if v == "all" else v

    @field_validator("cidr_blocks")
    @classmethod
    def validate_cidr_blocks(cls, v: list[str]) -> list[str]:
        return [validate_cidr(cidr) for cidr in v]


class SecurityGroup(Construct):
    """Security group with inline ingress and egress rules.

    One ingress/egress property is emitted per CIDR block of a rule.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        name: str,
        vpc_id: str,
        ingress: list[SecurityGroupRule],
        egress: list[SecurityGroupRule],
        context: DeploymentContext,
    ) -> None:
        super().__init__(scope, construct_id)

        self.security_group = ec2.CfnSecurityGroup(
            self,
            "Resource",
            group_name=name,
            group_description=name,
            vpc_id=vpc_id,
            security_group_ingress=[
                ec2.CfnSecurityGroup.IngressProperty(
                    ip_protocol=rule.protocol,
                    from_port=rule.from_port,
                    to_port=rule.to_port,
                    cidr_ip=cidr,
                    description=rule.description,
                )
                for rule in ingress
                for cidr in rule.cidr_blocks
            ],
            security_group_egress=[
                ec2.CfnSecurityGroup.EgressProperty(
                    ip_protocol=rule.protocol,
                    from_port=rule.from_port,
                    to_port=rule.to_port,
                    cidr_ip=cidr,
                    description=rule.description,
                )
                for rule in egress
                for cidr in rule.cidr_blocks
            ],
            tags=to_cfn_tags(named_tags(context, name)),
        )

    @property
    def security_group_id(self) -> str:
        return self.security_group.attr_group_id
