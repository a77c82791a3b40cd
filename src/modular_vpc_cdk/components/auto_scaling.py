"""Launch template and single-instance auto-scaling group."""
from aws_cdk import aws_autoscaling as autoscaling
from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from ..project_settings import ASG_CAPACITY


class AutoScalingGroup(Construct):
    """Auto-scaling group of exactly one instance behind a classic load balancer.

    Args:
        scope: Parent construct
        construct_id: Construct id
        name: Launch template name
        ami_id: Image of the instance
        instance_type: EC2 instance type
        user_data: Base64 encoded user data
        subnet_ids: Subnets the group launches into
        load_balancer_name: Classic load balancer the instance registers with
        security_group_ids: Security groups of the instance
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        name: str,
        ami_id: str,
        instance_type: str,
        user_data: str,
        subnet_ids: list[str],
        load_balancer_name: str,
        security_group_ids: list[str],
    ) -> None:
        super().__init__(scope, construct_id)

        self.launch_template = ec2.CfnLaunchTemplate(
            self,
            "LaunchTemplate",
            launch_template_name=name,
            launch_template_data=ec2.CfnLaunchTemplate.LaunchTemplateDataProperty(
                image_id=ami_id,
                instance_type=instance_type,
                user_data=user_data,
                security_group_ids=security_group_ids,
            ),
        )

        capacity = str(ASG_CAPACITY)
        self.group = autoscaling.CfnAutoScalingGroup(
            self,
            "Group",
            desired_capacity=capacity,
            min_size=capacity,
            max_size=capacity,
            vpc_zone_identifier=subnet_ids,
            load_balancer_names=[load_balancer_name],
            # CloudFormation rejects "$Latest", pin the current version instead
            launch_template=autoscaling.CfnAutoScalingGroup.LaunchTemplateSpecificationProperty(
                launch_template_id=self.launch_template.ref,
                version=self.launch_template.attr_latest_version_number,
            ),
        )
