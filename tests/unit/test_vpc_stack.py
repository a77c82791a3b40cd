"""Unit tests for VPC Stack."""
import aws_cdk as cdk
from aws_cdk.assertions import Match, Template
import pytest

from modular_vpc_cdk.config import NetworkConfig
from modular_vpc_cdk.exceptions import InsufficientZonesError
from modular_vpc_cdk.stacks.vpc_stack import VPCStack


@pytest.fixture
def test_config():
    """Test configuration for VPC stack."""
    return NetworkConfig(
        vpc_cidr="10.0.0.0/16",
        availability_zones=["eu-west-1a", "eu-west-1b", "eu-west-1c"],
        public_subnet_cidrs=["10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/24"],
        private_subnet_cidrs=["10.0.100.0/24", "10.0.101.0/24", "10.0.102.0/24"],
    )


def make_stack(config, context):
    app = cdk.App()
    return VPCStack(
        app,
        "TestVPCStack",
        config=config,
        context=context,
        env=cdk.Environment(account="123456789012", region="eu-west-1"),
    )


@pytest.fixture
def vpc_stack(test_config, network_context):
    """Create VPC stack for testing."""
    return make_stack(test_config, network_context)


class TestVPCStack:
    """Test suite for VPC Stack."""

    def test_vpc_created(self, vpc_stack):
        """Test that VPC is created with correct CIDR."""
        template = Template.from_stack(vpc_stack)

        template.has_resource_properties(
            "AWS::EC2::VPC",
            {
                "CidrBlock": "10.0.0.0/16",
                "EnableDnsHostnames": True,
                "EnableDnsSupport": True,
            },
        )

    def test_vpc_has_correct_name(self, vpc_stack):
        """Test that VPC has deterministic name."""
        template = Template.from_stack(vpc_stack)

        template.has_resource_properties(
            "AWS::EC2::VPC",
            {
                "Tags": Match.array_with([
                    {"Key": "Name", "Value": "vpc-modular-test-vpc"}
                ]),
            },
        )

    def test_subnets_created(self, vpc_stack):
        """Test that public and private subnets are created."""
        template = Template.from_stack(vpc_stack)

        template.resource_count_is("AWS::EC2::Subnet", 6)  # 3 private + 3 public
        template.has_resource_properties(
            "AWS::EC2::Subnet",
            {"CidrBlock": "10.0.102.0/24", "AvailabilityZone": "eu-west-1c"},
        )

    def test_single_nat_gateway_created(self, vpc_stack):
        """Test that one NAT gateway serves all private subnets."""
        template = Template.from_stack(vpc_stack)

        template.resource_count_is("AWS::EC2::NatGateway", 1)

    def test_outputs_exist(self, vpc_stack):
        """Test that CDK outputs are created."""
        template = Template.from_stack(vpc_stack)

        outputs = template.find_outputs("*")
        assert "vpcId" in outputs
        assert "publicSubnetIDs" in outputs
        assert "privateSubnetIDs" in outputs

    def test_output_exports(self, vpc_stack):
        """Test that outputs have correct export names."""
        template = Template.from_stack(vpc_stack)

        outputs = template.find_outputs("*")

        assert outputs["vpcId"]["Export"]["Name"] == "vpc-modular-test-vpcId"
        assert outputs["publicSubnetIDs"]["Export"]["Name"] == "vpc-modular-test-publicSubnetIDs"
        assert outputs["privateSubnetIDs"]["Export"]["Name"] == "vpc-modular-test-privateSubnetIDs"

    def test_subnet_output_is_ordered_join(self, vpc_stack):
        """Test that subnet IDs are exported comma-separated in input order."""
        template = Template.from_stack(vpc_stack)
        plan = vpc_stack.topology.plan

        outputs = template.find_outputs("*")

        assert outputs["publicSubnetIDs"]["Value"] == {
            "Fn::Join": [
                ",",
                [vpc_stack.resolve(subnet.ref) for subnet in plan.public_subnets],
            ]
        }
        assert outputs["vpcId"]["Value"] == vpc_stack.resolve(plan.vpc.ref)

    def test_zones_discovered_when_not_configured(self, network_context):
        """Test that the region's zones are used when none are configured."""
        config = NetworkConfig(availability_zones=[])
        stack = make_stack(config, network_context)
        template = Template.from_stack(stack)

        template.resource_count_is("AWS::EC2::Subnet", 6)

    def test_empty_tier_not_exported(self, test_config, network_context):
        """Test that a tier without subnets has no output."""
        config = test_config.model_copy(update={"private_subnet_cidrs": []})
        stack = make_stack(config, network_context)
        template = Template.from_stack(stack)

        outputs = template.find_outputs("*")
        assert "publicSubnetIDs" in outputs
        assert "privateSubnetIDs" not in outputs

    def test_insufficient_zones(self, test_config, network_context):
        """Test that more subnets than zones fails the synth."""
        config = test_config.model_copy(update={"availability_zones": ["eu-west-1a"]})

        with pytest.raises(InsufficientZonesError):
            make_stack(config, network_context)
