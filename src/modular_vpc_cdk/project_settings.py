"""Project-wide settings and constants.

Following Zen of Python:
- There should be one obvious way to do it
- Explicit is better than implicit
- Constants in CAPS for clarity
"""

# Network defaults
DEFAULT_VPC_CIDR = "10.0.0.0/16"
DEFAULT_PUBLIC_SUBNET_CIDRS = ("10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/24")
DEFAULT_PRIVATE_SUBNET_CIDRS = ("10.0.100.0/24", "10.0.101.0/24", "10.0.102.0/24")

ANY_IPV4 = "0.0.0.0/0"

# Application defaults
DEFAULT_AMI_ID = "ami-0d1bf5b68307103c2"
DEFAULT_INSTANCE_TYPE = "t3a.micro"

# Single-instance group
ASG_CAPACITY = 1

# Cross-stack output keys
VPC_ID_OUTPUT = "vpcId"
PUBLIC_SUBNET_IDS_OUTPUT = "publicSubnetIDs"
PRIVATE_SUBNET_IDS_OUTPUT = "privateSubnetIDs"
LOAD_BALANCER_DNS_OUTPUT = "loadBalancerDnsName"

# Delimiter used to flatten list outputs into a single export value
LIST_OUTPUT_DELIMITER = ","


def stack_name(project: str, stack: str) -> str:
    """Generate deterministic CloudFormation stack name.

    Args:
        project: Project name (e.g., 'vpc-modular')
        stack: Stack/environment name (e.g., 'dev')

    Returns:
        Formatted stack name
    """
    return f"{project}-{stack}"


def subnet_name(kind: str, index: int) -> str:
    """Name of the subnet at ``index`` of the ``kind`` ('public'/'private') list."""
    return f"{kind}-subnet-{index}"
