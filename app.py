#!/usr/bin/env python3
"""
Modular VPC CDK Application

Two independently deployable stacks:
- VPC stack: VPC, public/private subnets, Internet/NAT gateways, route
  tables; exports vpcId, publicSubnetIDs and privateSubnetIDs
- App stack: imports those exports and runs a single nginx instance in an
  auto-scaling group behind a classic load balancer

The environment section of config.yaml is chosen with the CDK context
key "stack" (cdk deploy -c stack=prod) or the STACK environment variable.
"""
import sys

import aws_cdk as cdk

from modular_vpc_cdk.config_loader import (
    load_config,
    load_user_data,
    validate_environment_config,
)
from modular_vpc_cdk.exceptions import ModularVpcCdkError
from modular_vpc_cdk.logger import get_logger
from modular_vpc_cdk.logging_config import configure_logging
from modular_vpc_cdk.settings import get_settings
from modular_vpc_cdk.stacks.app_stack import AppStack
from modular_vpc_cdk.stacks.vpc_stack import VPCStack
from modular_vpc_cdk.tags import DeploymentContext

settings = get_settings()
configure_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    include_context=True,
)
logger = get_logger("app")

app = cdk.App()

environment = app.node.try_get_context("stack") or settings.stack
project_root = settings.config_file.parent

try:
    # Load configuration with validation
    config = load_config(settings.config_file)
    env_config = validate_environment_config(config, environment)
    user_data = load_user_data(project_root, env_config.app.user_data_file)
except (FileNotFoundError, ModularVpcCdkError) as e:
    print(f"\n❌ Configuration Error: {e}\n", file=sys.stderr)
    sys.exit(1)

# Create CDK environment
env = cdk.Environment(
    account=env_config.account,
    region=env_config.region,
)

network_context = DeploymentContext(project=env_config.network.project, stack=environment)
app_context = DeploymentContext(project=env_config.app.project, stack=environment)

logger.info(
    "synth_started",
    network_stack=network_context.name,
    app_stack=app_context.name,
    region=env_config.region,
)

try:
    vpc_stack = VPCStack(
        app,
        network_context.name,
        env=env,
        config=env_config.network,
        context=network_context,
    )

    app_stack = AppStack(
        app,
        app_context.name,
        env=env,
        config=env_config.app,
        network_ref=network_context.name,
        user_data=user_data,
        context=app_context,
    )
except ModularVpcCdkError as e:
    print(f"\n❌ Build Error: {e}\n", file=sys.stderr)
    sys.exit(1)

# Exports must exist before they are imported
app_stack.add_dependency(vpc_stack)

# Apply extra tags to all stacks
for key, value in env_config.tags.items():
    cdk.Tags.of(app).add(key, value)

app.synth()
