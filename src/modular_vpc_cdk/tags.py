"""Resource tag templating.

Tags are derived from an explicit ``DeploymentContext`` (project and stack
name) rather than from the ambient CDK app, so they are deterministic and
testable without synthesizing anything.
"""

from dataclasses import dataclass

from aws_cdk import CfnTag

from .project_settings import stack_name


@dataclass(frozen=True)
class DeploymentContext:
    """Project and stack a set of resources is deployed under."""

    project: str
    stack: str

    @property
    def name(self) -> str:
        return stack_name(self.project, self.stack)


def common_tags(context: DeploymentContext) -> dict[str, str]:
    """Tags shared by every resource of a deployment."""
    return {
        "Project": context.project,
        "Environment": context.stack,
        "Name": context.name,
    }


def named_tags(context: DeploymentContext, name: str) -> dict[str, str]:
    """Common tags with ``Name`` set to ``{project}-{stack}-{name}``."""
    tags = common_tags(context)
    tags["Name"] = f"{context.name}-{name}"
    return tags


def to_cfn_tags(tags: dict[str, str]) -> list[CfnTag]:
    """Convert a tag mapping into CloudFormation tag properties, sorted by key."""
    return [CfnTag(key=key, value=value) for key, value in sorted(tags.items())]
