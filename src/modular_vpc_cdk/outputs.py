"""Cross-stack output exchange.

A producing stack publishes identifiers as CloudFormation exports named
``{stack_ref}-{key}``; consuming stacks read them back with
``Fn::ImportValue`` given the same stack reference. List values are
flattened into a single comma-separated export.
"""
from aws_cdk import CfnOutput, Fn
from constructs import Construct

from .project_settings import LIST_OUTPUT_DELIMITER


def export_name(stack_ref: str, key: str) -> str:
    """Export name under which ``key`` is published by ``stack_ref``."""
    return f"{stack_ref}-{key}"


def export_output(
    scope: Construct,
    stack_ref: str,
    key: str,
    value: str,
    description: str | None = None,
) -> CfnOutput:
    """Publish a single value for other stacks.

    Args:
        scope: Stack (or construct inside it) that owns the output
        stack_ref: Reference consumers use to find this stack's outputs
        key: Output key, also the logical id of the output
        value: Value or token to export
        description: Optional output description

    Returns:
        The created CfnOutput
    """
    return CfnOutput(
        scope,
        key,
        value=value,
        description=description,
        export_name=export_name(stack_ref, key),
    )


def export_list_output(
    scope: Construct,
    stack_ref: str,
    key: str,
    values: list[str],
    description: str | None = None,
) -> CfnOutput:
    """Publish an ordered list of values as one comma-separated export."""
    return export_output(
        scope,
        stack_ref,
        key,
        Fn.join(LIST_OUTPUT_DELIMITER, values),
        description=description,
    )


def import_output(stack_ref: str, key: str) -> str:
    """Token resolving to the value ``stack_ref`` exported under ``key``."""
    return Fn.import_value(export_name(stack_ref, key))


def import_list_output(stack_ref: str, key: str) -> list[str]:
    """Token list resolving to a list exported with ``export_list_output``."""
    return Fn.split(LIST_OUTPUT_DELIMITER, import_output(stack_ref, key))
