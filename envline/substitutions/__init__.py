"""Value substitution providers.

This package resolves variable references and command spans inside decoded
assignment values, in a fixed provider order.
"""

from .base import Substitution, SubstitutionPipeline
from .command import CommandRunner, CommandSubstitution, ShellCommandRunner
from .variable import VariableSubstitution

__all__ = [
    "CommandRunner",
    "CommandSubstitution",
    "ShellCommandRunner",
    "Substitution",
    "SubstitutionPipeline",
    "VariableSubstitution",
]
