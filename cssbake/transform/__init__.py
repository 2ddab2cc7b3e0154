"""Style invocation transform passes."""

from .context import CompilationUnit
from .styles import TransformOutcome, transform_expression_with_styles

__all__ = ["CompilationUnit", "TransformOutcome", "transform_expression_with_styles"]
