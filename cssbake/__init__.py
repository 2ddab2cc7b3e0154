"""cssbake: build-time folding of CSS-in-JS style invocations.

Architecture:
    ESTree JSON -> estree.load -> plugin.transform_program -> emit.emit_js / estree.dump

transform_program walks one compilation unit and hands each style
invocation to transform.styles.transform_expression_with_styles.
"""

from .errors import CssbakeError, EmitError, EstreeError, OptionsError
from .options import CallKind, Options
from .plugin import TransformResult, transform_program

__all__ = [
    "CallKind",
    "CssbakeError",
    "EmitError",
    "EstreeError",
    "Options",
    "OptionsError",
    "TransformResult",
    "transform_program",
]
