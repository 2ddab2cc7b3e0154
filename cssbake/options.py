"""Transform options, configured once per compilation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .errors import OptionsError

LabelMode = Literal["never", "dev-only", "always"]
"""When to attach a human-readable label to generated class names.

| Mode     | Fast path (static css)          | Fallback path (dynamic css)          |
|----------|---------------------------------|--------------------------------------|
| never    | no label                        | nothing appended                     |
| dev-only | label only in the dev branch    | NODE_ENV conditional label appended  |
| always   | label baked into prod and dev   | plain label string appended          |
"""

LABEL_MODES: tuple[str, ...] = ("never", "dev-only", "always")


@dataclass
class CallKind:
    """How one imported style function is treated."""

    should_label: bool = True
    annotate_as_pure: bool = True


def default_import_map() -> dict[str, dict[str, CallKind]]:
    return {
        "@emotion/react": {
            "css": CallKind(),
            "keyframes": CallKind(),
        },
        "@emotion/css": {
            "css": CallKind(),
            "keyframes": CallKind(),
            "injectGlobal": CallKind(should_label=False, annotate_as_pure=False),
        },
    }


@dataclass
class Options:
    """Run-wide transform configuration.

    Invariants:
    - auto_label is one of LABEL_MODES
    - filename is "" when unknown; labels then cannot use [filename]/[dirname]
    """

    auto_label: LabelMode = "dev-only"
    label_format: str = "[local]"
    source_map: bool = True
    filename: str = ""
    source: str | None = None
    import_map: dict[str, dict[str, CallKind]] = field(default_factory=default_import_map)

    def __post_init__(self) -> None:
        if self.auto_label not in LABEL_MODES:
            raise OptionsError(
                f"autoLabel must be one of {', '.join(LABEL_MODES)}, got '{self.auto_label}'"
            )

    @classmethod
    def from_dict(cls, opts: dict[str, object]) -> Options:
        """Build options from a babel-style plugin options dict."""
        kwargs: dict[str, object] = {}
        for key, value in opts.items():
            match key:
                case "autoLabel":
                    kwargs["auto_label"] = value
                case "labelFormat":
                    if not isinstance(value, str):
                        raise OptionsError("labelFormat must be a string")
                    kwargs["label_format"] = value
                case "sourceMap":
                    if not isinstance(value, bool):
                        raise OptionsError("sourceMap must be a boolean")
                    kwargs["source_map"] = value
                case "filename":
                    if not isinstance(value, str):
                        raise OptionsError("filename must be a string")
                    kwargs["filename"] = value
                case "source":
                    if value is not None and not isinstance(value, str):
                        raise OptionsError("source must be a string")
                    kwargs["source"] = value
                case "importMap":
                    kwargs["import_map"] = _import_map_from_dict(value)
                case _:
                    raise OptionsError(f"unknown option '{key}'")
        return cls(**kwargs)  # type: ignore[arg-type]

    def style_functions(self, source: str) -> dict[str, CallKind]:
        """Exported style functions of an import source (empty if none)."""
        return self.import_map.get(source, {})


def _import_map_from_dict(value: object) -> dict[str, dict[str, CallKind]]:
    """importMap: {"pkg": {"css": {"shouldLabel": true, "pure": true}}}."""
    if not isinstance(value, dict):
        raise OptionsError("importMap must be an object")
    result: dict[str, dict[str, CallKind]] = {}
    for source, exports in value.items():
        if not isinstance(exports, dict):
            raise OptionsError(f"importMap['{source}'] must be an object")
        kinds: dict[str, CallKind] = {}
        for name, spec in exports.items():
            if not isinstance(spec, dict):
                raise OptionsError(f"importMap['{source}']['{name}'] must be an object")
            should_label = spec.get("shouldLabel", True)
            annotate_as_pure = spec.get("pure", True)
            if not isinstance(should_label, bool) or not isinstance(annotate_as_pure, bool):
                raise OptionsError(f"importMap['{source}']['{name}']: shouldLabel and pure must be booleans")
            kinds[name] = CallKind(should_label=should_label, annotate_as_pure=annotate_as_pure)
        result[source] = kinds
    return result
