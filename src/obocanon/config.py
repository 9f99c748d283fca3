"""
Writer configuration.

`WriterOptions` is a plain dataclass. It can be built in code or loaded
from a YAML file:

    label_source:
      RO:0002211: regulates
    annotate_references: true
    boolean_case_sensitive: true
    tag_order:
      term: [id, name, def, is_a]
    tag_policies:
      synonym: preserve
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml

from obocanon.ordering import TAG_POLICIES, OrderPolicy
from obocanon.tags import FrameType


class ConfigError(ValueError):
    """Raised when an options file cannot be turned into WriterOptions."""
    pass


@dataclass
class WriterOptions:
    """
    Options for one write call.

    Properties:
        label_source:
            Extra id -> display name entries for `! name` comments.
            Entries here win over names found in the document itself.

        annotate_references:
            Append `! name` comments to reference-valued clauses

        boolean_case_sensitive:
            When True only the string "true" counts as a true flag.
            When False "True", "TRUE" and friends count too.

        tag_order:
            Per frame type replacement of the frame category order

        tag_policies:
            Per tag clause level policy overrides, merged over TAG_POLICIES
    """

    label_source: Dict[str, str] = field(default_factory=dict)
    annotate_references: bool = True
    boolean_case_sensitive: bool = True
    tag_order: Dict[FrameType, List[str]] = field(default_factory=dict)
    tag_policies: Dict[str, OrderPolicy] = field(default_factory=dict)

    def tag_order_for(self, frame_type: FrameType) -> Optional[Sequence[str]]:
        return self.tag_order.get(frame_type)

    def policies(self) -> Dict[str, OrderPolicy]:
        merged = dict(TAG_POLICIES)
        merged.update(self.tag_policies)
        return merged


def _frame_type_from_key(key: str) -> FrameType:
    for frame_type in FrameType:
        if frame_type.value.lower() == str(key).lower():
            return frame_type
    raise ConfigError(f"Unknown frame type in tag_order: {key}")


def _policy_from_value(tag: str, value: str) -> OrderPolicy:
    try:
        return OrderPolicy(str(value).lower())
    except ValueError as e:
        raise ConfigError(f"Unknown order policy for {tag}: {value}") from e


def options_from_dict(d: Optional[Mapping[str, Any]]) -> WriterOptions:
    """Build WriterOptions from a plain mapping (e.g. parsed YAML)."""
    if d is None:
        return WriterOptions()
    if not isinstance(d, Mapping):
        raise ConfigError(f"Options must be a mapping, got {type(d).__name__}")

    label_source = d.get("label_source") or {}
    if not isinstance(label_source, Mapping):
        raise ConfigError("label_source must be a mapping of id to name")

    tag_order = {}
    for key, tags in (d.get("tag_order") or {}).items():
        if not isinstance(tags, list):
            raise ConfigError(f"tag_order.{key} must be a list of tags")
        tag_order[_frame_type_from_key(key)] = [str(t) for t in tags]

    tag_policies = {
        str(tag): _policy_from_value(tag, value)
        for tag, value in (d.get("tag_policies") or {}).items()
    }

    return WriterOptions(
        label_source={str(k): str(v) for k, v in label_source.items()},
        annotate_references=bool(d.get("annotate_references", True)),
        boolean_case_sensitive=bool(d.get("boolean_case_sensitive", True)),
        tag_order=tag_order,
        tag_policies=tag_policies,
    )


def options_to_dict(options: WriterOptions) -> Dict[str, Any]:
    return {
        "label_source": dict(options.label_source),
        "annotate_references": options.annotate_references,
        "boolean_case_sensitive": options.boolean_case_sensitive,
        "tag_order": {ft.value.lower(): list(tags) for ft, tags in options.tag_order.items()},
        "tag_policies": {tag: p.value for tag, p in options.tag_policies.items()},
    }


def load_writer_options(path: Union[str, Path]) -> WriterOptions:
    """
    Load WriterOptions from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the content is not a valid options mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return options_from_dict(data)


__all__ = [
    "ConfigError",
    "WriterOptions",
    "options_from_dict",
    "options_to_dict",
    "load_writer_options",
]
