"""
Layout configuration for the reflow formatter.

Column positions are 1-based, as they are shown in a source editor. Nothing
here has a built-in default: the caller always says where labels, commands,
keywords and continuation lines start and where the right margin is.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from clprompter.exceptions import LayoutConfigError

CaseOption = Literal["*UPPER", "*LOWER", "*NONE"]

# Editor preference name -> LayoutConfig field
PROMPTER_SETTINGS = {
    "formatLabelPosition": "label_position",
    "formatCmdPosition": "left_margin",
    "formatKwdPosition": "kwd_position",
    "formatContinuePosition": "cont_indent",
    "formatRightMargin": "right_margin",
    "formatCase": "case",
}

DEFAULT_CONTINUATION_CHAR = "+"

# "/* ", one comment character and " */" after the continuation indent
MIN_CONTINUATION_WIDTH = 7


class LayoutConfig(BaseModel):
    """
    Column layout for formatted command text.

    Examples:
        config = LayoutConfig(
            label_position=2,
            left_margin=14,
            kwd_position=25,
            cont_indent=27,
            right_margin=72,
            continuation_char="+",
        )

        # camelCase names are accepted too
        config = LayoutConfig.from_dict({"leftMargin": 14, ...})

        # From YAML file
        config = LayoutConfig.from_yaml("layout.yaml")
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # columns 0 and 1 both mean the first column
    label_position: int = Field(ge=0, alias="labelPosition")
    left_margin: int = Field(ge=0, alias="leftMargin")
    # 0 places the first parameter one blank after the command name
    kwd_position: int = Field(ge=0, alias="kwdPosition")
    cont_indent: int = Field(ge=0, alias="contIndent")
    right_margin: int = Field(ge=1, alias="rightMargin")
    continuation_char: str = Field(
        min_length=1, max_length=1, alias="continuationChar"
    )
    case: CaseOption = "*NONE"

    @field_validator("case", mode="before")
    @classmethod
    def _normalize_case(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if value and not value.startswith("*"):
                value = "*" + value
        return value

    @model_validator(mode="after")
    def _check_columns(self) -> LayoutConfig:
        indent = max(self.cont_indent - 1, 0)
        if self.right_margin - indent < MIN_CONTINUATION_WIDTH:
            raise ValueError(
                f"right_margin ({self.right_margin}) leaves no room after "
                f"cont_indent ({self.cont_indent})"
            )
        if self.right_margin <= self.left_margin:
            raise ValueError(
                f"right_margin ({self.right_margin}) must be greater than "
                f"left_margin ({self.left_margin})"
            )
        return self

    @classmethod
    def _known_keys(cls) -> set[str]:
        keys = set(cls.model_fields)
        keys.update(f.alias for f in cls.model_fields.values() if f.alias)
        return keys

    @classmethod
    def from_dict(
        cls, config: Mapping[str, Any], source: str = "mapping"
    ) -> LayoutConfig:
        """
        Create from a mapping, ignoring keys that are not layout settings.

        Params:
            config: Settings keyed by field name or camelCase alias
            source: Description of where the settings came from, for errors

        Returns:
            Validated LayoutConfig

        Raises:
            LayoutConfigError: If a value is missing or out of range
        """
        known = cls._known_keys()
        filtered = {k: v for k, v in config.items() if k in known}
        try:
            return cls.model_validate(filtered)
        except ValidationError as e:
            raise LayoutConfigError(source, str(e)) from e

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> LayoutConfig:
        """
        Create from a YAML file.

        Example YAML:
            label_position: 2
            left_margin: 14
            kwd_position: 25
            cont_indent: 27
            right_margin: 72
            continuation_char: "+"

        Raises:
            LayoutConfigError: If the document is not a mapping or fails validation
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, Mapping):
            raise LayoutConfigError(
                str(path), "top level of the document must be a mapping"
            )
        return cls.from_dict(config, source=str(path))

    @classmethod
    def from_prompter_settings(cls, settings: Mapping[str, Any]) -> LayoutConfig:
        """
        Create from the editor's formatting preferences.

        Params:
            settings: Preferences such as formatCmdPosition or formatRightMargin;
                continuationChar may be given, otherwise "+" is used

        Raises:
            LayoutConfigError: If a preference is missing or out of range
        """
        config: dict[str, Any] = {
            field: settings[name]
            for name, field in PROMPTER_SETTINGS.items()
            if name in settings
        }
        config["continuation_char"] = settings.get(
            "continuationChar", DEFAULT_CONTINUATION_CHAR
        )
        return cls.from_dict(config, source="prompter settings")

