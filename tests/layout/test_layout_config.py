"""
Tests for LayoutConfig validation and its loaders.
"""

import os
import tempfile

import pytest
from pydantic import ValidationError

from clprompter.exceptions import LayoutConfigError
from clprompter.layout.config import LayoutConfig

SOURCE_COLUMNS = {
    "label_position": 2,
    "left_margin": 14,
    "kwd_position": 25,
    "cont_indent": 27,
    "right_margin": 72,
    "continuation_char": "+",
}


class TestLayoutConfig:
    """Test direct construction and validation."""

    def test_valid_config(self, source_config):
        """Test the fixture values round through the model."""
        assert source_config.left_margin == 14
        assert source_config.case == "*NONE"

    def test_case_normalized(self):
        """Test case options are uppercased and given their asterisk."""
        assert LayoutConfig(**SOURCE_COLUMNS, case="upper").case == "*UPPER"
        assert LayoutConfig(**SOURCE_COLUMNS, case="*lower").case == "*LOWER"
        with pytest.raises(ValidationError):
            LayoutConfig(**SOURCE_COLUMNS, case="*TITLE")

    def test_field_ranges(self):
        """Test values outside their ranges are rejected."""
        for field, bad in [
            ("left_margin", -1),
            ("cont_indent", -1),
            ("kwd_position", -1),
            ("continuation_char", "++"),
            ("continuation_char", ""),
        ]:
            with pytest.raises(ValidationError):
                LayoutConfig(**{**SOURCE_COLUMNS, field: bad})

    def test_margin_must_leave_room(self):
        """Test cross-field column checks."""
        with pytest.raises(ValidationError, match="leaves no room"):
            LayoutConfig(**{**SOURCE_COLUMNS, "right_margin": 28})
        with pytest.raises(ValidationError, match="greater than left_margin"):
            LayoutConfig(**{**SOURCE_COLUMNS, "left_margin": 80, "right_margin": 80, "cont_indent": 3})

    def test_narrowest_continuation_area(self):
        """Test a continuation line must hold an opened and closed comment."""
        with pytest.raises(ValidationError, match="leaves no room"):
            LayoutConfig(**{**SOURCE_COLUMNS, "cont_indent": 30, "right_margin": 32})
        with pytest.raises(ValidationError, match="leaves no room"):
            LayoutConfig(**{**SOURCE_COLUMNS, "cont_indent": 30, "right_margin": 35})
        config = LayoutConfig(**{**SOURCE_COLUMNS, "cont_indent": 30, "right_margin": 36})
        assert config.right_margin == 36

    def test_first_column_as_zero(self):
        """Test column 0 is accepted for label, command and continuation columns."""
        config = LayoutConfig(
            **{**SOURCE_COLUMNS, "label_position": 0, "left_margin": 0, "cont_indent": 0}
        )
        assert config.cont_indent == 0

    def test_unknown_field_rejected(self):
        """Test direct construction forbids unknown settings."""
        with pytest.raises(ValidationError):
            LayoutConfig(**SOURCE_COLUMNS, tab_width=4)

    def test_frozen(self, source_config):
        """Test configs are immutable."""
        with pytest.raises(ValidationError):
            source_config.right_margin = 80


class TestLoaders:
    """Test dict, YAML and editor-preference loaders."""

    def test_from_dict_aliases_and_extra_keys(self):
        """Test camelCase names are accepted and unrelated keys ignored."""
        config = LayoutConfig.from_dict(
            {
                "labelPosition": 2,
                "leftMargin": 14,
                "kwdPosition": 25,
                "contIndent": 27,
                "rightMargin": 72,
                "continuationChar": "+",
                "theme": "dark",
            }
        )
        assert config.kwd_position == 25
        assert config.continuation_char == "+"

    def test_from_dict_missing_field(self):
        """Test a missing setting is reported as LayoutConfigError."""
        settings = dict(SOURCE_COLUMNS)
        del settings["right_margin"]
        with pytest.raises(LayoutConfigError, match="Field required") as exc_info:
            LayoutConfig.from_dict(settings, source="test settings")
        assert exc_info.value.source == "test settings"

    def test_from_yaml(self):
        """Test loading from a YAML file."""
        yaml_content = """
label_position: 2
left_margin: 14
kwd_position: 25
cont_indent: 27
right_margin: 72
continuation_char: "+"
case: upper
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            yaml_path = f.name

        try:
            config = LayoutConfig.from_yaml(yaml_path)
            assert config.right_margin == 72
            assert config.case == "*UPPER"
        finally:
            os.unlink(yaml_path)

    def test_from_yaml_not_a_mapping(self):
        """Test a YAML list is rejected with the file as source."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("- 2\n- 14\n")
            yaml_path = f.name

        try:
            with pytest.raises(LayoutConfigError, match="must be a mapping") as exc_info:
                LayoutConfig.from_yaml(yaml_path)
            assert exc_info.value.source == yaml_path
        finally:
            os.unlink(yaml_path)

    def test_from_yaml_invalid_values(self):
        """Test validation failures from a file name the file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("left_margin: 14\nright_margin: 72\n")
            yaml_path = f.name

        try:
            with pytest.raises(LayoutConfigError, match="Invalid layout configuration"):
                LayoutConfig.from_yaml(yaml_path)
        finally:
            os.unlink(yaml_path)

    def test_from_prompter_settings(self):
        """Test editor preferences map onto the layout fields."""
        config = LayoutConfig.from_prompter_settings(
            {
                "formatLabelPosition": 2,
                "formatCmdPosition": 14,
                "formatKwdPosition": 25,
                "formatContinuePosition": 27,
                "formatRightMargin": 70,
                "formatCase": "*LOWER",
            }
        )
        assert config.left_margin == 14
        assert config.cont_indent == 27
        assert config.right_margin == 70
        assert config.continuation_char == "+"
        assert config.case == "*LOWER"
