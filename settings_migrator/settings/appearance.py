"""
Menu bar appearance configuration models.

Two persisted generations exist:

- AppearanceConfigurationV1: one flat record of shadow, border, tint and
  shape fields applied regardless of system appearance.
- AppearanceConfigurationV2: three PartialAppearanceConfiguration overlays
  (light mode, dark mode, static) plus the shared shape and inset fields.

Both are stored as JSON with camelCase keys, matching what the host
application writes. All V1 fields have defaults because early releases
omitted some of them; a field with the wrong type is still a decode error.

Models:
    RGBAColor: Color components, extended range allowed
    GradientStop: Color at a location in 0...1
    Gradient: Ordered list of gradient stops
    FullShapeInfo / SplitShapeInfo: End cap styles for the shape kinds
    PartialAppearanceConfiguration: Per-appearance overlay
    AppearanceConfigurationV1 / AppearanceConfigurationV2: Persisted records
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShapeKind(IntEnum):
    NONE = 0
    FULL = 1
    SPLIT = 2


class TintKind(IntEnum):
    NONE = 0
    SOLID = 1
    GRADIENT = 2


class EndCap(IntEnum):
    SQUARE = 0
    ROUND = 1


class RGBAColor(_CamelModel):
    """
    Color with red, green, blue and alpha components.

    Components are nominally 0...1, but extended-range colors stored by the
    host fall outside it and are kept as-is.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0


class GradientStop(_CamelModel):
    color: RGBAColor
    location: float


class Gradient(_CamelModel):
    stops: list[GradientStop] = Field(default_factory=list)

    @classmethod
    def default_gradient(cls) -> "Gradient":
        return cls(
            stops=[
                GradientStop(color=RGBAColor(red=0.0, green=0.0, blue=0.0), location=0.0),
                GradientStop(color=RGBAColor(red=1.0, green=1.0, blue=1.0), location=1.0),
            ]
        )


class FullShapeInfo(_CamelModel):
    leading_end_cap: EndCap = EndCap.ROUND
    trailing_end_cap: EndCap = EndCap.ROUND


class SplitShapeInfo(_CamelModel):
    leading: FullShapeInfo = Field(default_factory=FullShapeInfo)
    trailing: FullShapeInfo = Field(default_factory=FullShapeInfo)


class PartialAppearanceConfiguration(_CamelModel):
    """Appearance fields that can differ between light, dark and static modes."""

    has_shadow: bool = False
    has_border: bool = False
    border_color: RGBAColor = Field(default_factory=RGBAColor)
    border_width: float = 1.0
    tint_kind: TintKind = TintKind.NONE
    tint_color: RGBAColor = Field(default_factory=RGBAColor)
    tint_gradient: Gradient = Field(default_factory=Gradient.default_gradient)


class AppearanceConfigurationV1(_CamelModel):
    """Single flat appearance record persisted before 0.11.10."""

    has_shadow: bool = False
    has_border: bool = False
    is_inset: bool = True
    border_color: RGBAColor = Field(default_factory=RGBAColor)
    border_width: float = 1.0
    shape_kind: ShapeKind = ShapeKind.NONE
    full_shape_info: FullShapeInfo = Field(default_factory=FullShapeInfo)
    split_shape_info: SplitShapeInfo = Field(default_factory=SplitShapeInfo)
    tint_kind: TintKind = TintKind.NONE
    tint_color: RGBAColor = Field(default_factory=RGBAColor)
    tint_gradient: Gradient = Field(default_factory=Gradient.default_gradient)

    def partial_configuration(self) -> PartialAppearanceConfiguration:
        """Copy the overlay fields into a partial configuration."""
        return PartialAppearanceConfiguration(
            has_shadow=self.has_shadow,
            has_border=self.has_border,
            border_color=self.border_color,
            border_width=self.border_width,
            tint_kind=self.tint_kind,
            tint_color=self.tint_color,
            tint_gradient=self.tint_gradient,
        )


class AppearanceConfigurationV2(_CamelModel):
    """Per-appearance configuration persisted from 0.11.10 on."""

    light_mode_configuration: PartialAppearanceConfiguration
    dark_mode_configuration: PartialAppearanceConfiguration
    static_configuration: PartialAppearanceConfiguration
    shape_kind: ShapeKind = ShapeKind.NONE
    full_shape_info: FullShapeInfo = Field(default_factory=FullShapeInfo)
    split_shape_info: SplitShapeInfo = Field(default_factory=SplitShapeInfo)
    is_inset: bool = True
    is_dynamic: bool = False

    @classmethod
    def default_configuration(cls) -> "AppearanceConfigurationV2":
        return cls(
            light_mode_configuration=PartialAppearanceConfiguration(
                has_shadow=True,
                border_color=RGBAColor(red=0.0, green=0.0, blue=0.0, alpha=0.2),
                tint_color=RGBAColor(red=1.0, green=1.0, blue=1.0, alpha=0.2),
            ),
            dark_mode_configuration=PartialAppearanceConfiguration(
                border_color=RGBAColor(red=1.0, green=1.0, blue=1.0, alpha=0.2),
                tint_color=RGBAColor(red=0.0, green=0.0, blue=0.0, alpha=0.2),
            ),
            static_configuration=PartialAppearanceConfiguration(),
        )
