"""Theme preset model."""

from typing import Any

from sqlalchemy import Boolean, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from panel_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class ThemePreset(Base, UUIDMixin, TimestampMixin):
    """Named bundle of colors, typography and layout options."""

    __tablename__ = "theme_presets"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    colors: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    typography: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    layout: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # At most one row may carry is_default = true.
    __table_args__ = (
        Index(
            "uq_theme_presets_single_default",
            "is_default",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    def __repr__(self) -> str:
        return f"<ThemePreset {self.name}{' (default)' if self.is_default else ''}>"
