"""System setting model: category-keyed, versioned key/value store."""

from enum import StrEnum
from typing import Any

from sqlalchemy import Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from panel_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class DataType(StrEnum):
    """Declared type of a setting value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"

    @classmethod
    def infer(cls, value: Any) -> "DataType":
        """Pick the data type matching a Python value."""
        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int | float):
            return cls.NUMBER
        if isinstance(value, dict | list):
            return cls.JSON
        return cls.STRING


class SystemSetting(Base, UUIDMixin, TimestampMixin):
    """A single setting identified by ``(category, key)``.

    ``version`` is the mapper's version counter: SQLAlchemy sets it to 1 on
    insert, bumps it on every UPDATE and guards the UPDATE with
    ``WHERE version = <loaded version>``.
    """

    __tablename__ = "system_settings"

    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(100), nullable=False)

    value: Mapped[Any] = mapped_column(JSONType, nullable=True)
    default_value: Mapped[Any] = mapped_column(JSONType, nullable=True)

    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_encrypted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    data_type: Mapped[str] = mapped_column(
        SAEnum(
            DataType,
            name="setting_data_type",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        default=DataType.STRING,
        nullable=False,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (UniqueConstraint("category", "key", name="uq_system_settings_category_key"),)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<SystemSetting {self.category}.{self.key} v{self.version}>"
