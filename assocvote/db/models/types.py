"""Column helpers shared by the models."""
import uuid

from sqlalchemy import Column, Enum, String


def generate_uuid() -> str:
    return str(uuid.uuid4())


def uuid_pk() -> Column:
    """UUID string primary key, generated client-side."""
    return Column(String(36), primary_key=True, default=generate_uuid)


def enum_column(enum_cls, **kwargs) -> Column:
    """Store an enum by its wire value rather than its member name."""
    return Column(
        Enum(
            enum_cls,
            values_callable=lambda members: [member.value for member in members],
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        **kwargs
    )
