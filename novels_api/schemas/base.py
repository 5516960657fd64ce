from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):  # type: ignore[misc]
    """
    Base schema for request/response bodies.

    Fields are exposed in camelCase on the wire (``birthPlace``) while
    snake_case names are still accepted on input. Unknown keys are dropped
    so only whitelisted fields ever reach the ORM.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    @classmethod
    def missing_fields(cls, body: dict[str, Any]) -> list[str]:
        """
        Return the wire names of schema fields absent from ``body``.

        Only key presence is checked, ``null`` counts as present. Each field
        may be given either by its wire (camelCase) or attribute name.
        """
        return [
            field.alias or name
            for name, field in cls.model_fields.items()
            if name not in body
            and (field.alias is None or field.alias not in body)
        ]
