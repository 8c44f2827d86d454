"""Shared schema base classes."""

from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, as the front-end expects.

    ``to_payload`` drops top-level ``None`` fields except those named in
    ``nullable_keys``, which stay in the payload as ``null``.
    """

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    nullable_keys: ClassVar[frozenset[str]] = frozenset()

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        return {
            key: value
            for key, value in payload.items()
            if value is not None or key in self.nullable_keys
        }
