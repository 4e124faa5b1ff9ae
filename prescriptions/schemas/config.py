from typing import Any

from pydantic import BaseModel, field_validator


class ConfigValue(BaseModel):
    key: str
    value: str


class ConfigUpdate(BaseModel):
    """
    La valeur est toujours stockée en texte ; les booléens deviennent
    'true' / 'false'.
    """
    value: Any

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value):
        if value is None:
            raise ValueError("Une valeur est requise.")
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
