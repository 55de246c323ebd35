"""Data models for Mojang API responses."""

import base64
import binascii
import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """Basic user information."""

    id: str  # UUID without dashes
    name: str


class SkinMetadata(BaseModel):
    """Metadata relating to the skin, such as the model used for the skin."""

    model: str


class SkinData(BaseModel):
    """Information relating to the skin of a user."""

    url: str
    metadata: Optional[SkinMetadata] = None


class CapeData(BaseModel):
    """Information relating to the cape of a user."""

    url: str


class Textures(BaseModel):
    """Texture information for the user. ``cape`` is None without a cape."""

    model_config = ConfigDict(populate_by_name=True)

    skin: SkinData = Field(alias="SKIN")
    cape: Optional[CapeData] = Field(default=None, alias="CAPE")


class TexturesEntry(BaseModel):
    """The decoded value of a ``textures`` profile property."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: int  # When the entry was served, in ms
    profile_id: str = Field(alias="profileId")
    profile_name: str = Field(alias="profileName")
    textures: Textures


class ProfileProperty(BaseModel):
    """A property associated with the user. Only textures are supported."""

    name: str
    value: TexturesEntry

    @field_validator("value", mode="before")
    @classmethod
    def decode_value(cls, value):
        # The API sends the textures entry as base64 encoded JSON
        if not isinstance(value, str):
            return value
        try:
            return json.loads(base64.b64decode(value, validate=True))
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid textures value: {e}")


class Profile(BaseModel):
    """More complex user information."""

    id: str
    name: str
    properties: list[ProfileProperty] = Field(min_length=1, max_length=1)
    legacy: bool = False

    def textures(self) -> Textures:
        """Return texture information of the user."""
        return self.properties[0].value.textures

    def slim_model(self) -> bool:
        """Return True if the user's skin uses the slim (Alex) model."""
        metadata = self.textures().skin.metadata
        return metadata is not None and metadata.model == "slim"


class UsernameEntry(BaseModel):
    """A username change entry.

    ``changed_to_at`` is None for the original name of the account.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    changed_to_at: Optional[int] = Field(default=None, alias="changedToAt")


class Stats(BaseModel):
    """Statistics on the sales of Mojang's games."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    last24h: int
    sale_velocity_per_seconds: float = Field(alias="saleVelocityPerSeconds")
