"""Response envelope shared by every endpoint: {success, message?, <resource>}."""

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool = True


class MessageResponse(Envelope):
    """Success or error body that carries only a message."""

    message: str
