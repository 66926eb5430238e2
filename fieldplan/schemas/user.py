"""Owner display schemas."""

from fieldplan.schemas.base import BaseSchema


class OwnerProfile(BaseSchema):
    """Display attributes of a schedule owner, resolved by the identity directory."""

    id: int
    name: str
    phone: str | None = None
