"""Base Pydantic model for oauthx.

All oauthx models inherit from :class:`OAuthxBaseModel` so that they share a
single configuration:

- extra="forbid": unknown fields are rejected
- frozen=True: instances are immutable and can be shared across tasks

Example:
    >>> from oauthx.models import OAuthxBaseModel
    >>>
    >>> class Example(OAuthxBaseModel):
    ...     name: str
    >>>
    >>> Example(name="teams").model_dump()
    {'name': 'teams'}
"""

from pydantic import BaseModel, ConfigDict


class OAuthxBaseModel(BaseModel):
    """Base model for all oauthx Pydantic models.

    Configuration objects that must stay mutable override ``model_config``
    locally instead of inheriting the frozen default.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
