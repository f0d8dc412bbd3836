"""Per-call conversion state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from formanschema.typing.models.forman import FormanField

ARRAY_SEGMENT = "[]"


class ConversionContext(BaseModel):
    """Immutable state threaded through one top-level conversion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: tuple[str, ...] = ()
    fetch_params: tuple[str, ...] = ()

    def child(self, segment: str) -> ConversionContext:
        """Return the context of a sub-field.

        Args:
            segment (str): Property name, or `ARRAY_SEGMENT` for array elements.

        Returns:
            ConversionContext: Context located one level deeper.
        """
        return self.model_copy(update={"path": (*self.path, segment)})

    def with_fetch_params(self, *params: str) -> ConversionContext:
        """Return a context whose RPC stores are templated with `params`."""
        return self.model_copy(update={"fetch_params": (*self.fetch_params, *params)})

    @property
    def location(self) -> str:
        """Return a readable location such as `parameters.items[].name`."""
        if not self.path:
            return "<root>"
        return ".".join(self.path).replace(f".{ARRAY_SEGMENT}", ARRAY_SEGMENT)


class DomainBinding(BaseModel):
    """Producer side of a domain: the owner field and its dependent fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str
    owner: str
    store: list[FormanField] = Field(default_factory=list)
    location: str
