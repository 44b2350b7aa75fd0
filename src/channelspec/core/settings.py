"""
Connection settings.

``ConnectionSettings`` is the name to value bag a connector is configured
with. Lookups are case-insensitive and fall back to the default value
declared by the bound schema. Setting a value through ``set_parameter``
checks it against that schema straight away.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import SettingsError
from .ir.parameters import ParameterSpec, is_type_compatible, value_in

if TYPE_CHECKING:
    from .ir.schema import ChannelSchema

T = TypeVar("T")


class ConnectionSettings:
    """
    Connection parameters for one connector instance.

    Attributes:
        schema: Optional schema used for defaults and for checking new values
    """

    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        schema: ChannelSchema | None = None,
    ):
        self.schema = schema
        self._parameters: dict[str, Any] = dict(parameters or {})
        self._index: dict[str, str] = {key.casefold(): key for key in self._parameters}

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Read-only view of the explicitly supplied parameters."""
        return MappingProxyType(self._parameters)

    def _find_spec(self, name: str) -> ParameterSpec | None:
        if self.schema is None:
            return None
        return self.schema.get_parameter(name)

    def has_parameter(self, name: str) -> bool:
        """True when the parameter was supplied explicitly."""
        return name.casefold() in self._index

    def get_parameter(self, name: str) -> Any:
        """Return the supplied value, else the schema default, else None."""
        key = self._index.get(name.casefold())
        if key is not None:
            return self._parameters[key]
        spec = self._find_spec(name)
        if spec is not None:
            return spec.default_value
        return None

    def get_typed(self, name: str, expected_type: type[T]) -> T:
        """
        Return a parameter value checked against a Python type.

        Raises:
            SettingsError: If the value is missing or of another type
        """
        value = self.get_parameter(name)
        if not isinstance(value, expected_type):
            raise SettingsError(
                f"The value for the key '{name}' cannot be read as '{expected_type.__name__}'."
            )
        return value

    def set_parameter(self, name: str, value: Any) -> ConnectionSettings:
        """
        Set a parameter, checking it against the bound schema first.

        Raises:
            SettingsError: If the schema does not declare the parameter, or
                the value is None for a required parameter, of the wrong type
                or not among the allowed values
        """
        self._check_value(name, value)
        key = self._index.get(name.casefold(), name)
        self._parameters[key] = value
        self._index[name.casefold()] = key
        return self

    def with_parameter(self, name: str, value: Any) -> ConnectionSettings:
        """Copy of these settings with one more parameter set."""
        return self.copy().set_parameter(name, value)

    def copy(self) -> ConnectionSettings:
        return ConnectionSettings(self._parameters, schema=self.schema)

    def _check_value(self, name: str, value: Any) -> None:
        if self.schema is None:
            return

        spec = self._find_spec(name)
        if spec is None:
            raise SettingsError(f"The parameter '{name}' is not supported by this schema.")

        if value is None:
            if spec.is_required:
                raise SettingsError(f"The value of parameter '{name}' is required by this schema.")
            return

        if not is_type_compatible(spec.data_type, value):
            raise SettingsError(
                f"The value provided for the key '{name}' is not compatible with "
                f"the type '{spec.data_type.value}'."
            )

        if spec.allowed_values and not value_in(value, spec.allowed_values):
            raise SettingsError(f"The value '{value}' is not allowed for the parameter '{name}'.")

    def __getitem__(self, name: str) -> Any:
        return self.get_parameter(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set_parameter(name, value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_parameter(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ConnectionSettings({sorted(self._parameters)!r})"
