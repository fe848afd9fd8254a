"""A shared store for setting groups, kept in sync with the editor's variables and options."""

from __future__ import annotations

import copy
import dataclasses
import enum
import logging
import threading
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from novide.from_value import (
    parse_bool,
    parse_f32,
    parse_optional,
    parse_string,
    parse_u64,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

VARIABLE_PREFIX = "neovide_"

UpdateHandler = Callable[["Settings", Any, bool], None]
ReaderHandler = Callable[["Settings"], Any]


class NeovimClient(Protocol):
    """The subset of the editor API that settings synchronisation needs."""

    async def get_var(self, name: str) -> Any: ...

    async def set_var(self, name: str, value: Any) -> Any: ...

    async def get_option(self, name: str) -> Any: ...


class LocationKind(enum.Enum):
    NEOVIDE_GLOBAL = "neovide_global"
    NEOVIM_OPTION = "neovim_option"


@dataclass(frozen=True)
class SettingLocation:
    """Where a setting lives on the editor side."""

    kind: LocationKind
    name: str

    @classmethod
    def neovide_global(cls, name: str) -> SettingLocation:
        """A global variable carrying the application prefix."""
        return cls(LocationKind.NEOVIDE_GLOBAL, name)

    @classmethod
    def neovim_option(cls, name: str) -> SettingLocation:
        """A global editor option."""
        return cls(LocationKind.NEOVIM_OPTION, name)


class Settings:
    """Holds one value per type plus update and read handlers per location."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._values: dict[type, Any] = {}
        self._updaters: dict[SettingLocation, UpdateHandler] = {}
        self._readers: dict[SettingLocation, ReaderHandler] = {}

    def set_setting_handlers(
        self,
        location: SettingLocation,
        update_func: UpdateHandler,
        reader_func: ReaderHandler,
    ) -> None:
        with self._lock:
            self._updaters[location] = update_func
            self._readers[location] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of ``value`` under its type."""
        with self._lock:
            self._values[type(value)] = copy.copy(value)

    def get(self, cls: type[T]) -> T:
        """Return a copy of the stored value of type ``cls``."""
        with self._lock:
            try:
                value = self._values[cls]
            except KeyError:
                raise KeyError(
                    f"Trying to retrieve a settings object that doesn't exist: {cls!r}"
                ) from None
        if not isinstance(value, cls):
            raise TypeError("Attempted to extract a settings object of the wrong type")
        return copy.copy(value)

    def setting_locations(self) -> list[SettingLocation]:
        with self._lock:
            return list(self._updaters)

    def _updater(self, location: SettingLocation) -> UpdateHandler:
        with self._lock:
            return self._updaters[location]

    def _reader(self, location: SettingLocation) -> ReaderHandler:
        with self._lock:
            return self._readers[location]

    async def read_initial_values(self, nvim: NeovimClient) -> None:
        """Pull every registered setting from the editor.

        Globals that the editor does not know are pushed to it with the
        local value instead.
        """
        for location in self.setting_locations():
            name = location.name
            if location.kind is LocationKind.NEOVIDE_GLOBAL:
                variable_name = f"{VARIABLE_PREFIX}{name}"
                try:
                    value = await nvim.get_var(variable_name)
                except Exception as error:  # noqa: BLE001 - any failure means "unset"
                    logger.debug("Initial value load failed for %s: %s", name, error)
                    local = self._reader(location)(self)
                    if local is not None:
                        try:
                            await nvim.set_var(variable_name, local)
                        except Exception as set_error:
                            raise RuntimeError(
                                f"Could not set initial value for {name}"
                            ) from set_error
                else:
                    self._updater(location)(self, value, False)
            else:
                try:
                    value = await nvim.get_option(name)
                except Exception as error:  # noqa: BLE001
                    logger.debug("Initial value load failed for %s: %s", name, error)
                else:
                    self._updater(location)(self, value, False)

    @staticmethod
    def _split_arguments(arguments: Sequence[Any]) -> tuple[str, Any]:
        if len(arguments) < 2:
            raise ValueError("expected a name and a value")
        name, value = arguments[0], arguments[1]
        if not isinstance(name, str):
            raise TypeError(f"setting name must be a string, got {name!r}")
        return name, value

    def handle_setting_changed_notification(self, arguments: Sequence[Any]) -> None:
        name, value = self._split_arguments(arguments)
        self._updater(SettingLocation.neovide_global(name))(self, value, True)

    def handle_option_changed_notification(self, arguments: Sequence[Any]) -> None:
        name, value = self._split_arguments(arguments)
        self._updater(SettingLocation.neovim_option(name))(self, value, True)

    def register(self, group: Any) -> None:
        """Let a setting group register itself."""
        group.register(self)


_PARSERS: dict[type, Callable[[Any, Any], Any]] = {
    bool: parse_bool,
    int: parse_u64,
    float: parse_f32,
    str: parse_string,
}

_TYPE_NAMES: dict[str, type] = {cls.__name__: cls for cls in _PARSERS}


def _resolve_name(name: str) -> Any:
    name = name.strip()
    if name in _TYPE_NAMES:
        return _TYPE_NAMES[name]
    raise TypeError(f"unsupported setting type {name!r}")


def _resolve_string_hint(hint: str) -> tuple[Any, bool]:
    text = hint.strip()
    for prefix in ("Optional[", "typing.Optional["):
        if text.startswith(prefix) and text.endswith("]"):
            return _resolve_name(text[len(prefix):-1]), True
    parts = [part.strip() for part in text.split("|")]
    non_none = [part for part in parts if part != "None"]
    if len(non_none) != 1:
        raise TypeError(f"unsupported setting type {hint!r}")
    return _resolve_name(non_none[0]), len(parts) > 1


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    if isinstance(hint, str):
        return _resolve_string_hint(hint)
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return hint, False


def _field_parser(field: dataclasses.Field) -> Callable[[Any, Any], Any]:
    custom = field.metadata.get("parser")
    try:
        inner, optional = _unwrap_optional(field.type)
    except TypeError:
        if custom is None:
            raise
        return custom
    base = custom or _PARSERS.get(inner)
    if base is None:
        raise TypeError(
            f"no parser for setting field {field.name!r} of type {field.type!r}"
        )
    if optional:
        default = inner()
        return lambda current, value: parse_optional(current, value, base, default)
    return base


def register_setting_group(
    settings: Settings,
    group_cls: type,
    on_change: Callable[[str, Any], None] | None = None,
) -> None:
    """Register every field of the dataclass ``group_cls`` with ``settings``.

    A field with ``option`` metadata maps to that editor option; the others map
    to prefixed global variables named after the field. ``on_change`` receives
    the field name and new value for changes notified by the editor.
    """
    settings.set(group_cls())

    for field in dataclasses.fields(group_cls):
        parser = _field_parser(field)
        option = field.metadata.get("option")
        location = (
            SettingLocation.neovim_option(option)
            if option
            else SettingLocation.neovide_global(field.name)
        )

        def update(
            target: Settings,
            value: Any,
            send_changed_event: bool,
            _name: str = field.name,
            _parser: Callable[[Any, Any], Any] = parser,
        ) -> None:
            current = target.get(group_cls)
            new_value = _parser(getattr(current, _name), value)
            target.set(dataclasses.replace(current, **{_name: new_value}))
            if send_changed_event and on_change is not None:
                on_change(_name, new_value)

        def read(target: Settings, _name: str = field.name) -> Any:
            return getattr(target.get(group_cls), _name)

        settings.set_setting_handlers(location, update, read)