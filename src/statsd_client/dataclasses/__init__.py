# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Frozen dataclass helpers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, fields, replace
from typing import Any, TypedDict, TypeVar, Unpack, cast, dataclass_transform

__all__ = ["FrozenDataclass"]

T = TypeVar("T")


class DataclassOptions(TypedDict, total=False):
    init: bool
    repr: bool
    eq: bool
    kw_only: bool
    slots: bool


@dataclass_transform(frozen_default=True)
def FrozenDataclass(
    **dataclass_kwargs: Unpack[DataclassOptions],
) -> Callable[[type[T]], type[T]]:
    """Dataclass decorator with frozen, slotted defaults.

    Classes may define a ``__pre_init__`` classmethod to normalise inputs
    before construction. It receives every init field as a keyword argument
    (defaults already applied) and returns the mapping passed to the
    generated ``__init__``.

    An ``update(**changes)`` helper is injected; it returns a copy built
    through the normal constructor, so ``__pre_init__`` runs again.
    """

    options: dict[str, Any] = {
        "init": True,
        "repr": True,
        "eq": True,
        "kw_only": False,
        "slots": True,
        **dataclass_kwargs,
        "frozen": True,
    }

    def decorator(cls: type[T]) -> type[T]:
        dataclass_cls = cast(Callable[[type[T]], type[T]], dataclass(**options))(cls)
        _attach_helpers(dataclass_cls)
        return dataclass_cls

    return decorator


def _attach_helpers(cls: type[Any]) -> None:
    pre_init = getattr(cls, "__pre_init__", None)
    if pre_init is not None:
        cls.__init__ = _build_pre_init_wrapper(cls, pre_init, cls.__init__)

    def update(self: object, **changes: object) -> object:
        return replace(cast(Any, self), **changes)

    cls.update = update


def _build_pre_init_wrapper(
    cls: type[Any],
    pre_init: Callable[..., Mapping[str, object]],
    original_init: Callable[..., None],
) -> Callable[..., None]:
    field_defs = [field for field in fields(cls) if field.init]
    field_names = [field.name for field in field_defs]

    def wrapper(self: object, *args: object, **kwargs: object) -> None:
        if len(args) > len(field_defs):
            raise TypeError(
                f"{cls.__name__}() takes {len(field_defs)} positional arguments but {len(args)} were given"
            )
        unexpected = kwargs.keys() - set(field_names)
        if unexpected:
            joined = ", ".join(sorted(unexpected))
            raise TypeError(
                f"{cls.__name__}() got unexpected keyword arguments: {joined}"
            )

        bound: dict[str, object] = dict(zip(field_names, args, strict=False))
        for field_def in field_defs[len(args) :]:
            if field_def.name in kwargs:
                bound[field_def.name] = kwargs[field_def.name]
            elif field_def.default is not MISSING:
                bound[field_def.name] = field_def.default
            elif field_def.default_factory is not MISSING:
                bound[field_def.name] = field_def.default_factory()
            else:
                raise TypeError(
                    f"{cls.__name__}() missing required argument: {field_def.name!r}"
                )

        normalized = pre_init(**bound)
        if not isinstance(normalized, Mapping):
            raise TypeError(f"{cls.__name__}.__pre_init__() must return a mapping")
        original_init(self, **normalized)

    return wrapper
