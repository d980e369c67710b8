from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np

from libstack.errors import InvalidArgumentError, InvalidOptionError


def _is_bool(val: Any) -> bool:
    return isinstance(val, (bool, np.bool_))


@dataclass(frozen=True)
class StackOptions:
    """
    Options controlling the views produced by a stack iterator.

    Attributes:
        readonly: whether produced views reject writes. Defaults to True.
            Writable views require a writable source array.
    """

    readonly: bool = True

    @property
    def writable(self) -> bool:
        return not self.readonly

    @classmethod
    def from_mapping(
        cls,
        options: Optional[Union[StackOptions, Mapping[str, Any]]] = None,
        **kwargs: Any,
    ) -> StackOptions:
        """
        Validates user options.

        Keyword arguments take precedence over entries of `options`. Keys
        that are not recognized are ignored.
        """
        if isinstance(options, StackOptions):
            if not kwargs:
                return options
            options = {"readonly": options.readonly}
        elif options is None:
            options = {}
        elif not isinstance(options, Mapping):
            raise InvalidArgumentError(
                "invalid argument. Options argument must be a mapping. "
                f"Value: `{options!r}`."
            )

        merged = {**options, **kwargs}

        if "readonly" not in merged:
            return cls()

        readonly = merged["readonly"]
        if not _is_bool(readonly):
            raise InvalidOptionError(
                "invalid option. `readonly` option must be a boolean. "
                f"Option: `{readonly!r}`."
            )
        return cls(readonly=bool(readonly))
