from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    user: Any
    info: Any = None


@dataclass(frozen=True)
class Failure:
    info: Any = None


@dataclass(frozen=True)
class Error:
    cause: Any


Outcome = Union[Success, Failure, Error]
