"""
Results of a form mutation.

Every mutator returns exactly one of these. ``ValidationFailed`` and
``PersistFailed`` are rendered back into the originating form; ``Redirect``
is turned into an HTTP redirect by the view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class FormState:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None


@dataclass
class ValidationFailed:
    errors: Dict[str, List[str]]
    message: str


@dataclass
class PersistFailed:
    message: str
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class Redirect:
    path: str


Outcome = Union[ValidationFailed, PersistFailed, Redirect]
