# epidash/data_processing/filter_state.py

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

FILTER_FIELDS = ("state", "disease", "week")


def _normalize(value: Optional[str]) -> Optional[str]:
    # An empty selection means "no constraint", never an empty-string match.
    return value if value else None


class FilterState:
    """
    The current user-selected constraints of one view.

    Every field is independently optional; an absent field (None) imposes no
    constraint. The values given at construction are the initial values that
    `reset()` restores.
    """
    def __init__(self, state: Optional[str] = None, disease: Optional[str] = None, week: Optional[str] = None):
        self._initial: Dict[str, Optional[str]] = {
            "state": _normalize(state),
            "disease": _normalize(disease),
            "week": _normalize(week),
        }
        self._values: Dict[str, Optional[str]] = dict(self._initial)

    @property
    def state(self) -> Optional[str]:
        return self._values["state"]

    @property
    def disease(self) -> Optional[str]:
        return self._values["disease"]

    @property
    def week(self) -> Optional[str]:
        return self._values["week"]

    def get(self, field: str) -> Optional[str]:
        self._check_field(field)
        return self._values[field]

    def select(self, field: str, value: Optional[str]) -> None:
        """Sets one field and leaves the others untouched."""
        self._check_field(field)
        self._values[field] = _normalize(value)
        logger.debug(f"Filter '{field}' set to {self._values[field]!r}.")

    def reset(self) -> None:
        """Restores every field to its initial value."""
        self._values = dict(self._initial)
        logger.debug("Filters reset to initial values.")

    def as_dict(self) -> Dict[str, str]:
        """Returns only the present (non-absent) fields."""
        return {k: v for k, v in self._values.items() if v is not None}

    def snapshot(self) -> Mapping[str, str]:
        """An immutable copy of the present fields, safe to hand to a fetch."""
        return MappingProxyType(self.as_dict())

    def _check_field(self, field: str) -> None:
        if field not in FILTER_FIELDS:
            raise KeyError(f"Unknown filter field '{field}'. Expected one of {FILTER_FIELDS}.")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FilterState):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"FilterState({', '.join(f'{k}={v!r}' for k, v in self._values.items())})"
