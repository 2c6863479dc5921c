"""Filter selection state and the toggle/only/all interaction model."""

from .checkbox import CheckboxGroup, CheckboxMode, Zone, hover_mode, label_mode
from .component_filters import ComponentFilterStore
from .debounce import DEFAULT_DELAY_MS, Debouncer
from .instance_filters import InstanceFilterStore
from .search import ValueSearch

__all__ = [
    "CheckboxGroup",
    "CheckboxMode",
    "ComponentFilterStore",
    "DEFAULT_DELAY_MS",
    "Debouncer",
    "InstanceFilterStore",
    "ValueSearch",
    "Zone",
    "hover_mode",
    "label_mode",
]
