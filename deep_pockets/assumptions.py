"""Assumption parsing, clamping and default fallback.

User edits arrive as text. They are parsed once, here, and clamped to the
range of their input widget, so the calculation core only ever sees floats.
An edit that cannot be parsed is stored as ``None`` and the formula later
substitutes its documented default.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from .models import (
    Assumption,
    BudgetCategory,
    InputType,
    PercentageDistribution,
    PercentageSlider,
    TextField,
    YearSlider,
)

logger = logging.getLogger(__name__)

_STRIP_CHARS = ('%', '$', ',', '_')


def parse_number(text: Union[str, float, int, None]) -> Optional[float]:
    """Parse user text into a non-negative finite float.

    Accepts bare numbers as well as decorated input such as ``"7.5%"`` or
    ``"$1,200"``. Returns ``None`` for anything else, including negative,
    NaN and infinite values.

    Example:
        >>> parse_number(' 7.25% ')
        7.25
        >>> parse_number('abc') is None
        True
    """
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        number = float(text)
    else:
        cleaned = str(text).strip()
        for char in _STRIP_CHARS:
            cleaned = cleaned.replace(char, '')
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def apply_edit(assumption: Assumption, text: Union[str, float, int, None]) -> Assumption:
    """Return a copy of ``assumption`` holding the parsed and clamped edit."""
    parsed = parse_number(text)
    if parsed is None:
        logger.debug("Could not parse %r for assumption '%s'", text, assumption.title)
        return Assumption(assumption.title, None, assumption.input_type, assumption.description)
    return Assumption(
        assumption.title,
        assumption.input_type.clamp(parsed),
        assumption.input_type,
        assumption.description,
    )


def input_type_from_config(raw: Optional[Mapping[str, Any]]) -> InputType:
    """Build an input variant from its seed representation.

    Raises:
        ValueError: If ``kind`` is not one of the known variants
    """
    if not raw:
        return TextField()
    kind = raw.get('kind', 'text_field')
    if kind == 'percentage_slider':
        return PercentageSlider(step=float(raw.get('step', 1.0)))
    if kind == 'year_slider':
        return YearSlider(min=int(raw['min']), max=int(raw['max']))
    if kind == 'text_field':
        return TextField()
    if kind == 'percentage_distribution':
        return PercentageDistribution()
    raise ValueError(f"Unknown assumption input type '{kind}'")


def input_type_to_config(input_type: InputType) -> Dict[str, Any]:
    if isinstance(input_type, PercentageSlider):
        return {'kind': 'percentage_slider', 'step': input_type.step}
    if isinstance(input_type, YearSlider):
        return {'kind': 'year_slider', 'min': input_type.min, 'max': input_type.max}
    if isinstance(input_type, PercentageDistribution):
        return {'kind': 'percentage_distribution'}
    return {'kind': 'text_field'}


def assumption_from_config(raw: Mapping[str, Any]) -> Assumption:
    """Create an assumption from a seed entry, parsing its text value."""
    template = Assumption(
        title=str(raw['title']),
        value=None,
        input_type=input_type_from_config(raw.get('input_type')),
        description=raw.get('description'),
    )
    return apply_edit(template, raw.get('value'))


def resolve(category: BudgetCategory, title: str, defaults: Mapping[str, float]) -> float:
    """Value of ``title`` on ``category``, falling back to ``defaults[title]``."""
    found = category.assumption(title)
    if found is None or found.value is None:
        default = defaults[title]
        logger.debug(
            "Using default %s=%s for category '%s'", title, default, category.id
        )
        return default
    return found.value
