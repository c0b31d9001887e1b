"""Reading a plugin's description: localized title, help, presets and control hints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Control(Enum):
    """Kinds of value editors a plugin can ask for."""

    AUTO = "auto"
    SLIDER_MIN_MAX = "sliderMinMax"
    SLIDER = "slider"
    CHECK_BOX = "checkbox"
    LINE_EDIT = "lineedit"
    LABEL = "label"


_CONTROL_BY_TYPE = {
    control.value: control for control in Control if control is not Control.AUTO
}


@dataclass
class ControlParams:
    """How one setting should be edited and described."""

    control: Control = Control.AUTO
    min: int = 0
    max: int = 0
    mult: float = 0.0
    denom: float = 0.0
    compact: bool = True
    title: str = ""
    help: str = ""


@dataclass
class Preset:
    """A named set of setting values."""

    title: str
    data: Any


@dataclass
class PageInfo:
    """Everything needed to present a plugin's settings page."""

    title: str
    help: str = ""
    presets: list[Preset] = field(default_factory=list)
    controls: list[tuple[str, ControlParams]] = field(default_factory=list)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return ""
    return str(value)


def _child_map(data: Any, key: str) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        child = data.get(key)
        if isinstance(child, Mapping):
            return child
    return {}


def _read_one(data: Mapping[str, Any], key: str) -> list[str]:
    if key not in data:
        return []
    child = data[key]
    if isinstance(child, list):
        return [text for text in map(_scalar_text, child) if text]
    text = _scalar_text(child)
    return [text] if text else []


def _read_loc_list(main: Mapping[str, Any], en: Mapping[str, Any], key: str) -> list[str]:
    return _read_one(main, key) or _read_one(en, key)


def _read_loc(main: Mapping[str, Any], en: Mapping[str, Any], key: str, default: str) -> str:
    values = _read_loc_list(main, en, key)
    return "\n".join(values) if values else default


def _parse_control(
    control_data: Mapping[str, Any],
    titles: tuple[Mapping[str, Any], Mapping[str, Any]],
    suffixes: tuple[Mapping[str, Any], Mapping[str, Any]],
    helps: tuple[Mapping[str, Any], Mapping[str, Any]],
) -> tuple[str, ControlParams]:
    control_type = _scalar_text(control_data.get("type", ""))
    control_id = _scalar_text(control_data.get("id", ""))
    params = ControlParams(compact=bool(control_data.get("compact", False)))
    params.control = _CONTROL_BY_TYPE.get(control_type, Control.AUTO)
    if params.control is Control.SLIDER_MIN_MAX:
        params.min = int(control_data.get("min", 0))
        params.max = int(control_data.get("max", 100))
    elif params.control is Control.SLIDER:
        params.mult = float(control_data.get("mult", 10.0))
        params.denom = float(control_data.get("denom", 10.0))

    params.title = _read_loc(*titles, control_id, control_id)
    suffix = _read_loc_list(*suffixes, control_id)
    if suffix:
        params.title += "\n" + "\n".join(suffix)
    params.help = _read_loc(*helps, control_id, "")
    return control_id, params


def parse_page_info(info: Mapping[str, Any], locale_id: str, setting_key: str) -> PageInfo:
    """Build a :class:`PageInfo` from plugin info, preferring ``locale_id`` then en_US."""
    all_locales = _child_map(info, "locales")
    main = _child_map(all_locales, locale_id)
    en = _child_map(all_locales, "en_US")

    page = PageInfo(
        title=_read_loc(main, en, "title", setting_key),
        help=_read_loc(main, en, "help", ""),
    )

    presets_data = info.get("presets")
    if isinstance(presets_data, list):
        names = _read_loc_list(main, en, "presets")
        for i, preset_data in enumerate(presets_data):
            name = names[i] if i < len(names) else f"Preset #{i}"
            page.presets.append(Preset(name, preset_data))

    controls_data = info.get("controls")
    if isinstance(controls_data, list):
        titles = (_child_map(main, "controlsTitles"), _child_map(en, "controlsTitles"))
        suffixes = (_child_map(main, "controlsSuffixes"), _child_map(en, "controlsSuffixes"))
        helps = (_child_map(main, "controlsHelps"), _child_map(en, "controlsHelps"))
        for control_data in controls_data:
            if not isinstance(control_data, Mapping):
                raise TypeError("each control description must be a mapping")
            page.controls.append(_parse_control(control_data, titles, suffixes, helps))

    return page