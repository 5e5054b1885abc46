"""Build wire parameters for each ImagePig endpoint."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from .contracts import ImageInput, Proportion, UpscalingFactor, as_image_input


ImageArg = Union[ImageInput, str, bytes, bytearray]


def _start(extra_params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    # Extras go in first so that builder-managed keys always overwrite them.
    return dict(extra_params or {})


def _require_prompt(value: str, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string.")
    return value


def _add_image(params: Dict[str, Any], prefix: str, image: ImageArg) -> None:
    value = as_image_input(image)
    # The image field is builder-managed: drop both variants before writing one.
    params.pop(f"{prefix}_url", None)
    params.pop(f"{prefix}_data", None)
    value.prepare(prefix, params)


def _margin(value: Optional[int], name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer.")
    return value


def text_params(
    prompt: str,
    negative_prompt: Optional[str] = None,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    params = _start(extra_params)
    params["positive_prompt"] = _require_prompt(prompt, "positive_prompt")
    params["negative_prompt"] = negative_prompt or ""
    return params


def flux_params(
    prompt: str,
    proportion: Optional[Union[Proportion, str]] = None,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    chosen = Proportion.parse(proportion) if proportion is not None else Proportion.LANDSCAPE
    params = _start(extra_params)
    params["positive_prompt"] = _require_prompt(prompt, "positive_prompt")
    params["proportion"] = chosen.wire_value
    return params


def faceswap_params(
    source_image: ImageArg,
    target_image: ImageArg,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    params = _start(extra_params)
    _add_image(params, "source_image", source_image)
    _add_image(params, "target_image", target_image)
    return params


def upscale_params(
    image: ImageArg,
    factor: Optional[Union[UpscalingFactor, int]] = None,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    chosen = UpscalingFactor.parse(factor) if factor is not None else UpscalingFactor.TWO
    params = _start(extra_params)
    _add_image(params, "image", image)
    params["upscaling_factor"] = chosen.wire_value
    return params


def cutout_params(
    image: ImageArg,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    params = _start(extra_params)
    _add_image(params, "image", image)
    return params


def replace_params(
    image: ImageArg,
    select_prompt: str,
    positive_prompt: str,
    negative_prompt: Optional[str] = None,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    params = _start(extra_params)
    _add_image(params, "image", image)
    params["select_prompt"] = _require_prompt(select_prompt, "select_prompt")
    params["positive_prompt"] = _require_prompt(positive_prompt, "positive_prompt")
    params["negative_prompt"] = negative_prompt or ""
    return params


def outpaint_params(
    image: ImageArg,
    positive_prompt: str,
    negative_prompt: Optional[str] = None,
    top: Optional[int] = None,
    right: Optional[int] = None,
    bottom: Optional[int] = None,
    left: Optional[int] = None,
    extra_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    margins = {
        "top": _margin(top, "top"),
        "right": _margin(right, "right"),
        "bottom": _margin(bottom, "bottom"),
        "left": _margin(left, "left"),
    }
    params = _start(extra_params)
    _add_image(params, "image", image)
    params["positive_prompt"] = _require_prompt(positive_prompt, "positive_prompt")
    params["negative_prompt"] = negative_prompt or ""
    params.update(margins)
    return params
