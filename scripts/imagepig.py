#!/usr/bin/env python3
"""Call the ImagePig API from the shell and save the resulting image.

Usage:
  python scripts/imagepig.py default "pig"
  python scripts/imagepig.py flux "pig" --proportion wide --out output/pig.jpeg
  python scripts/imagepig.py faceswap https://imagepig.com/static/jane.jpeg mona-lisa.jpeg
  python scripts/imagepig.py outpaint jane.jpeg "dress" --bottom 500

Notes:
- Reads IMAGEPIG_API_KEY (and optionally IMAGEPIG_API_URL), loading .env from
  the working directory when present.
- Image arguments naming an existing file are sent inline; anything else is
  passed through as a URL.
"""

from __future__ import annotations

import argparse
import base64
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from imagepig_api import ImagePig, ImagePigError, InlineBytes, RemoteReference
from imagepig_api.core.contracts import ImageInput

PROPORTION_CHOICES = ["landscape", "portrait", "square", "wide"]
FACTOR_CHOICES = [2, 4, 8]
DEFAULT_OUT_DIR = "output"


def _image_arg(value: str) -> ImageInput:
    path = Path(value).expanduser()
    if path.is_file():
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise argparse.ArgumentTypeError(f"cannot read {value}: {exc.strerror or exc}") from exc
        return InlineBytes(base64.b64encode(raw))
    return RemoteReference(value)


def _add_negative(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--negative", default=None, help="Negative prompt")


def _add_common(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument("--api-url", default=default, help="Override the API base URL")
    parser.add_argument("--out", default=default, help="Output file (default: output/<operation>.<ext>)")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False if default is None else default,
        help="Log HTTP activity",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ImagePig: generate and edit images.")
    _add_common(parser, None)
    # SUPPRESS keeps a value given before the sub-command from being reset by it.
    common = argparse.ArgumentParser(add_help=False)
    _add_common(common, argparse.SUPPRESS)
    sub = parser.add_subparsers(dest="operation", required=True)

    def command(name: str, help_text: str) -> argparse.ArgumentParser:
        return sub.add_parser(name, parents=[common], help=help_text)

    for name in ("default", "xl"):
        cmd = command(name, f"{name} text-to-image generation")
        cmd.add_argument("prompt")
        _add_negative(cmd)

    cmd = command("flux", "Flux text-to-image generation")
    cmd.add_argument("prompt")
    cmd.add_argument("--proportion", choices=PROPORTION_CHOICES, default=None)

    cmd = command("faceswap", "Swap the face of source onto target")
    cmd.add_argument("source", type=_image_arg)
    cmd.add_argument("target", type=_image_arg)

    cmd = command("upscale", "Upscale an image")
    cmd.add_argument("image", type=_image_arg)
    cmd.add_argument("--factor", type=int, choices=FACTOR_CHOICES, default=None)

    cmd = command("cutout", "Remove the background of an image")
    cmd.add_argument("image", type=_image_arg)

    cmd = command("replace", "Replace the selected object")
    cmd.add_argument("image", type=_image_arg)
    cmd.add_argument("select_prompt")
    cmd.add_argument("prompt")
    _add_negative(cmd)

    cmd = command("outpaint", "Extend an image beyond its borders")
    cmd.add_argument("image", type=_image_arg)
    cmd.add_argument("prompt")
    _add_negative(cmd)
    for side in ("top", "right", "bottom", "left"):
        cmd.add_argument(f"--{side}", type=int, default=None)
    return parser


def _dispatch(client: ImagePig, args: argparse.Namespace):
    op = args.operation
    if op == "default":
        return client.default(args.prompt, args.negative)
    if op == "xl":
        return client.xl(args.prompt, args.negative)
    if op == "flux":
        return client.flux(args.prompt, args.proportion)
    if op == "faceswap":
        return client.faceswap(args.source, args.target)
    if op == "upscale":
        return client.upscale(args.image, args.factor)
    if op == "cutout":
        return client.cutout(args.image)
    if op == "replace":
        return client.replace(args.image, args.select_prompt, args.prompt, args.negative)
    if op == "outpaint":
        return client.outpaint(
            args.image,
            args.prompt,
            args.negative,
            top=args.top,
            right=args.right,
            bottom=args.bottom,
            left=args.left,
        )
    raise ValueError(f"Unknown operation '{op}'")


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    load_dotenv()

    api_key = os.getenv("IMAGEPIG_API_KEY")
    if not api_key:
        print("IMAGEPIG_API_KEY is required.", file=sys.stderr)
        return 1
    client = ImagePig(api_key, args.api_url or os.getenv("IMAGEPIG_API_URL"))

    try:
        response = _dispatch(client, args)
    except ValueError as exc:
        parser.error(str(exc))
    except ImagePigError as exc:
        print(f"{args.operation} failed: {exc}", file=sys.stderr)
        return 1

    try:
        if args.out:
            out_path = Path(args.out).expanduser()
        else:
            out_path = Path(DEFAULT_OUT_DIR) / f"{args.operation}.{response.suggested_extension()}"
        out_path.parent.mkdir(parents=True, exist_ok=True)
        saved = response.save(out_path)
    except ImagePigError as exc:
        print(f"{args.operation} failed: {exc}", file=sys.stderr)
        return 1

    print(saved)
    duration = response.duration()
    if duration is not None:
        print(f"  took {duration.total_seconds():.2f}s")
    seed = response.seed()
    if seed is not None:
        print(f"  seed {seed}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
