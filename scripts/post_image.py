#!/usr/bin/env python
"""Resize a local image and publish the variants, bypassing the web form."""
from __future__ import annotations

import argparse
import asyncio
import mimetypes
from pathlib import Path

from resizepost.config import PREDEFINED_SIZES, get_settings
from resizepost.main import build_publisher
from resizepost.models import UploadedFile
from resizepost.services.resizer import resize_all
from resizepost.services.validator import validate_upload

_EXTENSIONS = {"image/jpeg": "jpg", "image/png": "png", "image/gif": "gif"}


async def _publish(variants) -> None:
    publisher = build_publisher(get_settings())
    try:
        report = await publisher.publish(variants)
    finally:
        await publisher.close()
    print(report.model_dump_json(indent=2))
    print(f"Uploaded {report.uploaded}/{len(variants)} variants, post={report.post_id}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Resize an image and post it to X/Twitter")
    parser.add_argument("path", type=Path)
    parser.add_argument("--content-type", default=None, help="Defaults to a guess from the file extension")
    parser.add_argument("--dry-run", action="store_true", help="Write the variants to --out-dir instead of posting")
    parser.add_argument("--out-dir", type=Path, default=Path("resized"))
    args = parser.parse_args()

    content_type = args.content_type or mimetypes.guess_type(args.path.name)[0] or ""
    upload = validate_upload(
        UploadedFile(content=args.path.read_bytes(), content_type=content_type, filename=args.path.name)
    )
    variants = resize_all(upload.content, PREDEFINED_SIZES)

    if args.dry_run:
        args.out_dir.mkdir(parents=True, exist_ok=True)
        for variant in variants:
            out = args.out_dir / f"{args.path.stem}_{variant.size}.{_EXTENSIONS[variant.content_type]}"
            out.write_bytes(variant.content)
            print(f"Wrote {out}")
        return

    asyncio.run(_publish(variants))


if __name__ == "__main__":
    main()
